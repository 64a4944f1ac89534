import logging

from fastapi import FastAPI

from app.core.config import settings
from app.api.routes import (
    auth,
    availability,
    employees,
    schedules,
    settings as settings_routes,
    shift_requirements,
    users,
    weekly_templates,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Barline API", version="0.1.0")

app.include_router(auth.router, prefix="/api/v1")
app.include_router(users.router, prefix="/api/v1")
app.include_router(employees.router, prefix="/api/v1")
app.include_router(availability.router, prefix="/api/v1")
app.include_router(shift_requirements.router, prefix="/api/v1")
app.include_router(weekly_templates.router, prefix="/api/v1")
app.include_router(schedules.router, prefix="/api/v1")
app.include_router(settings_routes.router, prefix="/api/v1")


@app.get("/health")
def health_check():
    return {"status": "ok"}
