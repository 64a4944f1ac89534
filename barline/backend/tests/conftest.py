import os

# Settings() reads these at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from datetime import date, time
from zoneinfo import ZoneInfo

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from app.api.deps import get_db
from app.core.security import hash_password, issue_access_token
from app.db.database import Base
from app.db import models  # noqa: F401  registers every table on Base.metadata
from app.db.models.employees import Employees, EmployeeRole as EmployeeRoleColumn
from app.db.models.users import Users
from app.main import app
from app.services.scheduling.types import (
    BusinessHours,
    DayHours,
    DAY_NAMES,
    Employee,
    EmployeeRole,
)


DENVER = ZoneInfo("America/Denver")


def get_test_monday() -> date:
    # fixed Monday for deterministic tests
    return date(2024, 1, 8)


def standard_hours() -> BusinessHours:
    # 10:00 - 02:00 every day
    day = DayHours(open=time(10, 0), close=time(2, 0))
    return BusinessHours(days={name: day for name in DAY_NAMES})


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite needs its own transaction handling for SAVEPOINT to work
    @event.listens_for(engine, "connect")
    def _connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def roster() -> list[Employee]:
    # 2 cooks, 2 bartenders, 1 barback, in name order
    return [
        Employee(id=1, name="Alice", role=EmployeeRole.COOK),
        Employee(id=2, name="Bob", role=EmployeeRole.COOK),
        Employee(id=3, name="Cara", role=EmployeeRole.BARTENDER),
        Employee(id=4, name="Dan", role=EmployeeRole.BARTENDER),
        Employee(id=5, name="Eve", role=EmployeeRole.BARBACK),
    ]


@pytest.fixture
def hours() -> BusinessHours:
    return standard_hours()


def add_employee(db, name: str, role: str, **kwargs):
    employee = Employees(
        name=name,
        email=kwargs.pop("email", f"{name.lower().replace(' ', '.')}@barline.test"),
        role=EmployeeRoleColumn(role),
        hourly_wage=kwargs.pop("hourly_wage", 18.0),
        **kwargs,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


@pytest.fixture
def stored_roster(db):
    # 2 cooks, 1 bartender, 1 barback
    return [
        add_employee(db, "Alice", "cook"),
        add_employee(db, "Bob", "cook"),
        add_employee(db, "Cara", "bartender"),
        add_employee(db, "Eve", "barback"),
    ]


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(db):
    user = Users(email="manager@barline.test", name="Manager", password_hash=hash_password("correct-horse"))
    db.add(user)
    db.commit()
    db.refresh(user)
    return {"Authorization": f"Bearer {issue_access_token(user.id, user.email)}"}
