from pydantic import BaseModel
import datetime as dt
from typing import Optional
from app.db.models.schedules import ShiftType


class AvailabilityBase(BaseModel):
    employee_id: int
    shift_type: Optional[ShiftType] = None
    is_available: bool = True
    notes: Optional[str] = None


class AvailabilityCreate(AvailabilityBase):
    # resolved to a business-timezone day by the route
    date: str


class AvailabilityUpdate(BaseModel):
    is_available: Optional[bool] = None
    notes: Optional[str] = None


class AvailabilityResponse(AvailabilityBase):
    id: int
    date: dt.date
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True
