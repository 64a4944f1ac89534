from pydantic import BaseModel
import datetime as dt
from typing import List, Optional
from app.db.models.schedules import ShiftType
from app.schemas.employees import EmployeeSummary


class ScheduleCreate(BaseModel):
    employee_id: int
    # resolved to a business-timezone day by the route
    date: str
    shift_type: ShiftType
    notes: Optional[str] = None


class ScheduleUpdate(BaseModel):
    employee_id: Optional[int] = None
    date: Optional[str] = None
    shift_type: Optional[ShiftType] = None
    notes: Optional[str] = None


class ScheduleResponse(BaseModel):
    id: int
    employee_id: int
    date: dt.date
    shift_type: ShiftType
    start_time: dt.datetime
    end_time: dt.datetime
    notes: Optional[str]
    employee: EmployeeSummary
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True


class AutoGenerateRequest(BaseModel):
    # strings so "2024-01-08" and full ISO timestamps both go through parse_business_date
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    template_name: Optional[str] = None
    overwrite_existing: bool = False


class AutoGenerateResponse(BaseModel):
    success: bool
    created: int
    skipped: int
    warnings: List[str]
    schedules: List[ScheduleResponse]
