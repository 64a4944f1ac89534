from pydantic import BaseModel, Field
from datetime import datetime, date
from typing import Optional
from app.db.models.employees import EmployeeRole


class EmployeeBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str
    phone: Optional[str] = None
    role: EmployeeRole
    hourly_wage: float = Field(ge=0)
    hire_date: Optional[date] = None
    notes: Optional[str] = None


class EmployeeCreate(EmployeeBase):
    pass


class EmployeeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[EmployeeRole] = None
    hourly_wage: Optional[float] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
    hire_date: Optional[date] = None
    notes: Optional[str] = None


class EmployeeResponse(EmployeeBase):
    id: int
    is_active: bool
    deleted_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EmployeeSummary(BaseModel):
    id: int
    name: str
    role: EmployeeRole

    class Config:
        from_attributes = True
