from pydantic import BaseModel, Field
import datetime as dt
from typing import Optional
from app.db.models.schedules import ShiftType


class ShiftRequirementBase(BaseModel):
    shift_type: ShiftType
    cooks: int = Field(default=0, ge=0)
    bartenders: int = Field(default=0, ge=0)
    barbacks: int = Field(default=0, ge=0)
    notes: Optional[str] = None


class ShiftRequirementCreate(ShiftRequirementBase):
    # resolved to a business-timezone day by the route
    date: str


class ShiftRequirementUpdate(BaseModel):
    cooks: Optional[int] = Field(default=None, ge=0)
    bartenders: Optional[int] = Field(default=None, ge=0)
    barbacks: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None
    is_filled: Optional[bool] = None


class ShiftRequirementResponse(ShiftRequirementBase):
    id: int
    date: dt.date
    is_filled: bool
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True
