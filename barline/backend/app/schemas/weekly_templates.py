from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from app.db.models.schedules import ShiftType


class WeeklyTemplateBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    day_of_week: int = Field(ge=0, le=6)  # 0=Sunday
    shift_type: ShiftType
    cooks: int = Field(default=0, ge=0)
    bartenders: int = Field(default=0, ge=0)
    barbacks: int = Field(default=0, ge=0)
    notes: Optional[str] = None
    is_active: bool = True


class WeeklyTemplateCreate(WeeklyTemplateBase):
    pass


class WeeklyTemplateUpdate(BaseModel):
    cooks: Optional[int] = Field(default=None, ge=0)
    bartenders: Optional[int] = Field(default=None, ge=0)
    barbacks: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None
    is_active: Optional[bool] = None


class WeeklyTemplateResponse(WeeklyTemplateBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
