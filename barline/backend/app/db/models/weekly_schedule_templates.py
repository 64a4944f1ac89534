from typing import Optional
from datetime import datetime
from sqlalchemy import Boolean, DateTime, Integer, String, Text, Index, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.database import Base
from app.db.models.schedules import ShiftType, shift_type_enum


class WeeklyScheduleTemplates(Base):
    __tablename__ = "weekly_schedule_templates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)  # 0=Sunday .. 6=Saturday
    shift_type: Mapped[ShiftType] = mapped_column(shift_type_enum, nullable=False)
    cooks: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    bartenders: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    barbacks: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("name", "day_of_week", "shift_type", name="uix_weekly_templates_name_day_shift"),
        Index("ix_weekly_templates_day_shift", "day_of_week", "shift_type"),
    )
