from typing import Optional
import datetime as dt
from sqlalchemy import Boolean, Date, DateTime, Integer, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.database import Base
from app.db.models.schedules import ShiftType, shift_type_enum


class ShiftRequirements(Base):
    __tablename__ = "shift_requirements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    shift_type: Mapped[ShiftType] = mapped_column(shift_type_enum, nullable=False)
    cooks: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    bartenders: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    barbacks: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_filled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("date", "shift_type", name="uix_shift_requirements_date_shift"),
    )
