from typing import Optional
from sqlalchemy import Integer, Date, DateTime, Text, ForeignKey, Enum as SQLEnum, Index, UniqueConstraint, func
import datetime as dt
from sqlalchemy.orm import Mapped, mapped_column, relationship
from enum import Enum
from app.db.database import Base
from app.db.models.employees import Employees


class ShiftType(str, Enum):
    OPEN = "open"
    CLOSE = "close"


# shared by every table keyed on a shift label
shift_type_enum = SQLEnum(ShiftType, name="shift_type_enum", values_callable=lambda e: [m.value for m in e])


class Schedules(Base):
    __tablename__ = "schedules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    employee_id: Mapped[int] = mapped_column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    shift_type: Mapped[ShiftType] = mapped_column(shift_type_enum, nullable=False)
    start_time: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    employee: Mapped[Employees] = relationship(lazy="joined")

    __table_args__ = (
        UniqueConstraint("employee_id", "date", "shift_type", name="uix_schedules_employee_date_shift"),
        Index("ix_schedules_date_shift", "date", "shift_type"),
    )
