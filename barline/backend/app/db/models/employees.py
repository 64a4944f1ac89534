from typing import Optional
from sqlalchemy import Integer, String, Text, Float, Date, DateTime, Boolean, func, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from datetime import date, datetime
from enum import Enum
from app.db.database import Base


class EmployeeRole(str, Enum):
    COOK = "cook"
    BARTENDER = "bartender"
    BARBACK = "barback"


class Employees(Base):
    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    role: Mapped[EmployeeRole] = mapped_column(SQLEnum(EmployeeRole, name="employee_role_enum", values_callable=lambda e: [m.value for m in e]), nullable=False, index=True)
    hourly_wage: Mapped[float] = mapped_column(Float, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    hire_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
