"""
Internal data types for scheduling logic.
decoupled from SQLAlchemy models for cleaner logic.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Optional


class ShiftType(str, Enum):
    OPEN = "open"
    CLOSE = "close"


class EmployeeRole(str, Enum):
    COOK = "cook"
    BARTENDER = "bartender"
    BARBACK = "barback"


# Processing order within a date
SHIFT_ORDER = [ShiftType.OPEN, ShiftType.CLOSE]
ROLE_ORDER = [EmployeeRole.COOK, EmployeeRole.BARTENDER, EmployeeRole.BARBACK]


@dataclass
class Employee:
    id: int
    name: str
    role: EmployeeRole
    is_active: bool = True


@dataclass
class AvailabilityEntry:
    employee_id: int
    date: date
    shift_type: Optional[ShiftType]  # None means whole day
    is_available: bool


@dataclass(frozen=True)
class StaffingCounts:
    """Required headcount per role for one date/shift."""
    cooks: int = 0
    bartenders: int = 0
    barbacks: int = 0

    def for_role(self, role: EmployeeRole) -> int:
        if role == EmployeeRole.COOK:
            return self.cooks
        if role == EmployeeRole.BARTENDER:
            return self.bartenders
        return self.barbacks


@dataclass
class ShiftRequirement:
    date: date
    shift_type: ShiftType
    counts: StaffingCounts


@dataclass
class TemplateEntry:
    name: str
    day_of_week: int  # 0=Sunday .. 6=Saturday
    shift_type: ShiftType
    counts: StaffingCounts
    is_active: bool = True


@dataclass(frozen=True)
class ExistingAssignment:
    employee_id: int
    date: date
    shift_type: ShiftType
    role: Optional[EmployeeRole] = None


@dataclass(frozen=True)
class DayHours:
    open: time
    close: time


DAY_NAMES = ["sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]


@dataclass
class BusinessHours:
    """Opening and closing clock times keyed by lowercase day name."""
    days: dict[str, DayHours]

    def for_date(self, day: date) -> Optional[DayHours]:
        # date.weekday() is 0=Monday; DAY_NAMES starts on Sunday
        return self.days.get(DAY_NAMES[(day.weekday() + 1) % 7])


@dataclass
class Schedule:
    """A generated assignment (proposed until reconciled with the store)."""
    employee_id: int
    date: date
    shift_type: ShiftType
    start_time: datetime
    end_time: datetime

    @property
    def key(self) -> tuple[int, date, ShiftType]:
        return (self.employee_id, self.date, self.shift_type)

    @property
    def duration_hours(self) -> float:
        delta = self.end_time.astimezone(timezone.utc) - self.start_time.astimezone(timezone.utc)
        return delta.total_seconds() / 3600


@dataclass
class GenerationContext:
    """All data needed to generate schedules for one date range."""
    start_date: date
    end_date: date
    employees: list[Employee]
    explicit_requirements: list[ShiftRequirement]
    template_entries: list[TemplateEntry]
    availability_entries: list[AvailabilityEntry]
    business_hours: BusinessHours
    timezone_name: str
    template_name: Optional[str] = None
    existing_assignments: list[ExistingAssignment] = field(default_factory=list)


@dataclass
class AssignmentBatch:
    """Output of the assignment engine, not yet persisted."""
    schedules: list[Schedule]
    warnings: list[str] = field(default_factory=list)
    assignment_counts: dict[int, int] = field(default_factory=dict)  # employee_id -> shifts this run
