"""
Data loader for scheduling service.
Fetches all relevant data from the database and converts to internal types.
"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy import select, and_
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.models.app_settings import AppSettings, HOURS_KEY, TIMEZONE_KEY
from app.db.models.employee_availability import EmployeeAvailability
from app.db.models.employees import Employees
from app.db.models.schedules import Schedules
from app.db.models.shift_requirements import ShiftRequirements
from app.db.models.weekly_schedule_templates import WeeklyScheduleTemplates

from .shift_times import ShiftTimeError, default_business_hours, parse_business_hours
from .timezone import InvalidDateError, get_business_timezone
from .types import (
    AvailabilityEntry,
    BusinessHours,
    Employee,
    EmployeeRole,
    ExistingAssignment,
    GenerationContext,
    ShiftRequirement,
    ShiftType,
    StaffingCounts,
    TemplateEntry,
)


logger = logging.getLogger(__name__)


def load_employees(db: Session) -> list[Employee]:
    """Load active, non-deleted employees in roster order (name, then id)."""

    stmt = select(Employees).where(
        and_(
            Employees.is_active == True,
            Employees.deleted_at.is_(None),
        )
    ).order_by(Employees.name, Employees.id)
    rows = db.execute(stmt).scalars().all()

    return [
        Employee(
            id=e.id,
            name=e.name,
            role=EmployeeRole(e.role.value),
            is_active=e.is_active,
        )
        for e in rows
    ]


def load_shift_requirements(db: Session, start: date, end: date) -> list[ShiftRequirement]:
    """Load explicit per-date requirements in range."""

    stmt = select(ShiftRequirements).where(
        and_(
            ShiftRequirements.date >= start,
            ShiftRequirements.date <= end,
        )
    ).order_by(ShiftRequirements.date, ShiftRequirements.shift_type)
    rows = db.execute(stmt).scalars().all()

    return [
        ShiftRequirement(
            date=r.date,
            shift_type=ShiftType(r.shift_type.value),
            counts=StaffingCounts(cooks=r.cooks, bartenders=r.bartenders, barbacks=r.barbacks),
        )
        for r in rows
    ]


def load_template_entries(db: Session, template_name: Optional[str] = None) -> list[TemplateEntry]:
    """Load active weekly template rows, optionally for one template."""

    conditions = [WeeklyScheduleTemplates.is_active == True]
    if template_name:
        conditions.append(WeeklyScheduleTemplates.name == template_name)

    stmt = select(WeeklyScheduleTemplates).where(and_(*conditions)).order_by(
        WeeklyScheduleTemplates.name,
        WeeklyScheduleTemplates.day_of_week,
        WeeklyScheduleTemplates.shift_type,
    )
    rows = db.execute(stmt).scalars().all()

    return [
        TemplateEntry(
            name=t.name,
            day_of_week=t.day_of_week,
            shift_type=ShiftType(t.shift_type.value),
            counts=StaffingCounts(cooks=t.cooks, bartenders=t.bartenders, barbacks=t.barbacks),
            is_active=t.is_active,
        )
        for t in rows
    ]


def load_availability_entries(db: Session, start: date, end: date) -> list[AvailabilityEntry]:
    """Load recorded availability whose date falls in range, oldest row first."""

    stmt = select(EmployeeAvailability).where(
        and_(
            EmployeeAvailability.date >= start,
            EmployeeAvailability.date <= end,
        )
    ).order_by(EmployeeAvailability.id)
    rows = db.execute(stmt).scalars().all()

    return [
        AvailabilityEntry(
            employee_id=a.employee_id,
            date=a.date,
            shift_type=ShiftType(a.shift_type.value) if a.shift_type else None,
            is_available=a.is_available,
        )
        for a in rows
    ]


def load_existing_assignments(db: Session, start: date, end: date) -> list[ExistingAssignment]:
    """Load schedule rows already in range (for double-booking guards)."""

    stmt = select(Schedules.employee_id, Schedules.date, Schedules.shift_type, Employees.role).join(
        Employees, Schedules.employee_id == Employees.id
    ).where(
        and_(
            Schedules.date >= start,
            Schedules.date <= end,
        )
    )
    rows = db.execute(stmt).all()

    return [
        ExistingAssignment(
            employee_id=employee_id,
            date=row_date,
            shift_type=ShiftType(shift_type.value),
            role=EmployeeRole(role.value),
        )
        for employee_id, row_date, shift_type, role in rows
    ]


def _get_setting(db: Session, key: str) -> Optional[str]:
    stmt = select(AppSettings.value).where(AppSettings.key == key)
    return db.execute(stmt).scalar_one_or_none()


def load_business_hours(db: Session) -> BusinessHours:
    """Business hours from settings, or the 10:00-02:00 default when unset."""
    raw = _get_setting(db, HOURS_KEY)
    if raw is None:
        return default_business_hours()
    try:
        return parse_business_hours(raw)
    except ValueError as e:
        # json.JSONDecodeError is a ValueError too
        raise ShiftTimeError(f"Stored business hours are invalid: {e}") from e


def load_timezone_name(db: Session) -> str:
    return _get_setting(db, TIMEZONE_KEY) or settings.COMPANY_TIMEZONE


def load_generation_context(
    db: Session,
    start: date,
    end: date,
    template_name: Optional[str] = None,
    overwrite_existing: bool = False,
) -> GenerationContext:
    """
    Load all data needed to generate schedules for a date range.

    When overwriting, rows in range are about to be cleared, so they are not
    handed to the engine as existing assignments.
    """
    if start > end:
        raise InvalidDateError(f"Start date {start} is after end date {end}")

    timezone_name = load_timezone_name(db)
    # fail early on a bad stored timezone
    get_business_timezone(timezone_name)

    existing = [] if overwrite_existing else load_existing_assignments(db, start, end)

    context = GenerationContext(
        start_date=start,
        end_date=end,
        employees=load_employees(db),
        explicit_requirements=load_shift_requirements(db, start, end),
        template_entries=load_template_entries(db, template_name),
        availability_entries=load_availability_entries(db, start, end),
        business_hours=load_business_hours(db),
        timezone_name=timezone_name,
        template_name=template_name,
        existing_assignments=existing,
    )
    logger.debug(
        f"Loaded {len(context.employees)} employees, {len(context.explicit_requirements)} requirements, "
        f"{len(context.template_entries)} template rows, {len(context.availability_entries)} availability "
        f"entries and {len(existing)} existing assignments for {start}..{end}"
    )
    return context
