"""
Reconciles a proposed batch with the schedules table.

Default mode is safe to re-run: rows that already exist for the same
employee/date/shift are skipped. Overwrite mode clears the date range first
and then inserts everything. Either way the unique constraint on
(employee_id, date, shift_type) is the last word: a concurrent insert that
wins the race turns into a skip, never a failed run.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from sqlalchemy import and_, delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.db.models.schedules import Schedules, ShiftType as ShiftTypeColumn

from .timezone import to_date_string
from .types import Schedule


logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    created: list[Schedules] = field(default_factory=list)
    skipped: list[Schedule] = field(default_factory=list)
    deleted: int = 0
    warnings: list[str] = field(default_factory=list)


def find_existing_schedule(db: Session, proposed: Schedule) -> Optional[Schedules]:
    stmt = select(Schedules).where(
        and_(
            Schedules.employee_id == proposed.employee_id,
            Schedules.date == proposed.date,
            Schedules.shift_type == ShiftTypeColumn(proposed.shift_type.value),
        )
    )
    return db.execute(stmt).scalars().first()


def clear_schedules(db: Session, start: date, end: date) -> int:
    """Delete every schedule row dated within start..end."""
    result = db.execute(
        delete(Schedules).where(
            and_(
                Schedules.date >= start,
                Schedules.date <= end,
            )
        )
    )
    return result.rowcount or 0


def _insert_schedule(db: Session, proposed: Schedule) -> Optional[Schedules]:
    """Insert inside a savepoint; None if the unique constraint rejected it."""
    row = Schedules(
        employee_id=proposed.employee_id,
        date=proposed.date,
        shift_type=ShiftTypeColumn(proposed.shift_type.value),
        start_time=proposed.start_time,
        end_time=proposed.end_time,
    )
    try:
        with db.begin_nested():
            db.add(row)
    except IntegrityError:
        return None
    return row


def reconcile_schedules(
    db: Session,
    proposed: list[Schedule],
    start: date,
    end: date,
    overwrite_existing: bool = False,
) -> ReconcileResult:
    """
    Write a proposed batch to the session (caller commits).

    Args:
        db: Database session
        proposed: Schedules from the assignment engine
        start, end: The generated date range (inclusive)
        overwrite_existing: Clear the range first instead of skipping duplicates

    Returns:
        ReconcileResult with created rows, skipped proposals and warnings
    """
    result = ReconcileResult()

    if overwrite_existing:
        result.deleted = clear_schedules(db, start, end)
        logger.info(f"Cleared {result.deleted} schedules between {start} and {end}")

    for item in proposed:
        existing = find_existing_schedule(db, item)

        if existing and not overwrite_existing:
            result.skipped.append(item)
            continue

        if existing:
            # written by someone else after the range was cleared
            existing.start_time = item.start_time
            existing.end_time = item.end_time
            result.created.append(existing)
            continue

        row = _insert_schedule(db, item)
        if row is None:
            logger.warning(
                f"Schedule for employee {item.employee_id} on {item.date} ({item.shift_type.value}) "
                f"was created concurrently; skipping"
            )
            result.skipped.append(item)
            result.warnings.append(
                f"Employee {item.employee_id} was already scheduled for "
                f"{to_date_string(item.date)} {item.shift_type.value} shift; skipped"
            )
            continue
        result.created.append(row)

    db.flush()
    return result
