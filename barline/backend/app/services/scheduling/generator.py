"""
Schedule generator - main orchestration layer.

This module provides the high-level API for generating schedules,
combining data loading, assignment and persistence into a single flow.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.models.schedules import Schedules

from .availability import AvailabilityIndex
from .constraints import count_assignments, fairness_spread, find_double_bookings
from .data_loader import load_generation_context
from .engine import generate_assignments
from .reconcile import reconcile_schedules
from .requirements import resolve_requirements
from .shift_times import make_shift_time_calculator
from .timezone import date_range, get_business_timezone
from .types import AssignmentBatch, GenerationContext


logger = logging.getLogger(__name__)


@dataclass
class GenerationSummary:
    created: int
    skipped: int
    warnings: list[str] = field(default_factory=list)
    schedules: list[Schedules] = field(default_factory=list)

    @property
    def success(self) -> bool:
        # shortfalls are reported as warnings, never as failure
        return True


def generate_schedule_from_context(context: GenerationContext) -> AssignmentBatch:
    """
    Generate assignments from a pre-loaded context.

    Useful for testing or when you want to manipulate the context
    before assigning. Nothing is written.

    Raises:
        InvalidDateError: start_date after end_date
        ShiftTimeError: business hours missing or inconsistent for a needed date
    """
    dates = date_range(context.start_date, context.end_date)
    requirements = resolve_requirements(
        dates,
        context.explicit_requirements,
        context.template_entries,
        context.template_name,
    )
    tz = get_business_timezone(context.timezone_name)

    batch = generate_assignments(
        dates=dates,
        requirements=requirements,
        availability=AvailabilityIndex.build(context.availability_entries),
        employees=context.employees,
        existing_assignments=context.existing_assignments,
        shift_times=make_shift_time_calculator(context.business_hours, tz),
    )

    duplicates = find_double_bookings(batch.schedules)
    if duplicates:
        raise RuntimeError(f"Assignment run double-booked {duplicates}")

    logger.info(
        f"Proposed {len(batch.schedules)} shifts for {len(count_assignments(batch.schedules))} employees, "
        f"{sum(s.duration_hours for s in batch.schedules):.1f} hours, fairness spread "
        f"{fairness_spread(batch.assignment_counts)}"
    )

    return batch


def generate_schedule(
    db: Session,
    start_date: date,
    end_date: date,
    template_name: Optional[str] = None,
    overwrite_existing: bool = False,
) -> GenerationSummary:
    """
    Generate and store schedules for an inclusive date range.

    Main entry point for auto-scheduling. This function:
    1. Loads roster, requirements, templates, availability and settings
    2. Runs the assignment engine
    3. Reconciles the proposals with stored schedules and commits

    Args:
        db: Database session
        start_date, end_date: Business-timezone dates, inclusive
        template_name: Weekly template to fall back on (default: lowest active name)
        overwrite_existing: Replace schedules already in the range

    Returns:
        GenerationSummary with counts, warnings and the stored rows

    Raises:
        InvalidDateError, ShiftTimeError: bad input, nothing is written
        SQLAlchemyError: store failure, the session is rolled back

    Example:
        summary = generate_schedule(db, date(2024, 1, 8), date(2024, 1, 14))
        for warning in summary.warnings:
            print(warning)
    """
    context = load_generation_context(db, start_date, end_date, template_name, overwrite_existing)
    batch = generate_schedule_from_context(context)

    try:
        result = reconcile_schedules(db, batch.schedules, start_date, end_date, overwrite_existing)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to store schedules for {start_date}..{end_date}")
        raise

    for row in result.created:
        db.refresh(row)

    logger.info(
        f"Generated schedules for {start_date}..{end_date}: created={len(result.created)} "
        f"skipped={len(result.skipped)} warnings={len(batch.warnings) + len(result.warnings)}"
    )

    return GenerationSummary(
        created=len(result.created),
        skipped=len(result.skipped),
        warnings=batch.warnings + result.warnings,
        schedules=result.created,
    )
