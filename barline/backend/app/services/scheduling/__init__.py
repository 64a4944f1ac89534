"""
Scheduling service package.

Usage:
    from datetime import date
    from app.services.scheduling import generate_schedule

    # Load, assign and store in one call
    summary = generate_schedule(db, date(2024, 1, 8), date(2024, 1, 14))

    # Or load context separately for inspection/testing
    from app.services.scheduling import load_generation_context, generate_schedule_from_context

    context = load_generation_context(db, date(2024, 1, 8), date(2024, 1, 14))
    batch = generate_schedule_from_context(context)
"""

from .types import (
    Employee,
    EmployeeRole,
    AvailabilityEntry,
    ShiftRequirement,
    ShiftType,
    StaffingCounts,
    TemplateEntry,
    ExistingAssignment,
    BusinessHours,
    DayHours,
    Schedule,
    GenerationContext,
    AssignmentBatch,
)
from .timezone import InvalidDateError, get_business_timezone, parse_business_date
from .shift_times import ShiftTimeError, calculate_shift_times
from .data_loader import load_generation_context
from .engine import generate_assignments
from .reconcile import reconcile_schedules
from .generator import GenerationSummary, generate_schedule, generate_schedule_from_context

__all__ = [
    # Types
    "Employee",
    "EmployeeRole",
    "AvailabilityEntry",
    "ShiftRequirement",
    "ShiftType",
    "StaffingCounts",
    "TemplateEntry",
    "ExistingAssignment",
    "BusinessHours",
    "DayHours",
    "Schedule",
    "GenerationContext",
    "AssignmentBatch",
    "GenerationSummary",
    # Errors
    "InvalidDateError",
    "ShiftTimeError",
    # Main entry points
    "generate_schedule",
    "generate_schedule_from_context",
    # Lower-level functions
    "load_generation_context",
    "generate_assignments",
    "reconcile_schedules",
    "calculate_shift_times",
    "parse_business_date",
    "get_business_timezone",
]
