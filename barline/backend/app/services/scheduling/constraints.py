"""
Constraint checking utilities for generated batches.
Handles the double-booking invariant and load spread.
"""

from collections import Counter
from datetime import date

from .types import Schedule, ShiftType


def find_double_bookings(schedules: list[Schedule]) -> list[tuple[int, date, ShiftType]]:
    """(employee, date, shift) keys that appear more than once."""
    seen = Counter(s.key for s in schedules)
    return [key for key, count in seen.items() if count > 1]


def count_assignments(schedules: list[Schedule]) -> dict[int, int]:
    """employee_id -> number of shifts in the batch"""
    return dict(Counter(s.employee_id for s in schedules))


def fairness_spread(counts: dict[int, int]) -> int:
    """Difference between the busiest and least busy employee."""
    if not counts:
        return 0
    return max(counts.values()) - min(counts.values())

