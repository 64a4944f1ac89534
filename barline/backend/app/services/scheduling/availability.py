"""
Availability checking utilities.
Determines if an employee can work a given date/shift.
"""

from datetime import date
from typing import Optional

from .types import AvailabilityEntry, ShiftType


# No recorded entry means the employee can be scheduled
DEFAULT_AVAILABLE = True


class AvailabilityIndex:
    """
    Lookup of recorded availability, built once per generation run.

    A whole-day entry (shift_type None) sets the default for both shifts of
    that day; a shift-specific entry overrides it for its own shift only,
    whichever order the entries were loaded in.
    """

    def __init__(self):
        self._whole_day: dict[tuple[int, date], bool] = {}
        self._by_shift: dict[tuple[int, date, ShiftType], bool] = {}

    @classmethod
    def build(cls, entries: list[AvailabilityEntry]) -> "AvailabilityIndex":
        index = cls()
        for entry in entries:
            index.add(entry)
        return index

    def add(self, entry: AvailabilityEntry) -> None:
        if entry.shift_type is None:
            self._whole_day[(entry.employee_id, entry.date)] = entry.is_available
        else:
            self._by_shift[(entry.employee_id, entry.date, entry.shift_type)] = entry.is_available

    def lookup(self, employee_id: int, day: date, shift_type: ShiftType) -> Optional[bool]:
        """Recorded availability for the slot, or None if nothing applies."""
        specific = self._by_shift.get((employee_id, day, shift_type))
        if specific is not None:
            return specific
        return self._whole_day.get((employee_id, day))

    def is_available(self, employee_id: int, day: date, shift_type: ShiftType) -> bool:
        recorded = self.lookup(employee_id, day, shift_type)
        return DEFAULT_AVAILABLE if recorded is None else recorded

    def __len__(self) -> int:
        return len(self._whole_day) + len(self._by_shift)
