"""
Assignment engine.

Strategy, per date (ascending), per shift present that date (open, close),
per role (cook, bartender, barback):
1. Stored rows for the date/shift/role count toward the requirement first
2. Eligible pool: active employees of the role, not already scheduled for
   the date/shift, not marked unavailable
3. Stable sort by how many shifts each has been given so far this run
4. Take as many as the requirement asks for; shortfalls become warnings
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Optional

from .availability import AvailabilityIndex
from .requirements import RequirementsMap
from .shift_times import ShiftTimeCalculator
from .timezone import to_date_string
from .types import (
    AssignmentBatch,
    Employee,
    EmployeeRole,
    ExistingAssignment,
    Schedule,
    ShiftType,
    ROLE_ORDER,
    SHIFT_ORDER,
)


logger = logging.getLogger(__name__)

ROLE_PLURALS = {
    EmployeeRole.COOK: "cooks",
    EmployeeRole.BARTENDER: "bartenders",
    EmployeeRole.BARBACK: "barbacks",
}


def shortfall_warning(day: date, shift_type: ShiftType, role: EmployeeRole, needed: int, available: int) -> str:
    return (
        f"Not enough {ROLE_PLURALS[role]} for {to_date_string(day)} {shift_type.value} shift. "
        f"Needed: {needed}, Available: {available}"
    )


class AssignmentRun:
    """
    One generation run. Holds the fairness counter, so every call to
    generate_assignments() starts from zero and runs never share state.
    """

    def __init__(
        self,
        employees: list[Employee],
        availability: AvailabilityIndex,
        shift_times: ShiftTimeCalculator,
        existing_assignments: Optional[list[ExistingAssignment]] = None,
    ):
        self.availability = availability
        self.shift_times = shift_times
        self.schedules: list[Schedule] = []
        self.warnings: list[str] = []

        self.employees_by_role: dict[EmployeeRole, list[Employee]] = defaultdict(list)
        for emp in employees:
            if emp.is_active:
                self.employees_by_role[emp.role].append(emp)

        self.assignment_counts: dict[int, int] = {emp.id: 0 for emp in employees}

        role_by_id = {emp.id: emp.role for emp in employees}

        # (date, shift) -> employee ids already booked
        self.booked: dict[tuple[date, ShiftType], set[int]] = defaultdict(set)
        # (date, shift, role) -> stored rows already counting toward the requirement
        self.filled: dict[tuple[date, ShiftType, EmployeeRole], int] = defaultdict(int)
        for existing in existing_assignments or []:
            self.booked[(existing.date, existing.shift_type)].add(existing.employee_id)
            role = existing.role or role_by_id.get(existing.employee_id)
            if role is not None:
                self.filled[(existing.date, existing.shift_type, role)] += 1

    def run(self, dates: list[date], requirements: RequirementsMap) -> AssignmentBatch:
        for day in dates:
            day_requirements = requirements.get(day, {})
            for shift_type in SHIFT_ORDER:
                counts = day_requirements.get(shift_type)
                if counts is None:
                    continue
                for role in ROLE_ORDER:
                    self._fill_slot(day, shift_type, role, counts.for_role(role))

        logger.info(
            f"Assignment run proposed {len(self.schedules)} shifts "
            f"across {len(dates)} days with {len(self.warnings)} shortfalls"
        )
        return AssignmentBatch(
            schedules=self.schedules,
            warnings=self.warnings,
            assignment_counts=dict(self.assignment_counts),
        )

    def eligible_pool(self, day: date, shift_type: ShiftType, role: EmployeeRole) -> list[Employee]:
        """Employees who could take this slot, least-assigned first."""
        booked = self.booked[(day, shift_type)]
        pool = [
            emp for emp in self.employees_by_role[role]
            if emp.id not in booked
            and self.availability.is_available(emp.id, day, shift_type)
        ]
        # sorted() is stable: equal counts keep roster order
        return sorted(pool, key=lambda emp: self.assignment_counts.get(emp.id, 0))

    def _fill_slot(self, day: date, shift_type: ShiftType, role: EmployeeRole, needed: int) -> None:
        needed = max(0, needed - self.filled[(day, shift_type, role)])
        if needed <= 0:
            return

        pool = self.eligible_pool(day, shift_type, role)
        for emp in pool[:needed]:
            self._assign(emp, day, shift_type)

        if len(pool) < needed:
            self.warnings.append(shortfall_warning(day, shift_type, role, needed, len(pool)))

    def _assign(self, employee: Employee, day: date, shift_type: ShiftType) -> None:
        times = self.shift_times(day, shift_type, employee.role)
        self.schedules.append(Schedule(
            employee_id=employee.id,
            date=day,
            shift_type=shift_type,
            start_time=times.start_time,
            end_time=times.end_time,
        ))
        self.booked[(day, shift_type)].add(employee.id)
        self.assignment_counts[employee.id] = self.assignment_counts.get(employee.id, 0) + 1


def generate_assignments(
    dates: list[date],
    requirements: RequirementsMap,
    availability: AvailabilityIndex,
    employees: list[Employee],
    existing_assignments: list[ExistingAssignment],
    shift_times: ShiftTimeCalculator,
) -> AssignmentBatch:
    """
    Main entry point for assignment.

    Returns:
        AssignmentBatch with proposed schedules, shortfall warnings and the
        per-employee counts reached in this run
    """
    run = AssignmentRun(employees, availability, shift_times, existing_assignments)
    return run.run(dates, requirements)
