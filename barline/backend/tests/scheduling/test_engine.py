import pytest
from datetime import date, timedelta

from app.services.scheduling.availability import AvailabilityIndex
from app.services.scheduling.constraints import (
    count_assignments,
    fairness_spread,
    find_double_bookings,
)
from app.services.scheduling.engine import AssignmentRun, generate_assignments, shortfall_warning
from app.services.scheduling.requirements import resolve_requirements
from app.services.scheduling.shift_times import make_shift_time_calculator
from app.services.scheduling.types import (
    AvailabilityEntry,
    Employee,
    EmployeeRole,
    ExistingAssignment,
    ShiftRequirement,
    ShiftType,
    StaffingCounts,
    TemplateEntry,
)

from conftest import DENVER, get_test_monday


def run_engine(dates, requirements, employees, hours, availability=None, existing=None):
    return generate_assignments(
        dates=dates,
        requirements=requirements,
        availability=AvailabilityIndex.build(availability or []),
        employees=employees,
        existing_assignments=existing or [],
        shift_times=make_shift_time_calculator(hours, DENVER),
    )


def assigned(batch, day, shift_type):
    return [s.employee_id for s in batch.schedules if s.date == day and s.shift_type == shift_type]


class TestShortfallWarning:
    def test_format(self):
        message = shortfall_warning(date(2024, 1, 8), ShiftType.OPEN, EmployeeRole.COOK, 2, 1)
        assert message == "Not enough cooks for 2024-01-08 open shift. Needed: 2, Available: 1"


class TestAssignmentRunInit:
    def test_counters_start_at_zero(self, roster, hours):
        run = AssignmentRun(roster, AvailabilityIndex(), make_shift_time_calculator(hours, DENVER))
        assert run.assignment_counts == {e.id: 0 for e in roster}
        assert run.schedules == []

    def test_inactive_employees_excluded_from_pools(self, hours):
        employees = [
            Employee(id=1, name="Alice", role=EmployeeRole.COOK, is_active=False),
            Employee(id=2, name="Bob", role=EmployeeRole.COOK),
        ]
        run = AssignmentRun(employees, AvailabilityIndex(), make_shift_time_calculator(hours, DENVER))
        pool = run.eligible_pool(get_test_monday(), ShiftType.OPEN, EmployeeRole.COOK)
        assert [e.id for e in pool] == [2]

    def test_existing_assignments_are_booked(self, roster, hours):
        monday = get_test_monday()
        existing = [ExistingAssignment(employee_id=1, date=monday, shift_type=ShiftType.OPEN)]
        run = AssignmentRun(roster, AvailabilityIndex(), make_shift_time_calculator(hours, DENVER), existing)

        open_pool = run.eligible_pool(monday, ShiftType.OPEN, EmployeeRole.COOK)
        close_pool = run.eligible_pool(monday, ShiftType.CLOSE, EmployeeRole.COOK)

        assert [e.id for e in open_pool] == [2]
        assert [e.id for e in close_pool] == [1, 2]

    def test_existing_rows_fill_by_role(self, roster, hours):
        monday = get_test_monday()
        existing = [
            ExistingAssignment(employee_id=1, date=monday, shift_type=ShiftType.OPEN),
            ExistingAssignment(employee_id=3, date=monday, shift_type=ShiftType.OPEN, role=EmployeeRole.BARTENDER),
        ]
        run = AssignmentRun(roster, AvailabilityIndex(), make_shift_time_calculator(hours, DENVER), existing)

        assert run.filled[(monday, ShiftType.OPEN, EmployeeRole.COOK)] == 1
        assert run.filled[(monday, ShiftType.OPEN, EmployeeRole.BARTENDER)] == 1
        assert run.filled[(monday, ShiftType.CLOSE, EmployeeRole.COOK)] == 0


class TestGenerateAssignments:
    def test_example_monday(self, hours):
        monday = get_test_monday()
        employees = [
            Employee(id=1, name="Ana", role=EmployeeRole.COOK),
            Employee(id=2, name="Ben", role=EmployeeRole.COOK),
            Employee(id=3, name="Cal", role=EmployeeRole.COOK),
            Employee(id=4, name="Dee", role=EmployeeRole.BARTENDER),
            Employee(id=5, name="Eli", role=EmployeeRole.BARBACK),
        ]
        explicit = [ShiftRequirement(monday, ShiftType.OPEN, StaffingCounts(cooks=1, bartenders=1, barbacks=0))]
        template = [TemplateEntry("Default", 1, ShiftType.CLOSE, StaffingCounts(cooks=2, bartenders=1, barbacks=1))]
        requirements = resolve_requirements([monday], explicit, template)

        batch = run_engine([monday], requirements, employees, hours)

        assert sorted(assigned(batch, monday, ShiftType.OPEN)) == [1, 4]
        # Ana already has a shift, so the two untouched cooks take the close
        assert sorted(assigned(batch, monday, ShiftType.CLOSE)) == [2, 3, 4, 5]
        assert batch.warnings == []

    def test_open_cook_still_eligible_for_close(self, hours):
        monday = get_test_monday()
        employees = [Employee(id=1, name="Ana", role=EmployeeRole.COOK)]
        requirements = {monday: {
            ShiftType.OPEN: StaffingCounts(cooks=1),
            ShiftType.CLOSE: StaffingCounts(cooks=1),
        }}

        batch = run_engine([monday], requirements, employees, hours)

        assert assigned(batch, monday, ShiftType.OPEN) == [1]
        assert assigned(batch, monday, ShiftType.CLOSE) == [1]
        assert batch.assignment_counts[1] == 2

    def test_existing_row_counts_toward_requirement(self, roster, hours):
        monday = get_test_monday()
        requirements = {monday: {ShiftType.OPEN: StaffingCounts(cooks=1, bartenders=1)}}
        existing = [ExistingAssignment(employee_id=1, date=monday, shift_type=ShiftType.OPEN, role=EmployeeRole.COOK)]

        batch = run_engine([monday], requirements, roster, hours, existing=existing)

        assert assigned(batch, monday, ShiftType.OPEN) == [3]
        assert batch.warnings == []

    def test_existing_rows_only_top_up(self, roster, hours):
        monday = get_test_monday()
        requirements = {monday: {ShiftType.CLOSE: StaffingCounts(cooks=2)}}
        existing = [ExistingAssignment(employee_id=1, date=monday, shift_type=ShiftType.CLOSE, role=EmployeeRole.COOK)]

        batch = run_engine([monday], requirements, roster, hours, existing=existing)

        assert assigned(batch, monday, ShiftType.CLOSE) == [2]
        assert batch.warnings == []

    def test_shortfall_reports_remaining_need(self, roster, hours):
        monday = get_test_monday()
        requirements = {monday: {ShiftType.CLOSE: StaffingCounts(cooks=3)}}
        existing = [ExistingAssignment(employee_id=1, date=monday, shift_type=ShiftType.CLOSE, role=EmployeeRole.COOK)]

        batch = run_engine([monday], requirements, roster, hours, existing=existing)

        assert assigned(batch, monday, ShiftType.CLOSE) == [2]
        assert batch.warnings == [shortfall_warning(monday, ShiftType.CLOSE, EmployeeRole.COOK, 2, 1)]

    def test_fully_booked_range_proposes_nothing(self, roster, hours):
        monday = get_test_monday()
        requirements = {monday: {ShiftType.OPEN: StaffingCounts(cooks=2, bartenders=1)}}
        first = run_engine([monday], requirements, roster, hours)
        existing = [ExistingAssignment(s.employee_id, s.date, s.shift_type) for s in first.schedules]

        second = run_engine([monday], requirements, roster, hours, existing=existing)

        assert second.schedules == []
        assert second.warnings == []

    def test_no_double_booking(self, roster, hours):
        monday = get_test_monday()
        dates = [monday + timedelta(days=i) for i in range(7)]
        requirements = {d: {
            ShiftType.OPEN: StaffingCounts(cooks=2, bartenders=2, barbacks=1),
            ShiftType.CLOSE: StaffingCounts(cooks=2, bartenders=2, barbacks=1),
        } for d in dates}

        batch = run_engine(dates, requirements, roster, hours)

        assert find_double_bookings(batch.schedules) == []
        assert len(batch.schedules) == 7 * 2 * 5

    def test_unavailable_never_assigned(self, roster, hours):
        monday = get_test_monday()
        requirements = {monday: {
            ShiftType.OPEN: StaffingCounts(cooks=2),
            ShiftType.CLOSE: StaffingCounts(cooks=2),
        }}
        availability = [
            AvailabilityEntry(1, monday, None, False),
            AvailabilityEntry(2, monday, ShiftType.CLOSE, False),
        ]

        batch = run_engine([monday], requirements, roster, hours, availability=availability)

        assert assigned(batch, monday, ShiftType.OPEN) == [2]
        assert assigned(batch, monday, ShiftType.CLOSE) == []
        assert len(batch.warnings) == 2

    def test_partial_fulfillment_single_warning(self, roster, hours):
        monday = get_test_monday()
        requirements = {monday: {ShiftType.OPEN: StaffingCounts(cooks=4)}}

        batch = run_engine([monday], requirements, roster, hours)

        assert sorted(assigned(batch, monday, ShiftType.OPEN)) == [1, 2]
        assert batch.warnings == [
            "Not enough cooks for 2024-01-08 open shift. Needed: 4, Available: 2"
        ]

    def test_empty_role_pool_warns(self, hours):
        monday = get_test_monday()
        employees = [Employee(id=1, name="Ana", role=EmployeeRole.COOK)]
        requirements = {monday: {ShiftType.CLOSE: StaffingCounts(barbacks=1)}}

        batch = run_engine([monday], requirements, employees, hours)

        assert batch.schedules == []
        assert batch.warnings == [
            "Not enough barbacks for 2024-01-08 close shift. Needed: 1, Available: 0"
        ]

    def test_zero_requirement_no_warning(self, roster, hours):
        monday = get_test_monday()
        requirements = {monday: {ShiftType.OPEN: StaffingCounts(0, 0, 0)}}

        batch = run_engine([monday], requirements, roster, hours)

        assert batch.schedules == []
        assert batch.warnings == []

    def test_fairness_spread_at_most_one(self, hours):
        monday = get_test_monday()
        bartenders = [Employee(id=i, name=f"Bar {i}", role=EmployeeRole.BARTENDER) for i in range(1, 6)]
        dates = [monday + timedelta(days=i) for i in range(14)]
        requirements = {d: {
            ShiftType.OPEN: StaffingCounts(bartenders=1),
            ShiftType.CLOSE: StaffingCounts(bartenders=2),
        } for d in dates}

        batch = run_engine(dates, requirements, bartenders, hours)
        counts = count_assignments(batch.schedules)

        assert len(counts) == 5
        assert fairness_spread(counts) <= 1
        assert sum(counts.values()) == 14 * 3

    def test_roster_order_tie_break(self, roster, hours):
        monday = get_test_monday()
        requirements = {monday: {ShiftType.OPEN: StaffingCounts(bartenders=1)}}

        batch = run_engine([monday], requirements, roster, hours)

        assert assigned(batch, monday, ShiftType.OPEN) == [3]

    def test_dates_without_requirements_skipped(self, roster, hours):
        monday = get_test_monday()
        batch = run_engine([monday], {monday: {}}, roster, hours)
        assert batch.schedules == []
        assert batch.warnings == []

    def test_runs_do_not_share_counters(self, roster, hours):
        monday = get_test_monday()
        requirements = {monday: {ShiftType.OPEN: StaffingCounts(cooks=1)}}

        first = run_engine([monday], requirements, roster, hours)
        second = run_engine([monday], requirements, roster, hours)

        assert assigned(first, monday, ShiftType.OPEN) == assigned(second, monday, ShiftType.OPEN) == [1]

    def test_schedules_carry_shift_times(self, roster, hours):
        monday = get_test_monday()
        requirements = {monday: {ShiftType.OPEN: StaffingCounts(cooks=1, bartenders=1)}}

        batch = run_engine([monday], requirements, roster, hours)
        by_employee = {s.employee_id: s for s in batch.schedules}

        assert by_employee[1].duration_hours == 7
        assert by_employee[3].duration_hours == 6
