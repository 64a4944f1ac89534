import json
import pytest
from datetime import date, datetime, time, timedelta, timezone

from app.services.scheduling.shift_times import (
    ShiftTimeError,
    business_hours_to_dict,
    calculate_shift_times,
    default_business_hours,
    make_shift_time_calculator,
    parse_business_hours,
)
from app.services.scheduling.types import BusinessHours, DayHours, EmployeeRole, Schedule, ShiftType

from conftest import DENVER, get_test_monday


def at(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime.combine(day, time(hour, minute), tzinfo=DENVER)


class TestCalculateShiftTimes:
    """Default hours 10:00 - 02:00 on Monday 2024-01-08."""

    def test_open_bar(self, hours):
        monday = get_test_monday()
        times = calculate_shift_times(monday, ShiftType.OPEN, EmployeeRole.BARTENDER, hours, DENVER)
        assert times.start_time == at(monday, 10)
        assert times.end_time == at(monday, 16)

    def test_open_kitchen_starts_an_hour_early(self, hours):
        monday = get_test_monday()
        times = calculate_shift_times(monday, ShiftType.OPEN, EmployeeRole.COOK, hours, DENVER)
        assert times.start_time == at(monday, 9)
        assert times.end_time == at(monday, 16)

    def test_close_bar_rolls_past_midnight(self, hours):
        monday = get_test_monday()
        times = calculate_shift_times(monday, ShiftType.CLOSE, EmployeeRole.BARBACK, hours, DENVER)
        assert times.start_time == at(monday, 16)
        assert times.end_time == at(date(2024, 1, 9), 2)

    def test_close_kitchen_capped_at_midnight_plus_cleanup(self, hours):
        monday = get_test_monday()
        times = calculate_shift_times(monday, ShiftType.CLOSE, EmployeeRole.COOK, hours, DENVER)
        assert times.start_time == at(monday, 15)
        assert times.end_time == at(date(2024, 1, 9), 1)

    def test_early_close_same_day(self):
        monday = get_test_monday()
        early = BusinessHours(days={"monday": DayHours(open=time(11, 0), close=time(22, 0))})

        bar = calculate_shift_times(monday, ShiftType.CLOSE, EmployeeRole.BARTENDER, early, DENVER)
        assert bar.end_time == at(monday, 22)

        kitchen = calculate_shift_times(monday, ShiftType.CLOSE, EmployeeRole.COOK, early, DENVER)
        # kitchen shuts at 21:00, cooks stay an hour
        assert kitchen.end_time == at(monday, 22)

    def test_times_are_timezone_aware(self, hours):
        times = calculate_shift_times(get_test_monday(), ShiftType.OPEN, EmployeeRole.COOK, hours, DENVER)
        assert times.start_time.tzinfo is not None
        # 09:00 MST is 16:00 UTC
        assert times.start_time.utcoffset().total_seconds() == -7 * 3600

    def test_missing_day_raises(self):
        only_sunday = BusinessHours(days={"sunday": DayHours(open=time(10, 0), close=time(2, 0))})
        with pytest.raises(ShiftTimeError, match="monday"):
            calculate_shift_times(get_test_monday(), ShiftType.OPEN, EmployeeRole.COOK, only_sunday, DENVER)

    def test_open_after_changeover_raises(self):
        late = BusinessHours(days={"monday": DayHours(open=time(17, 0), close=time(23, 0))})
        with pytest.raises(ShiftTimeError):
            calculate_shift_times(get_test_monday(), ShiftType.OPEN, EmployeeRole.BARTENDER, late, DENVER)

    def test_calculator_binds_hours_and_zone(self, hours):
        calculate = make_shift_time_calculator(hours, DENVER)
        monday = get_test_monday()
        assert calculate(monday, ShiftType.OPEN, EmployeeRole.BARTENDER).start_time == at(monday, 10)


class TestDaylightSaving:
    """Denver springs forward 2024-03-10 02:00 and falls back 2024-11-03 02:00."""

    def utc(self, *args) -> datetime:
        return datetime(*args, tzinfo=timezone.utc)

    def test_spring_forward_close_bar(self, hours):
        saturday = date(2024, 3, 9)
        times = calculate_shift_times(saturday, ShiftType.CLOSE, EmployeeRole.BARTENDER, hours, DENVER)

        # 02:00 does not exist that night, the shift ends at the same instant as 03:00 MDT
        assert times.start_time.astimezone(timezone.utc) == self.utc(2024, 3, 9, 23)
        assert times.end_time.astimezone(timezone.utc) == self.utc(2024, 3, 10, 9)
        assert times.end_time.utcoffset() == timedelta(hours=-6)
        assert times.end_time.hour == 3

    def test_spring_forward_close_kitchen(self, hours):
        saturday = date(2024, 3, 9)
        times = calculate_shift_times(saturday, ShiftType.CLOSE, EmployeeRole.COOK, hours, DENVER)

        assert times.start_time.astimezone(timezone.utc) == self.utc(2024, 3, 9, 22)
        assert times.end_time.astimezone(timezone.utc) == self.utc(2024, 3, 10, 8)

    def test_fall_back_close_bar_is_an_hour_longer(self, hours):
        saturday = date(2024, 11, 2)
        times = calculate_shift_times(saturday, ShiftType.CLOSE, EmployeeRole.BARTENDER, hours, DENVER)
        schedule = Schedule(1, saturday, ShiftType.CLOSE, times.start_time, times.end_time)

        assert times.end_time.astimezone(timezone.utc) == self.utc(2024, 11, 3, 9)
        assert schedule.duration_hours == 11

    def test_spring_forward_duration(self, hours):
        saturday = date(2024, 3, 9)
        times = calculate_shift_times(saturday, ShiftType.CLOSE, EmployeeRole.BARTENDER, hours, DENVER)
        schedule = Schedule(1, saturday, ShiftType.CLOSE, times.start_time, times.end_time)

        assert schedule.duration_hours == 10


class TestParseBusinessHours:
    def test_default_covers_every_day(self):
        hours = default_business_hours()
        assert len(hours.days) == 7
        assert hours.for_date(get_test_monday()) == DayHours(open=time(10, 0), close=time(2, 0))

    def test_parses_json_string(self):
        raw = json.dumps({"Monday": {"open": "11:30", "close": "23:00"}})
        hours = parse_business_hours(raw)
        assert hours.days["monday"] == DayHours(open=time(11, 30), close=time(23, 0))

    def test_skips_closed_days(self):
        hours = parse_business_hours({"monday": {"open": "10:00", "close": "02:00"}, "tuesday": None})
        assert "tuesday" not in hours.days

    def test_unknown_day_raises(self):
        with pytest.raises(ShiftTimeError):
            parse_business_hours({"funday": {"open": "10:00", "close": "02:00"}})

    def test_bad_clock_raises(self):
        with pytest.raises(ShiftTimeError):
            parse_business_hours({"monday": {"open": "ten", "close": "02:00"}})

    def test_not_an_object_raises(self):
        with pytest.raises(ShiftTimeError):
            parse_business_hours("[1, 2, 3]")

    def test_to_dict(self):
        hours = parse_business_hours({"friday": {"open": "09:05", "close": "01:00"}})
        assert business_hours_to_dict(hours) == {"friday": {"open": "09:05", "close": "01:00"}}
