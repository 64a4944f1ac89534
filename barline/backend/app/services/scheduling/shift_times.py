"""
Shift start/end calculation from business hours.

Open shifts run from opening until the 4pm changeover; close shifts run from
the changeover until closing, which rolls into the next day when the bar
closes after midnight. The kitchen starts an hour ahead of the bar, shuts an
hour before closing (never later than midnight) and cooks stay an hour after
kitchen close to clean down.
"""

import json
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Union
from zoneinfo import ZoneInfo

from .types import BusinessHours, DayHours, DAY_NAMES, EmployeeRole, ShiftType


SHIFT_CHANGEOVER = time(16, 0)
KITCHEN_LEAD = timedelta(hours=1)
KITCHEN_CLEANUP = timedelta(hours=1)

DEFAULT_OPEN = "10:00"
DEFAULT_CLOSE = "02:00"


class ShiftTimeError(ValueError):
    pass


@dataclass(frozen=True)
class ShiftTimes:
    start_time: datetime
    end_time: datetime


ShiftTimeCalculator = Callable[[date, ShiftType, EmployeeRole], ShiftTimes]


def _parse_clock(value: str) -> time:
    """Parse HH:MM string to time object."""
    try:
        hours, minutes = value.split(":")
        return time(int(hours), int(minutes))
    except (AttributeError, ValueError) as e:
        raise ShiftTimeError(f"Invalid clock time: {value!r}") from e


def default_business_hours() -> BusinessHours:
    day = DayHours(open=_parse_clock(DEFAULT_OPEN), close=_parse_clock(DEFAULT_CLOSE))
    return BusinessHours(days={name: day for name in DAY_NAMES})


def parse_business_hours(raw: Union[str, dict]) -> BusinessHours:
    """
    Build BusinessHours from the stored `hours` setting, e.g.
    {"monday": {"open": "10:00", "close": "02:00"}, ...}.
    Days missing from the setting have no hours.
    """
    data = json.loads(raw) if isinstance(raw, str) else raw
    if not isinstance(data, dict):
        raise ShiftTimeError("Business hours must be an object keyed by day name")

    days = {}
    for name, value in data.items():
        key = name.lower()
        if key not in DAY_NAMES:
            raise ShiftTimeError(f"Unknown day in business hours: {name}")
        if not isinstance(value, dict) or not value.get("open") or not value.get("close"):
            continue
        days[key] = DayHours(open=_parse_clock(value["open"]), close=_parse_clock(value["close"]))
    return BusinessHours(days=days)


def business_hours_to_dict(hours: BusinessHours) -> dict:
    return {
        name: {"open": day.open.strftime("%H:%M"), "close": day.close.strftime("%H:%M")}
        for name, day in hours.days.items()
    }


def calculate_shift_times(
    shift_date: date,
    shift_type: ShiftType,
    role: EmployeeRole,
    business_hours: BusinessHours,
    tz: ZoneInfo,
) -> ShiftTimes:
    """
    Calculate start and end timestamps (aware, in `tz`) for one shift.

    Arithmetic happens in UTC so DST transitions shift the wall clock, not
    the length of the shift.

    Raises:
        ShiftTimeError: no hours configured for the day, or the configured
            hours produce a shift that does not end after it starts
    """
    day_hours = business_hours.for_date(shift_date)
    if day_hours is None:
        day_name = DAY_NAMES[(shift_date.weekday() + 1) % 7]
        raise ShiftTimeError(f"No business hours set for {day_name}")

    next_day = shift_date + timedelta(days=1)
    is_kitchen = role == EmployeeRole.COOK

    def at(day: date, clock: time) -> datetime:
        return datetime.combine(day, clock, tzinfo=tz).astimezone(timezone.utc)

    if shift_type == ShiftType.OPEN:
        start = at(shift_date, day_hours.open)
        end = at(shift_date, SHIFT_CHANGEOVER)
    else:
        start = at(shift_date, SHIFT_CHANGEOVER)
        closes_next_day = day_hours.close < day_hours.open
        end = at(next_day if closes_next_day else shift_date, day_hours.close)
        if is_kitchen:
            kitchen_close = min(end - KITCHEN_CLEANUP, at(next_day, time(0, 0)))
            end = kitchen_close + KITCHEN_CLEANUP

    if is_kitchen:
        start -= KITCHEN_LEAD

    if end <= start:
        raise ShiftTimeError(
            f"{shift_type.value} shift for {role.value} on {shift_date} would end "
            f"at {end.astimezone(tz).isoformat()} before it starts at {start.astimezone(tz).isoformat()}"
        )

    return ShiftTimes(start_time=start.astimezone(tz), end_time=end.astimezone(tz))


def make_shift_time_calculator(business_hours: BusinessHours, tz: ZoneInfo) -> ShiftTimeCalculator:
    """Bind business hours and timezone so the engine only passes date/shift/role."""
    def _calculate(shift_date: date, shift_type: ShiftType, role: EmployeeRole) -> ShiftTimes:
        return calculate_shift_times(shift_date, shift_type, role, business_hours, tz)
    return _calculate
