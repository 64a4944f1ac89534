"""
Business-timezone date handling.

Staffing requirements, templates and availability are all expressed in
calendar days as the restaurant experiences them, so every date that enters
the scheduler is normalised against the company timezone rather than the
server's local zone or UTC.
"""

import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.core.config import settings


DATE_ONLY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DATE_FRAGMENT_PATTERN = re.compile(r"(\d{4}-\d{2}-\d{2})")

DateInput = Union[str, date, datetime]


class InvalidDateError(ValueError):
    pass


def get_business_timezone(name: Optional[str] = None) -> ZoneInfo:
    tz_name = name or settings.COMPANY_TIMEZONE
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidDateError(f"Unknown timezone: {tz_name}") from e


def _parse_date_only(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidDateError(f"Invalid date: {value}") from e


def parse_business_date(value: Optional[DateInput], tz: ZoneInfo) -> date:
    """
    Normalise a date-ish input to the calendar day it falls on in `tz`.

    - date: returned as is
    - datetime: naive values are taken as UTC, then converted to `tz`
    - "YYYY-MM-DD": that calendar day, no conversion
    - ISO datetime string: parsed, converted to `tz`, day taken
    - any other string containing a YYYY-MM-DD fragment: that fragment
    """
    if value is None or value == "":
        raise InvalidDateError("Date is required")

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(tz).date()

    if isinstance(value, date):
        return value

    text = str(value).strip()
    if DATE_ONLY_PATTERN.match(text):
        return _parse_date_only(text)

    try:
        # fromisoformat only learned the trailing Z in 3.11
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        match = DATE_FRAGMENT_PATTERN.search(text)
        if not match:
            raise InvalidDateError(f"Invalid date: {value}")
        return _parse_date_only(match.group(1))

    return parse_business_date(parsed, tz)


def business_today(tz: ZoneInfo, now: Optional[datetime] = None) -> date:
    current = now or datetime.now(timezone.utc)
    return parse_business_date(current, tz)


def day_of_week(day: date) -> int:
    """0=Sunday .. 6=Saturday (date.weekday() is 0=Monday)."""
    return (day.weekday() + 1) % 7


def date_range(start: date, end: date) -> list[date]:
    """Every calendar day from start to end inclusive."""
    if start > end:
        raise InvalidDateError(f"Start date {start} is after end date {end}")
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def to_date_string(day: date) -> str:
    return day.strftime("%Y-%m-%d")
