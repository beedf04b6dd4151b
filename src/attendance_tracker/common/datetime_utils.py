from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import List, Tuple, Union

from ..core.constants import DATE_FORMAT, MONTH_FORMAT, TIME_FORMAT

DateLike = Union[date, str]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def format_month(value: date) -> str:
    return value.strftime(MONTH_FORMAT)


def parse_time_of_day(value: str) -> time:
    """Parse HH:MM:SS (or HH:MM) string into time."""
    parts = value.strip().split(":")
    if len(parts) < 2:
        raise ValueError(f"Invalid time string: {value!r}")
    seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
    return time(hour=int(parts[0]), minute=int(parts[1]), second=seconds)


def format_time(value: Union[time, datetime]) -> str:
    return value.strftime(TIME_FORMAT)


def minutes_since_midnight(value: str) -> int:
    """Hours and minutes of a time-of-day string; seconds are ignored."""
    t = parse_time_of_day(value)
    return t.hour * 60 + t.minute


def _as_date(value: DateLike) -> date:
    return value if isinstance(value, date) else parse_iso_date(value)


def month_bounds(month: str) -> Tuple[str, str]:
    """First and last day of a YYYY-MM month, as YYYY-MM-DD strings."""
    first = datetime.strptime(month, MONTH_FORMAT).date()
    last_day = calendar.monthrange(first.year, first.month)[1]
    return format_date(first), format_date(first.replace(day=last_day))


def days_between(start: DateLike, end: DateLike) -> List[str]:
    """Every calendar day from start to end inclusive, oldest first."""
    current, last = _as_date(start), _as_date(end)
    days = []
    while current <= last:
        days.append(format_date(current))
        current += timedelta(days=1)
    return days


def days_in_month(month: str) -> List[str]:
    return days_between(*month_bounds(month))


def shift_days(value: DateLike, days: int) -> str:
    return format_date(_as_date(value) + timedelta(days=days))


def is_same_day(a: DateLike, b: DateLike) -> bool:
    return _as_date(a) == _as_date(b)


def is_business_day(value: DateLike) -> bool:
    """Monday to Friday."""
    return _as_date(value).weekday() < 5


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
