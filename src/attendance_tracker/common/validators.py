from __future__ import annotations

import re
from typing import Tuple

from ..core.exceptions import InvalidRange, ValidationError
from .datetime_utils import format_date, format_time, month_bounds, parse_iso_date, parse_time_of_day

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: str) -> str:
    value = (value or "").strip()
    if not _EMAIL_RE.match(value):
        raise ValidationError("Invalid email address")
    return value


def require_iso_date(value: str, field_name: str = "Date") -> str:
    if not value:
        raise InvalidRange(f"{field_name} is required")
    try:
        canonical = format_date(parse_iso_date(value))
    except (TypeError, ValueError):
        canonical = None
    # Ranges compare dates as text, so only the zero-padded form is accepted.
    if canonical != value:
        raise InvalidRange(f"{field_name} must be YYYY-MM-DD: {value!r}")
    return value


def require_date_range(start: str, end: str) -> Tuple[str, str]:
    """Both bounds well-formed and start <= end (dates compare as text)."""
    require_iso_date(start, "Start date")
    require_iso_date(end, "End date")
    if start > end:
        raise InvalidRange(f"Start date {start} is after end date {end}")
    return start, end


def require_month(value: str) -> str:
    try:
        month_bounds(value)
    except (TypeError, ValueError):
        raise InvalidRange(f"Month must be YYYY-MM: {value!r}")
    return value


def require_time_of_day(value: str, field_name: str) -> str:
    """Canonical HH:MM:SS form of a time-of-day string."""
    try:
        return format_time(parse_time_of_day(value))
    except (AttributeError, TypeError, ValueError):
        raise ValidationError(f"{field_name} must be HH:MM:SS: {value!r}")
