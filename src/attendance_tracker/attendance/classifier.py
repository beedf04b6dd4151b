"""Status rules: turn check-in/check-out times into a status and duration.

All functions are pure and work on ``HH:MM:SS`` strings. Only hours and
minutes take part in the comparisons.
"""

from __future__ import annotations

from ..common.datetime_utils import minutes_since_midnight
from ..core.constants import HALF_DAY_THRESHOLD_HOURS, LATE_CUTOFF_MINUTES, PRESENT_CUTOFF_MINUTES
from ..core.enums import AttendanceStatus


def derive_check_in_status(check_in_time: str) -> AttendanceStatus:
    minutes = minutes_since_midnight(check_in_time)
    if minutes <= PRESENT_CUTOFF_MINUTES:
        return AttendanceStatus.PRESENT
    if minutes <= LATE_CUTOFF_MINUTES:
        return AttendanceStatus.LATE
    return AttendanceStatus.HALF_DAY


def derive_duration(check_in_time: str, check_out_time: str) -> float:
    """Worked hours truncated (not rounded) to two decimals.

    A checkout earlier than check-in gives a negative value; callers decide
    what to do with it.
    """
    diff_minutes = minutes_since_midnight(check_out_time) - minutes_since_midnight(check_in_time)
    return (diff_minutes * 100 // 60) / 100


def reconcile_status_on_checkout(existing: AttendanceStatus, hours: float) -> AttendanceStatus:
    """Short days become half-day; otherwise the check-in status stands."""
    if hours < HALF_DAY_THRESHOLD_HOURS:
        return AttendanceStatus.HALF_DAY
    return AttendanceStatus(existing)


def format_hours(hours: float) -> str:
    return f"{hours:.2f}"


def parse_hours(value) -> float:
    """Stored total hours as a number; missing or unparseable counts as zero."""
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
