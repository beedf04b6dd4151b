import pytest

from attendance_tracker.attendance.classifier import (
    derive_check_in_status,
    derive_duration,
    format_hours,
    parse_hours,
    reconcile_status_on_checkout,
)
from attendance_tracker.core.enums import AttendanceStatus


@pytest.mark.parametrize(
    "check_in, expected",
    [
        ("07:00:00", AttendanceStatus.PRESENT),
        ("09:30:00", AttendanceStatus.PRESENT),
        ("09:31:00", AttendanceStatus.LATE),
        ("11:00:00", AttendanceStatus.LATE),
        ("12:00:00", AttendanceStatus.LATE),
        ("12:01:00", AttendanceStatus.HALF_DAY),
        ("15:45:00", AttendanceStatus.HALF_DAY),
    ],
)
def test_check_in_status_brackets(check_in, expected):
    assert derive_check_in_status(check_in) == expected


def test_check_in_status_ignores_seconds():
    assert derive_check_in_status("09:30:59") == AttendanceStatus.PRESENT


def test_duration_full_day():
    assert derive_duration("09:00:00", "17:30:00") == 8.5
    assert format_hours(derive_duration("09:00:00", "17:30:00")) == "8.50"


def test_duration_is_truncated_not_rounded():
    assert derive_duration("09:00:00", "09:20:00") == 0.33
    assert derive_duration("09:00:00", "09:50:00") == 0.83
    # 1h55m = 1.9166...
    assert derive_duration("09:00:00", "10:55:00") == 1.91


def test_duration_scenarios():
    assert derive_duration("09:15:00", "17:00:00") == 7.75
    assert derive_duration("11:00:00", "12:30:00") == 1.5


def test_duration_negative_when_checkout_precedes_checkin():
    assert derive_duration("10:00:00", "09:00:00") < 0


def test_reconcile_short_day_becomes_half_day():
    assert reconcile_status_on_checkout(AttendanceStatus.LATE, 3.5) == AttendanceStatus.HALF_DAY
    assert reconcile_status_on_checkout(AttendanceStatus.PRESENT, 3.99) == AttendanceStatus.HALF_DAY


def test_reconcile_keeps_status_for_long_day():
    assert reconcile_status_on_checkout(AttendanceStatus.PRESENT, 8.0) == AttendanceStatus.PRESENT
    assert reconcile_status_on_checkout(AttendanceStatus.LATE, 4.0) == AttendanceStatus.LATE


def test_parse_hours_tolerates_missing_and_garbage():
    assert parse_hours(None) == 0.0
    assert parse_hours("abc") == 0.0
    assert parse_hours("7.75") == 7.75
