import pytest

from attendance_tracker.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from attendance_tracker.core.enums import AttendanceStatus
from attendance_tracker.core.exceptions import AlreadyCheckedIn, AlreadyCheckedOut, NotCheckedIn, ValidationError


def _add(repo, user_id, work_date, status=AttendanceStatus.PRESENT):
    return repo.add_record(
        user_id=user_id,
        work_date=work_date,
        check_in_time="09:00:00",
        check_out_time="17:00:00",
        status=status,
        total_hours="8.00",
    )


def test_list_range_orders_by_date_desc_then_user():
    repo = InMemoryAttendanceRepository()
    _add(repo, "u2", "2025-06-02")
    _add(repo, "u1", "2025-06-02")
    _add(repo, "u1", "2025-06-01")
    _add(repo, "u3", "2025-06-05")

    rows = repo.list_range("2025-06-01", "2025-06-04")
    assert [(r.work_date, r.user_id) for r in rows] == [
        ("2025-06-02", "u1"),
        ("2025-06-02", "u2"),
        ("2025-06-01", "u1"),
    ]


def test_list_for_date_and_empty_day():
    repo = InMemoryAttendanceRepository()
    _add(repo, "u1", "2025-06-02")
    _add(repo, "u2", "2025-06-02")

    assert {r.user_id for r in repo.list_for_date("2025-06-02")} == {"u1", "u2"}
    assert repo.list_for_date("2025-06-03") == []


def test_add_record_rejects_duplicate_day():
    repo = InMemoryAttendanceRepository()
    _add(repo, "u1", "2025-06-02")
    with pytest.raises(ValidationError):
        _add(repo, "u1", "2025-06-02")


def test_checkout_conditions():
    repo = InMemoryAttendanceRepository()
    with pytest.raises(NotCheckedIn):
        repo.update_checkout(
            user_id="u1", work_date="2025-06-02", check_out_time="17:00:00", total_hours="8.00",
            status=AttendanceStatus.PRESENT,
        )

    repo.create_checkin(user_id="u1", work_date="2025-06-02", check_in_time="09:00:00", status=AttendanceStatus.PRESENT)
    with pytest.raises(AlreadyCheckedIn):
        repo.create_checkin(
            user_id="u1", work_date="2025-06-02", check_in_time="09:05:00", status=AttendanceStatus.PRESENT
        )

    rec = repo.update_checkout(
        user_id="u1", work_date="2025-06-02", check_out_time="17:00:00", total_hours="8.00",
        status=AttendanceStatus.PRESENT,
    )
    assert repo.get_by_id(rec.attendance_id).check_out_time == "17:00:00"
    with pytest.raises(AlreadyCheckedOut):
        repo.update_checkout(
            user_id="u1", work_date="2025-06-02", check_out_time="18:00:00", total_hours="9.00",
            status=AttendanceStatus.PRESENT,
        )
