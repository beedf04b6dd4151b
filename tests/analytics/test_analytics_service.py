from __future__ import annotations

from datetime import date

import pytest

from attendance_tracker.analytics.service import count_absent
from attendance_tracker.core.enums import AbsencePolicy, AttendanceStatus


def _full_day(svc, user_id, day, check_in="09:00:00", check_out="17:00:00"):
    return svc.import_record(user_id, day, check_in_time=check_in, check_out_time=check_out)


def test_monthly_summary_empty_month(container, register):
    a = register("Alice Empty")
    summary = container.analytics_service.monthly_summary(a.user_id, "2025-02")

    assert summary.to_dict() == {
        "presentDays": 0,
        "absentDays": 0,
        "lateDays": 0,
        "halfDays": 0,
        "totalHours": 0,
    }


def test_monthly_summary_counts_and_hours(container, register):
    a = register("Alice Month")
    svc = container.attendance_service
    _full_day(svc, a.user_id, "2025-06-02")  # present 8.00
    _full_day(svc, a.user_id, "2025-06-03", check_in="10:00:00", check_out="18:00:00")  # late 8.00
    _full_day(svc, a.user_id, "2025-06-04", check_in="09:00:00", check_out="11:30:00")  # half-day 2.50
    svc.import_record(a.user_id, "2025-06-05")  # explicit absent
    _full_day(svc, a.user_id, "2025-07-01")  # other month
    svc.upsert_check_in(a.user_id, "2025-06-06", "09:00:00")  # open day, no hours

    summary = container.analytics_service.monthly_summary(a.user_id, "2025-06")
    assert summary.present_days == 2
    assert summary.late_days == 1
    assert summary.half_days == 1
    # Days with no record at all are not absences here.
    assert summary.absent_days == 1
    assert summary.total_hours == pytest.approx(18.5)


def test_month_history_returns_records_and_summary(container, register):
    a = register("Alice History")
    _full_day(container.attendance_service, a.user_id, "2025-06-02")
    _full_day(container.attendance_service, a.user_id, "2025-06-09")

    records, summary = container.analytics_service.month_history(a.user_id, "2025-06")
    assert [r.work_date for r in records] == ["2025-06-09", "2025-06-02"]
    assert summary.present_days == 2


def test_calendar_has_one_entry_per_day(container, register):
    a = register("Alice Calendar")
    b = register("Bob Calendar")
    svc = container.attendance_service
    _full_day(svc, a.user_id, "2025-06-10")
    _full_day(svc, b.user_id, "2025-06-10", check_in="11:00:00", check_out="19:00:00")
    svc.import_record(a.user_id, "2025-06-11")

    grid = container.analytics_service.calendar("2025-06")

    assert len(grid) == 30
    assert [d.date for d in grid] == sorted(d.date for d in grid)
    assert grid[0].date == "2025-06-01" and grid[-1].date == "2025-06-30"

    tenth = grid[9]
    assert (tenth.present, tenth.late, tenth.absent, tenth.half_day, tenth.total) == (1, 1, 0, 0, 2)
    assert grid[10].absent == 1

    empty = grid[0]
    assert (empty.present, empty.absent, empty.late, empty.half_day, empty.total) == (0, 0, 0, 0, 0)
    assert empty.records == []


def test_calendar_february_leap_year(container):
    assert len(container.analytics_service.calendar("2024-02")) == 29


def test_weekly_trend_folds_missing_employees(container, register):
    employees = [register(f"Emp {i}") for i in range(4)]
    svc = container.attendance_service
    _full_day(svc, employees[0].user_id, "2025-06-18")
    _full_day(svc, employees[1].user_id, "2025-06-18", check_in="10:00:00", check_out="18:00:00")
    svc.import_record(employees[2].user_id, "2025-06-18")
    _full_day(svc, employees[0].user_id, "2025-06-12")

    trend = container.analytics_service.weekly_trend(date(2025, 6, 18))

    assert [p.date for p in trend] == [
        "2025-06-12", "2025-06-13", "2025-06-14", "2025-06-15", "2025-06-16", "2025-06-17", "2025-06-18",
    ]
    today = trend[-1]
    # 1 explicit absent + (4 employees - 3 records)
    assert (today.present, today.late, today.absent) == (1, 1, 2)
    assert (trend[0].present, trend[0].absent) == (1, 3)
    assert trend[3].absent == 4


def test_department_breakdown(container, register):
    e1 = register("Eng One", department="Engineering")
    e2 = register("Eng Two", department="Engineering")
    d1 = register("Des One", department="Design")
    register("Mkt One", department="Marketing")
    boss = register("Boss", department="Management", role="manager")
    svc = container.attendance_service
    _full_day(svc, e1.user_id, "2025-06-18")
    svc.import_record(e2.user_id, "2025-06-18")
    _full_day(svc, d1.user_id, "2025-06-18", check_in="12:30:00", check_out="17:00:00")
    _full_day(svc, boss.user_id, "2025-06-18")

    stats = {s.department: (s.present, s.absent) for s in container.analytics_service.department_breakdown(date(2025, 6, 18))}

    assert stats == {
        "Engineering": (1, 1),
        "Design": (1, 0),
        "Marketing": (0, 1),
    }


def test_manager_dashboard_counts(container, register):
    employees = [register(f"Worker {i}") for i in range(5)]
    svc = container.attendance_service
    _full_day(svc, employees[0].user_id, "2025-06-18")
    _full_day(svc, employees[1].user_id, "2025-06-18")
    svc.import_record(employees[2].user_id, "2025-06-18")

    dash = container.analytics_service.manager_dashboard(date(2025, 6, 18))

    assert dash.total_employees == 5
    assert dash.present_today == 2
    assert dash.absent_today == 3
    assert dash.late_today == 0
    assert {e.user_id for e in dash.absent_employees} == {employees[3].user_id, employees[4].user_id}
    assert len(dash.weekly_trend) == 7
    assert dash.to_dict()["departmentStats"] == [{"department": "Engineering", "present": 2, "absent": 3}]


def test_employee_dashboard(container, register):
    a = register("Alice Dash")
    svc = container.attendance_service
    _full_day(svc, a.user_id, "2025-06-10")
    _full_day(svc, a.user_id, "2025-06-11")
    _full_day(svc, a.user_id, "2025-05-30")
    svc.upsert_check_in(a.user_id, "2025-06-18", "09:40:00")

    dash = container.analytics_service.employee_dashboard(a.user_id, date(2025, 6, 18))

    assert dash.today_status.status == AttendanceStatus.LATE
    assert [r.work_date for r in dash.recent_attendance] == ["2025-06-18", "2025-06-11"]
    assert dash.monthly_summary.present_days == 2
    assert dash.monthly_summary.late_days == 1


def test_count_absent_policies():
    class R:
        def __init__(self, status):
            self.status = status

    records = [R(AttendanceStatus.ABSENT), R(AttendanceStatus.PRESENT)]
    assert count_absent(records, total_employees=5, policy=AbsencePolicy.EXPLICIT_ONLY) == 1
    assert count_absent(records, total_employees=5, policy=AbsencePolicy.FOLD_MISSING) == 4


def test_manager_record_reduces_no_record_count(container, register):
    boss = register("Boss Early", role="manager", department="Management")
    container.attendance_service.upsert_check_in(boss.user_id, "2025-06-18", "08:30:00")

    dash = container.analytics_service.manager_dashboard(date(2025, 6, 18))

    assert dash.total_employees == 0
    assert dash.absent_today == -1
    assert dash.weekly_trend[-1].absent == -1
