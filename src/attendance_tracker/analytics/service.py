"""Aggregates over attendance records: summaries, calendars, trends, dashboards.

Absence is counted in two different ways and each metric declares which one
it uses (see ``count_absent``):

- monthly summary: explicit ``absent`` records only;
- weekly trend, department breakdown, ``absent_today``: explicit ``absent``
  records plus employees with no record for the day.

Everything is recomputed from the store on every call.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Sequence, Tuple

from ..attendance.classifier import parse_hours
from ..attendance.model import AttendanceRecord, AttendanceWithUser
from ..attendance.service import AttendanceService
from ..common.datetime_utils import days_between, format_date, format_month, month_bounds, now_local, shift_days
from ..common.validators import require_month
from ..core.constants import DEFAULT_RECENT_DAYS, DEFAULT_TREND_DAYS
from ..core.enums import AbsencePolicy, AttendanceStatus
from ..users.service import UserService
from .model import CalendarDay, DepartmentStat, EmployeeDashboard, ManagerDashboard, MonthlySummary, TrendPoint

logger = logging.getLogger(__name__)


def count_status(records: Iterable, status: AttendanceStatus) -> int:
    return sum(1 for r in records if r.status == status)


def count_absent(records: Sequence, *, total_employees: int, policy: AbsencePolicy) -> int:
    """Absences for one day (or one user's month) under the given policy.

    With FOLD_MISSING the no-record share is ``total_employees - len(records)``.
    Records of non-employees (managers) still reduce that share, so the
    result can go negative when only a manager has checked in.
    """
    explicit = count_status(records, AttendanceStatus.ABSENT)
    if policy == AbsencePolicy.EXPLICIT_ONLY:
        return explicit
    return explicit + (total_employees - len(records))


def summarize_month(records: Sequence[AttendanceRecord]) -> MonthlySummary:
    return MonthlySummary(
        present_days=count_status(records, AttendanceStatus.PRESENT),
        absent_days=count_absent(records, total_employees=0, policy=AbsencePolicy.EXPLICIT_ONLY),
        late_days=count_status(records, AttendanceStatus.LATE),
        half_days=count_status(records, AttendanceStatus.HALF_DAY),
        total_hours=sum(parse_hours(r.total_hours) for r in records),
    )


class AttendanceAnalyticsService:
    def __init__(self, attendance: AttendanceService, users: UserService):
        self._attendance = attendance
        self._users = users

    @staticmethod
    def _today(today: date | None) -> date:
        return today or now_local().date()

    def monthly_summary(self, user_id: str, month: str) -> MonthlySummary:
        start, end = month_bounds(require_month(month))
        return summarize_month(self._attendance.range_by_user(user_id, start, end))

    def month_history(self, user_id: str, month: str) -> Tuple[List[AttendanceRecord], MonthlySummary]:
        start, end = month_bounds(require_month(month))
        records = list(self._attendance.range_by_user(user_id, start, end))
        return records, summarize_month(records)

    def calendar(self, month: str) -> List[CalendarDay]:
        """One entry per day of the month, ascending, empty days included."""
        start, end = month_bounds(require_month(month))
        by_day = self._group_by_date(self._attendance.range_all(start, end))

        grid = []
        for day in days_between(start, end):
            records = by_day.get(day, [])
            grid.append(
                CalendarDay(
                    date=day,
                    present=count_status(records, AttendanceStatus.PRESENT),
                    absent=count_absent(records, total_employees=0, policy=AbsencePolicy.EXPLICIT_ONLY),
                    late=count_status(records, AttendanceStatus.LATE),
                    half_day=count_status(records, AttendanceStatus.HALF_DAY),
                    total=len(records),
                    records=records,
                )
            )
        return grid

    def weekly_trend(self, today: date | None = None, *, window: int = DEFAULT_TREND_DAYS) -> List[TrendPoint]:
        end = format_date(self._today(today))
        start = shift_days(end, -(window - 1))
        total_employees = len(self._users.list_employees())
        by_day = self._group_by_date(self._attendance.range_all(start, end))

        trend = []
        for day in days_between(start, end):
            records = by_day.get(day, [])
            trend.append(
                TrendPoint(
                    date=day,
                    present=count_status(records, AttendanceStatus.PRESENT),
                    absent=count_absent(records, total_employees=total_employees, policy=AbsencePolicy.FOLD_MISSING),
                    late=count_status(records, AttendanceStatus.LATE),
                )
            )
        return trend

    def department_breakdown(self, today: date | None = None) -> List[DepartmentStat]:
        day = format_date(self._today(today))
        employees = self._users.list_employees()
        return self._department_stats(employees, self._attendance.for_date(day))

    def manager_dashboard(self, today: date | None = None) -> ManagerDashboard:
        today = self._today(today)
        day = format_date(today)
        employees = self._users.list_employees()
        records = self._attendance.for_date(day)

        with_record = {r.user_id for r in records}
        dashboard = ManagerDashboard(
            total_employees=len(employees),
            present_today=sum(1 for r in records if r.status != AttendanceStatus.ABSENT),
            absent_today=count_absent(records, total_employees=len(employees), policy=AbsencePolicy.FOLD_MISSING),
            late_today=count_status(records, AttendanceStatus.LATE),
            # Explicit absent records are counted above but not listed here.
            absent_employees=[e for e in employees if e.user_id not in with_record],
            weekly_trend=self.weekly_trend(today),
            department_stats=self._department_stats(employees, records),
        )
        logger.debug("Manager dashboard for %s: %s present, %s absent", day, dashboard.present_today, dashboard.absent_today)
        return dashboard

    def employee_dashboard(self, user_id: str, today: date | None = None) -> EmployeeDashboard:
        today = self._today(today)
        day = format_date(today)
        return EmployeeDashboard(
            today_status=self._attendance.find_by_user_and_date(user_id, day),
            monthly_summary=self.monthly_summary(user_id, format_month(today)),
            recent_attendance=list(
                self._attendance.range_by_user(user_id, shift_days(day, -DEFAULT_RECENT_DAYS), day)
            ),
        )

    @staticmethod
    def _group_by_date(records: Iterable[AttendanceWithUser]) -> Dict[str, List[AttendanceWithUser]]:
        by_day: Dict[str, List[AttendanceWithUser]] = defaultdict(list)
        for r in records:
            by_day[r.record.work_date].append(r)
        return by_day

    @staticmethod
    def _department_stats(employees, records: Sequence[AttendanceWithUser]) -> List[DepartmentStat]:
        counts: Dict[str, Dict[str, int]] = {}
        for emp in employees:
            counts.setdefault(emp.department, {"present": 0, "absent": 0})

        for r in records:
            bucket = counts.get(r.department) if r.department else None
            if bucket is None:
                continue
            if r.status != AttendanceStatus.ABSENT:
                bucket["present"] += 1
            else:
                bucket["absent"] += 1

        with_record = {r.user_id for r in records}
        for emp in employees:
            if emp.user_id not in with_record:
                counts[emp.department]["absent"] += 1

        return [DepartmentStat(department=d, present=c["present"], absent=c["absent"]) for d, c in counts.items()]
