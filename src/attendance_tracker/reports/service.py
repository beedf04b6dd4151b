from __future__ import annotations

from typing import Iterable, List, Optional

from ..analytics.service import count_status
from ..attendance.classifier import parse_hours
from ..attendance.model import AttendanceWithUser
from ..attendance.service import AttendanceService
from ..common.validators import require_date_range
from ..core.constants import ALL_EMPLOYEES
from ..core.enums import AttendanceStatus
from .model import AttendanceReport, ReportSummary

CSV_HEADER = ["Employee ID", "Name", "Department", "Date", "Check In", "Check Out", "Total Hours", "Status"]


class AttendanceReportService:
    """Ad hoc reports: records over a date range, optionally for one employee."""

    def __init__(self, attendance: AttendanceService):
        self._attendance = attendance

    def build_report(self, *, start: str, end: str, employee: Optional[str] = ALL_EMPLOYEES) -> AttendanceReport:
        require_date_range(start, end)
        user_id = None if not employee or employee == ALL_EMPLOYEES else employee
        records = self._attendance.range_all(start, end, user_id)
        return AttendanceReport(start_date=start, end_date=end, records=records, summary=summarize(records))


def summarize(records: List[AttendanceWithUser]) -> ReportSummary:
    return ReportSummary(
        total_records=len(records),
        present_count=count_status(records, AttendanceStatus.PRESENT),
        absent_count=count_status(records, AttendanceStatus.ABSENT),
        late_count=count_status(records, AttendanceStatus.LATE),
        half_day_count=count_status(records, AttendanceStatus.HALF_DAY),
        total_hours=sum(parse_hours(r.record.total_hours) for r in records),
    )


def csv_rows(records: Iterable[AttendanceWithUser]) -> List[List[str]]:
    """Export rows in CSV_HEADER order; unknown owners and open fields become blank."""
    rows = []
    for r in records:
        rec, user = r.record, r.user
        rows.append(
            [
                user.employee_code if user else "",
                user.name if user else "",
                user.department if user else "",
                rec.work_date,
                rec.check_in_time or "",
                rec.check_out_time or "",
                rec.total_hours or "",
                rec.status.value,
            ]
        )
    return rows
