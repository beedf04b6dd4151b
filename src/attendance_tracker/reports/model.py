from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..attendance.model import AttendanceWithUser


@dataclass(frozen=True)
class ReportSummary:
    total_records: int
    present_count: int
    absent_count: int
    late_count: int
    half_day_count: int
    total_hours: float

    def to_dict(self) -> dict:
        return {
            "totalRecords": self.total_records,
            "presentCount": self.present_count,
            "absentCount": self.absent_count,
            "lateCount": self.late_count,
            "halfDayCount": self.half_day_count,
            "totalHours": self.total_hours,
        }


@dataclass(frozen=True)
class AttendanceReport:
    start_date: str
    end_date: str
    records: List[AttendanceWithUser]
    summary: ReportSummary

    def to_dict(self) -> dict:
        return {
            "records": [r.to_dict() for r in self.records],
            "summary": self.summary.to_dict(),
        }
