from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..attendance.model import AttendanceRecord, AttendanceWithUser
from ..users.model import UserProfile


@dataclass(frozen=True)
class MonthlySummary:
    present_days: int = 0
    absent_days: int = 0
    late_days: int = 0
    half_days: int = 0
    total_hours: float = 0.0

    def to_dict(self) -> dict:
        return {
            "presentDays": self.present_days,
            "absentDays": self.absent_days,
            "lateDays": self.late_days,
            "halfDays": self.half_days,
            "totalHours": self.total_hours,
        }


@dataclass(frozen=True)
class CalendarDay:
    date: str
    present: int
    absent: int
    late: int
    half_day: int
    total: int
    records: List[AttendanceWithUser] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "halfDay": self.half_day,
            "total": self.total,
            "records": [r.to_dict() for r in self.records],
        }


@dataclass(frozen=True)
class TrendPoint:
    date: str
    present: int
    absent: int
    late: int

    def to_dict(self) -> dict:
        return {"date": self.date, "present": self.present, "absent": self.absent, "late": self.late}


@dataclass(frozen=True)
class DepartmentStat:
    department: str
    present: int
    absent: int

    def to_dict(self) -> dict:
        return {"department": self.department, "present": self.present, "absent": self.absent}


@dataclass(frozen=True)
class ManagerDashboard:
    total_employees: int
    present_today: int
    absent_today: int
    late_today: int
    absent_employees: List[UserProfile]
    weekly_trend: List[TrendPoint]
    department_stats: List[DepartmentStat]

    def to_dict(self) -> dict:
        return {
            "totalEmployees": self.total_employees,
            "presentToday": self.present_today,
            "absentToday": self.absent_today,
            "lateToday": self.late_today,
            "absentEmployees": [u.to_dict() for u in self.absent_employees],
            "weeklyTrend": [p.to_dict() for p in self.weekly_trend],
            "departmentStats": [d.to_dict() for d in self.department_stats],
        }


@dataclass(frozen=True)
class EmployeeDashboard:
    today_status: Optional[AttendanceRecord]
    monthly_summary: MonthlySummary
    recent_attendance: List[AttendanceRecord]

    def to_dict(self) -> dict:
        return {
            "todayStatus": self.today_status.to_dict() if self.today_status else None,
            "monthlySummary": self.monthly_summary.to_dict(),
            "recentAttendance": [r.to_dict() for r in self.recent_attendance],
        }
