from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus
from ..users.model import UserProfile


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance for one calendar day.

    Dates are ``YYYY-MM-DD`` and times ``HH:MM:SS`` strings, so text order
    equals chronological order.
    """

    attendance_id: str
    user_id: str
    work_date: str
    check_in_time: Optional[str]
    check_out_time: Optional[str]
    status: AttendanceStatus
    total_hours: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def has_checked_in(self) -> bool:
        return self.check_in_time is not None

    @property
    def has_checked_out(self) -> bool:
        return self.check_out_time is not None

    def with_check_in(self, *, check_in_time: str, status: AttendanceStatus) -> "AttendanceRecord":
        return replace(self, check_in_time=check_in_time, status=status)

    def with_check_out(self, *, check_out_time: str, total_hours: str, status: AttendanceStatus) -> "AttendanceRecord":
        return replace(self, check_out_time=check_out_time, total_hours=total_hours, status=status)

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "userId": self.user_id,
            "date": self.work_date,
            "checkInTime": self.check_in_time,
            "checkOutTime": self.check_out_time,
            "status": self.status.value,
            "totalHours": self.total_hours,
        }


@dataclass(frozen=True)
class AttendanceWithUser:
    """Read-model: a record joined with its owner's public profile.

    ``user`` is None when the owner can no longer be found.
    """

    record: AttendanceRecord
    user: Optional[UserProfile]

    @property
    def status(self) -> AttendanceStatus:
        return self.record.status

    @property
    def user_id(self) -> str:
        return self.record.user_id

    @property
    def department(self) -> Optional[str]:
        return self.user.department if self.user else None

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data["user"] = self.user.to_dict() if self.user else None
        return data
