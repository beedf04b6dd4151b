from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Attendance records keyed by ``(user_id, work_date)``.

    Range queries use inclusive ``YYYY-MM-DD`` bounds and return records
    newest first (ties ordered by user id).
    """

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: str, work_date: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: str,
        work_date: str,
        check_in_time: str,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        """Atomically create the day's record, or fill a placeholder without check-in.

        Raises AlreadyCheckedIn when the day already has a check-in.
        """

        raise NotImplementedError

    def update_checkout(
        self,
        *,
        user_id: str,
        work_date: str,
        check_out_time: str,
        total_hours: str,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        """Atomically write checkout fields on a checked-in, not checked-out record.

        Raises NotCheckedIn or AlreadyCheckedOut.
        """

        raise NotImplementedError

    def add_record(
        self,
        *,
        user_id: str,
        work_date: str,
        check_in_time: Optional[str],
        check_out_time: Optional[str],
        status: AttendanceStatus,
        total_hours: Optional[str],
    ) -> AttendanceRecord:
        """Bulk seed/import only. Raises ValidationError if the day already exists."""

        raise NotImplementedError

    def list_for_user(self, user_id: str, start_date: str, end_date: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_range(
        self,
        start_date: str,
        end_date: str,
        *,
        user_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, work_date: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
