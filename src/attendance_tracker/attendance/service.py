from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from ..common.datetime_utils import format_date, format_time, now_local
from ..common.validators import require_date_range, require_iso_date, require_time_of_day
from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedOut, InvalidCheckOut, NotCheckedIn, RecordNotFound
from ..users.model import UserProfile
from ..users.repository import UserRepository
from .classifier import derive_check_in_status, derive_duration, format_hours, reconcile_status_on_checkout
from .model import AttendanceRecord, AttendanceWithUser
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Two-phase check-in/check-out writes and record lookups.

    Status is always derived from the times; callers never choose it.
    """

    def __init__(self, attendance: AttendanceRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def _require_user(self, user_id: str) -> None:
        if not self._users.get_by_id(user_id):
            raise RecordNotFound("User not found")

    def find_by_user_and_date(self, user_id: str, work_date: str) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(user_id, require_iso_date(work_date))

    def get_record(self, attendance_id: str) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise RecordNotFound("Attendance record not found")
        return record

    def upsert_check_in(self, user_id: str, work_date: str, check_in_time: str) -> AttendanceRecord:
        require_iso_date(work_date)
        check_in_time = require_time_of_day(check_in_time, "Check-in time")
        self._require_user(user_id)

        status = derive_check_in_status(check_in_time)
        record = self._attendance.create_checkin(
            user_id=user_id,
            work_date=work_date,
            check_in_time=check_in_time,
            status=status,
        )
        logger.info("Check-in user=%s date=%s time=%s status=%s", user_id, work_date, check_in_time, status.value)
        return record

    def apply_check_out(self, user_id: str, work_date: str, check_out_time: str) -> AttendanceRecord:
        require_iso_date(work_date)
        check_out_time = require_time_of_day(check_out_time, "Check-out time")

        existing = self._attendance.get_for_user_and_date(user_id, work_date)
        if not existing or not existing.has_checked_in:
            raise NotCheckedIn("You haven't checked in today")
        if existing.has_checked_out:
            raise AlreadyCheckedOut("Already checked out today")

        hours = derive_duration(existing.check_in_time, check_out_time)
        if hours < 0:
            raise InvalidCheckOut(
                f"Check-out time {check_out_time} is earlier than check-in time {existing.check_in_time}"
            )
        status = reconcile_status_on_checkout(existing.status, hours)

        # update_checkout re-checks both conditions atomically.
        record = self._attendance.update_checkout(
            user_id=user_id,
            work_date=work_date,
            check_out_time=check_out_time,
            total_hours=format_hours(hours),
            status=status,
        )
        logger.info("Check-out user=%s date=%s hours=%s status=%s", user_id, work_date, record.total_hours, status.value)
        return record

    def check_in(self, user_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        return self.upsert_check_in(user_id, format_date(now.date()), format_time(now))

    def check_out(self, user_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        return self.apply_check_out(user_id, format_date(now.date()), format_time(now))

    def import_record(
        self,
        user_id: str,
        work_date: str,
        *,
        check_in_time: Optional[str] = None,
        check_out_time: Optional[str] = None,
    ) -> AttendanceRecord:
        """Bulk seed/import of a past day. No check-in means an explicit absent record."""
        require_iso_date(work_date)
        self._require_user(user_id)

        status = AttendanceStatus.ABSENT
        total_hours = None
        if check_in_time:
            check_in_time = require_time_of_day(check_in_time, "Check-in time")
            status = derive_check_in_status(check_in_time)
            if check_out_time:
                check_out_time = require_time_of_day(check_out_time, "Check-out time")
                hours = derive_duration(check_in_time, check_out_time)
                if hours < 0:
                    raise InvalidCheckOut(f"Check-out time {check_out_time} is earlier than check-in time {check_in_time}")
                status = reconcile_status_on_checkout(status, hours)
                total_hours = format_hours(hours)
        else:
            check_out_time = None

        return self._attendance.add_record(
            user_id=user_id,
            work_date=work_date,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            status=status,
            total_hours=total_hours,
        )

    def range_by_user(self, user_id: str, start_date: str, end_date: str) -> Sequence[AttendanceRecord]:
        require_date_range(start_date, end_date)
        return self._attendance.list_for_user(user_id, start_date, end_date)

    def range_all(
        self,
        start_date: str,
        end_date: str,
        user_id: Optional[str] = None,
    ) -> List[AttendanceWithUser]:
        require_date_range(start_date, end_date)
        return self._join(self._attendance.list_range(start_date, end_date, user_id=user_id))

    def for_date(self, work_date: str) -> List[AttendanceWithUser]:
        return self._join(self._attendance.list_for_date(require_iso_date(work_date)))

    def _join(self, records: Sequence[AttendanceRecord]) -> List[AttendanceWithUser]:
        profiles: Dict[str, Optional[UserProfile]] = {}
        joined = []
        for r in records:
            if r.user_id not in profiles:
                user = self._users.get_by_id(r.user_id)
                profiles[r.user_id] = user.profile() if user else None
            joined.append(AttendanceWithUser(record=r, user=profiles[r.user_id]))
        return joined
