from __future__ import annotations

import threading
import uuid
from bisect import bisect_left, bisect_right, insort
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..common.datetime_utils import now_local
from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedIn, AlreadyCheckedOut, NotCheckedIn, ValidationError
from .model import AttendanceRecord
from .repository import AttendanceRepository

Key = Tuple[str, str]


class InMemoryAttendanceRepository(AttendanceRepository):
    """Indexed in-process store.

    Records are keyed by ``(user_id, work_date)``; per-user and global sorted
    date lists serve range queries. Mutations for one key are serialized by a
    lock dedicated to that key.
    """

    def __init__(self):
        self._records: Dict[Key, AttendanceRecord] = {}
        self._key_by_id: Dict[str, Key] = {}
        self._dates_by_user: Dict[str, List[str]] = {}
        self._users_by_date: Dict[str, Set[str]] = {}
        self._dates: List[str] = []

        self._index_lock = threading.RLock()
        self._key_locks: Dict[Key, threading.Lock] = {}

    def _lock_for(self, key: Key) -> threading.Lock:
        with self._index_lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.Lock()
            return lock

    def _insert(self, record: AttendanceRecord) -> AttendanceRecord:
        key = (record.user_id, record.work_date)
        with self._index_lock:
            self._records[key] = record
            self._key_by_id[record.attendance_id] = key
            insort(self._dates_by_user.setdefault(record.user_id, []), record.work_date)
            users = self._users_by_date.setdefault(record.work_date, set())
            if not users:
                insort(self._dates, record.work_date)
            users.add(record.user_id)
        return record

    def _replace(self, record: AttendanceRecord) -> AttendanceRecord:
        with self._index_lock:
            self._records[(record.user_id, record.work_date)] = record
        return record

    def _new_record(self, **fields) -> AttendanceRecord:
        return AttendanceRecord(attendance_id=str(uuid.uuid4()), created_at=now_local(), **fields)

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        key = self._key_by_id.get(attendance_id)
        return self._records.get(key) if key else None

    def get_for_user_and_date(self, user_id: str, work_date: str) -> Optional[AttendanceRecord]:
        return self._records.get((user_id, work_date))

    def create_checkin(
        self,
        *,
        user_id: str,
        work_date: str,
        check_in_time: str,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        key = (user_id, work_date)
        with self._lock_for(key):
            existing = self._records.get(key)
            if existing is None:
                return self._insert(
                    self._new_record(
                        user_id=user_id,
                        work_date=work_date,
                        check_in_time=check_in_time,
                        check_out_time=None,
                        status=status,
                        total_hours=None,
                    )
                )
            if existing.has_checked_in:
                raise AlreadyCheckedIn("Already checked in today")
            return self._replace(existing.with_check_in(check_in_time=check_in_time, status=status))

    def update_checkout(
        self,
        *,
        user_id: str,
        work_date: str,
        check_out_time: str,
        total_hours: str,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        key = (user_id, work_date)
        with self._lock_for(key):
            existing = self._records.get(key)
            if existing is None or not existing.has_checked_in:
                raise NotCheckedIn("You haven't checked in today")
            if existing.has_checked_out:
                raise AlreadyCheckedOut("Already checked out today")
            return self._replace(
                existing.with_check_out(check_out_time=check_out_time, total_hours=total_hours, status=status)
            )

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
        key = (user_id, work_date)
        with self._lock_for(key):
            if key in self._records:
                raise ValidationError(f"Attendance for {user_id} on {work_date} already exists")
            return self._insert(
                self._new_record(
                    user_id=user_id,
                    work_date=work_date,
                    check_in_time=check_in_time,
                    check_out_time=check_out_time,
                    status=status,
                    total_hours=total_hours,
                )
            )

    def list_for_user(self, user_id: str, start_date: str, end_date: str) -> Sequence[AttendanceRecord]:
        with self._index_lock:
            dates = self._dates_by_user.get(user_id, [])
            window = dates[bisect_left(dates, start_date):bisect_right(dates, end_date)]
            return [self._records[(user_id, d)] for d in reversed(window)]

    def list_range(
        self,
        start_date: str,
        end_date: str,
        *,
        user_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        if user_id is not None:
            return self.list_for_user(user_id, start_date, end_date)

        with self._index_lock:
            window = self._dates[bisect_left(self._dates, start_date):bisect_right(self._dates, end_date)]
            return [
                self._records[(uid, d)]
                for d in reversed(window)
                for uid in sorted(self._users_by_date[d])
            ]

    def list_for_date(self, work_date: str) -> Sequence[AttendanceRecord]:
        with self._index_lock:
            return [self._records[(uid, work_date)] for uid in sorted(self._users_by_date.get(work_date, ()))]
