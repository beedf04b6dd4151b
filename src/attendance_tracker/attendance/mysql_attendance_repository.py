from __future__ import annotations

import logging
import uuid
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedIn, AlreadyCheckedOut, NotCheckedIn, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import date_text, db_cursor, decimal_text, fetchall, fetchone, time_text
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_COLUMNS = "attendance_id, user_id, work_date, check_in_time, check_out_time, status, total_hours, created_at"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=str(r["attendance_id"]),
        user_id=str(r["user_id"]),
        work_date=date_text(r["work_date"]),
        check_in_time=time_text(r.get("check_in_time")),
        check_out_time=time_text(r.get("check_out_time")),
        status=AttendanceStatus(r["status"]),
        total_hours=decimal_text(r.get("total_hours")),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    """MySQL-backed store.

    ``(user_id, work_date)`` is a UNIQUE KEY; check-in and checkout are
    conditional writes so concurrent duplicates lose on the database.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select_one(self, cur, user_id: str, work_date: str) -> Optional[AttendanceRecord]:
        cur.execute(
            f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s AND work_date=%s",
            (user_id, work_date),
        )
        row = fetchone(cur)
        return _to_record(row) if row else None

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (attendance_id,))
            row = fetchone(cur)
            return _to_record(row) if row else None

    def get_for_user_and_date(self, user_id: str, work_date: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select_one(cur, user_id, work_date)

    def create_checkin(
        self,
        *,
        user_id: str,
        work_date: str,
        check_in_time: str,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_records(attendance_id, user_id, work_date, check_in_time, status)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (str(uuid.uuid4()), user_id, work_date, check_in_time, status.value),
                )
            except mysql.connector.IntegrityError:
                # The day exists: only a placeholder without check-in may be filled.
                logger.debug("Record exists for %s on %s, filling placeholder", user_id, work_date)
                cur.execute(
                    """
                    UPDATE attendance_records
                    SET check_in_time=%s, status=%s
                    WHERE user_id=%s AND work_date=%s AND check_in_time IS NULL
                    """,
                    (check_in_time, status.value, user_id, work_date),
                )
                if cur.rowcount == 0:
                    raise AlreadyCheckedIn("Already checked in today")
            return self._select_one(cur, user_id, work_date)

    def update_checkout(
        self,
        *,
        user_id: str,
        work_date: str,
        check_out_time: str,
        total_hours: str,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, total_hours=%s, status=%s
                WHERE user_id=%s AND work_date=%s
                  AND check_in_time IS NOT NULL AND check_out_time IS NULL
                """,
                (check_out_time, total_hours, status.value, user_id, work_date),
            )
            if cur.rowcount == 0:
                existing = self._select_one(cur, user_id, work_date)
                if existing is None or not existing.has_checked_in:
                    raise NotCheckedIn("You haven't checked in today")
                raise AlreadyCheckedOut("Already checked out today")
            return self._select_one(cur, user_id, work_date)

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
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        attendance_id, user_id, work_date, check_in_time, check_out_time, status, total_hours
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (str(uuid.uuid4()), user_id, work_date, check_in_time, check_out_time, status.value, total_hours),
                )
            except mysql.connector.IntegrityError as exc:
                raise ValidationError(f"Attendance for {user_id} on {work_date} already exists") from exc
            return self._select_one(cur, user_id, work_date)

    def list_for_user(self, user_id: str, start_date: str, end_date: str) -> Sequence[AttendanceRecord]:
        return self.list_range(start_date, end_date, user_id=user_id)

    def list_range(
        self,
        start_date: str,
        end_date: str,
        *,
        user_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(user_id)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY work_date DESC, user_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_date(self, work_date: str) -> Sequence[AttendanceRecord]:
        return self.list_range(work_date, work_date)
