from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .analytics.service import AttendanceAnalyticsService
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.exceptions import ValidationError
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import AttendanceReportService
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    analytics_service: AttendanceAnalyticsService
    report_service: AttendanceReportService


def build_container(*, storage_backend: str = "memory", db_config: Optional[dict] = None) -> Container:
    conn = None
    if storage_backend == "mysql":
        conn = DatabaseConnection(DBConfig.from_dict(db_config or {}))
        users_repo = MySQLUserRepository(conn)
        attendance_repo = MySQLAttendanceRepository(conn)
    elif storage_backend == "memory":
        users_repo = InMemoryUserRepository()
        attendance_repo = InMemoryAttendanceRepository()
    else:
        raise ValidationError(f"Unknown storage backend: {storage_backend!r}")
    logger.info("Using %s storage", storage_backend)

    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo)
    attendance_service = AttendanceService(attendance_repo, users_repo)
    analytics_service = AttendanceAnalyticsService(attendance_service, user_service)
    report_service = AttendanceReportService(attendance_service)

    return Container(
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        auth_service=auth_service,
        user_service=user_service,
        attendance_service=attendance_service,
        analytics_service=analytics_service,
        report_service=report_service,
    )
