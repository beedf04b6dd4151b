from __future__ import annotations

import uuid
from typing import Optional, Sequence

import mysql.connector

from ..core.constants import EMPLOYEE_CODE_PREFIX
from ..core.enums import Role
from ..core.exceptions import DuplicateUser
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, name, email, password_hash, role, employee_code, department, created_at"


def _to_user(row: dict) -> User:
    return User(
        user_id=str(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        employee_code=row.get("employee_code") or "",
        department=row["department"],
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        department: str,
    ) -> User:
        user_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO users(user_id, name, email, password_hash, role, department)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (user_id, name, email, password_hash, role.value, department),
                )
            except mysql.connector.IntegrityError as exc:
                raise DuplicateUser("Email already registered") from exc

            # Employee code follows the auto-increment sequence (EMP001, EMP002, ...).
            cur.execute(
                "UPDATE users SET employee_code=CONCAT(%s, LPAD(seq, 3, '0')) WHERE user_id=%s",
                (EMPLOYEE_CODE_PREFIX, user_id),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            return _to_user(fetchone(cur))

    def list_by_role(self, role: Role) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE role=%s ORDER BY seq", (role.value,))
            return [_to_user(r) for r in fetchall(cur)]
