from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class UserProfile:
    """Public view of a user (never carries the password hash)."""

    user_id: str
    name: str
    email: str
    role: Role
    employee_code: str
    department: str
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "employeeId": self.employee_code,
            "department": self.department,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, no DB access. Role is fixed at creation.
    """

    user_id: str
    name: str
    email: str
    password_hash: str
    role: Role
    employee_code: str
    department: str
    created_at: Optional[datetime] = None

    def profile(self) -> UserProfile:
        return UserProfile(
            user_id=self.user_id,
            name=self.name,
            email=self.email,
            role=self.role,
            employee_code=self.employee_code,
            department=self.department,
            created_at=self.created_at,
        )
