from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DuplicateUser, ValidationError
from .model import UserProfile
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> UserProfile:
        user = self._users.get_by_email((email or "").strip())
        if not user:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            logger.info("Rejected login for %s", user.email)
            raise AuthenticationError("Invalid email or password")

        return user.profile()


class UserService:
    """Use case: user directory (registration and lookups)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: str | Role = Role.EMPLOYEE,
        department: str,
    ) -> UserProfile:
        name = require_non_empty(name, "Name")
        require_min_length(name, "Name", 2)
        email = require_email(email)
        require_min_length(password, "Password", 6)
        department = require_non_empty(department, "Department")

        try:
            role = Role(role)
        except ValueError:
            raise ValidationError(f"Unknown role: {role!r}")

        if self._users.get_by_email(email):
            raise DuplicateUser("Email already registered")

        user = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            department=department,
        )
        logger.info("Registered %s %s (%s)", user.role.value, user.employee_code, user.department)
        return user.profile()

    def get_user(self, user_id: str) -> Optional[UserProfile]:
        user = self._users.get_by_id(user_id)
        return user.profile() if user else None

    def get_user_by_email(self, email: str) -> Optional[UserProfile]:
        user = self._users.get_by_email(email)
        return user.profile() if user else None

    def list_employees(self) -> Sequence[UserProfile]:
        return [u.profile() for u in self._users.list_by_role(Role.EMPLOYEE)]
