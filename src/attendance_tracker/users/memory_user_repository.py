from __future__ import annotations

import threading
import uuid
from typing import Dict, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import EMPLOYEE_CODE_PREFIX
from ..core.enums import Role
from ..core.exceptions import DuplicateUser
from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self._by_id: Dict[str, User] = {}
        self._id_by_email: Dict[str, str] = {}
        self._counter = 0
        self._lock = threading.Lock()

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        user_id = self._id_by_email.get(email.lower())
        return self._by_id.get(user_id) if user_id else None

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        department: str,
    ) -> User:
        with self._lock:
            if email.lower() in self._id_by_email:
                raise DuplicateUser("Email already registered")
            self._counter += 1
            user = User(
                user_id=str(uuid.uuid4()),
                name=name,
                email=email,
                password_hash=password_hash,
                role=role,
                employee_code=f"{EMPLOYEE_CODE_PREFIX}{self._counter:03d}",
                department=department,
                created_at=now_local(),
            )
            self._by_id[user.user_id] = user
            self._id_by_email[email.lower()] = user.user_id
            return user

    def list_by_role(self, role: Role) -> Sequence[User]:
        return [u for u in self._by_id.values() if u.role == role]
