from __future__ import annotations

from datetime import datetime

import pytest

from attendance_tracker.container import build_container


@pytest.fixture
def fixed_now():
    # A Wednesday.
    return datetime(2025, 6, 18, 9, 15, 0)


@pytest.fixture
def container():
    return build_container(storage_backend="memory")


@pytest.fixture
def register(container):
    def _register(name, *, department="Engineering", role="employee", email=None):
        email = email or f"{name.lower().replace(' ', '.')}@company.com"
        return container.user_service.register(
            name=name, email=email, password="secret123", role=role, department=department
        )

    return _register
