import pytest

from attendance_tracker.core.enums import Role
from attendance_tracker.core.exceptions import AuthenticationError, DuplicateUser, ValidationError


def test_register_assigns_sequential_codes(container):
    users = container.user_service
    first = users.register(name="Ann", email="ann@company.com", password="secret1", department="Ops")
    second = users.register(name="Ben", email="ben@company.com", password="secret2", role="manager", department="Ops")

    assert first.employee_code == "EMP001"
    assert second.employee_code == "EMP002"
    assert second.role == Role.MANAGER
    assert "password" not in str(first.to_dict())


def test_duplicate_email_rejected(container):
    users = container.user_service
    users.register(name="Ann", email="ann@company.com", password="secret1", department="Ops")
    with pytest.raises(DuplicateUser):
        users.register(name="Ann Again", email="ann@company.com", password="secret1", department="Ops")


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(name="A", email="a@company.com", password="secret1", department="Ops"),
        dict(name="Ann", email="not-an-email", password="secret1", department="Ops"),
        dict(name="Ann", email="a@company.com", password="short", department="Ops"),
        dict(name="Ann", email="a@company.com", password="secret1", department="  "),
        dict(name="Ann", email="a@company.com", password="secret1", department="Ops", role="admin"),
    ],
)
def test_register_validation(container, kwargs):
    with pytest.raises(ValidationError):
        container.user_service.register(**kwargs)


def test_list_employees_excludes_managers(container, register):
    register("Emp One")
    register("Boss Person", role="manager")

    assert [e.name for e in container.user_service.list_employees()] == ["Emp One"]


def test_authenticate(container, register):
    profile = register("Ann Login", email="ann@company.com")

    assert container.auth_service.authenticate("ann@company.com", "secret123").user_id == profile.user_id
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("ann@company.com", "wrong-password")
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("nobody@company.com", "secret123")
