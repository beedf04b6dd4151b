from __future__ import annotations

from datetime import datetime

import pytest

from attendance_tracker.core.exceptions import StorageUnavailable
from attendance_tracker.main import create_app

NOW = datetime(2025, 6, 18, 9, 15, 0)


@pytest.fixture
def app(monkeypatch):
    clock = {"now": NOW}
    monkeypatch.setattr("attendance_tracker.attendance.service.now_local", lambda: clock["now"])
    monkeypatch.setattr("attendance_tracker.attendance.controller.now_local", lambda: clock["now"])
    monkeypatch.setattr("attendance_tracker.reports.controller.now_local", lambda: clock["now"])
    monkeypatch.setattr("attendance_tracker.analytics.service.now_local", lambda: clock["now"])
    app = create_app("config.testing")
    app.clock = clock
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def _register(client, name, email, role="employee", department="Engineering"):
    return client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": "secret123", "role": role, "department": department},
    )


def test_requires_login(client):
    resp = client.post("/api/attendance/checkin")
    assert resp.status_code == 401
    assert resp.get_json()["kind"] == "authentication_error"


def test_check_in_and_out_flow(app, client):
    assert _register(client, "Ann Api", "ann@company.com").status_code == 201

    resp = client.post("/api/attendance/checkin")
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["status"] == "present"
    assert body["date"] == "2025-06-18"
    assert set(body) == {"id", "userId", "date", "checkInTime", "checkOutTime", "status", "totalHours"}

    again = client.post("/api/attendance/checkin")
    assert again.status_code == 409
    assert again.get_json()["kind"] == "already_checked_in"

    app.clock["now"] = datetime(2025, 6, 18, 17, 0, 0)
    out = client.post("/api/attendance/checkout").get_json()
    assert out["totalHours"] == "7.75"
    assert out["status"] == "present"

    assert client.post("/api/attendance/checkout").get_json()["kind"] == "already_checked_out"
    assert client.get("/api/attendance/today").get_json()["checkOutTime"] == "17:00:00"

    history = client.get("/api/attendance/my-history?month=2025-06").get_json()
    assert len(history["history"]) == 1
    assert history["summary"]["presentDays"] == 1


def test_checkout_without_check_in_is_bad_request(client):
    _register(client, "Ann Api", "ann@company.com")
    resp = client.post("/api/attendance/checkout")
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "not_checked_in"


def test_duplicate_registration(client):
    _register(client, "Ann Api", "ann@company.com")
    resp = _register(client, "Ann Again", "ann@company.com")
    assert resp.status_code == 409
    assert resp.get_json()["kind"] == "duplicate_user"


def test_login_and_me(client):
    _register(client, "Ann Api", "ann@company.com")
    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401

    assert client.post("/api/auth/login", json={"email": "ann@company.com", "password": "bad"}).status_code == 401
    resp = client.post("/api/auth/login", json={"email": "ann@company.com", "password": "secret123"})
    assert resp.status_code == 200
    assert client.get("/api/auth/me").get_json()["user"]["employeeId"] == "EMP001"


def test_manager_routes_forbidden_for_employee(client):
    _register(client, "Ann Api", "ann@company.com")
    assert client.get("/api/dashboard/manager").status_code == 403


def test_manager_views(app, client):
    _register(client, "Ann Api", "ann@company.com")
    client.post("/api/attendance/checkin")
    client.post("/api/auth/logout")

    _register(client, "Sam Boss", "sam@company.com", role="manager", department="Management")

    dash = client.get("/api/dashboard/manager").get_json()
    assert dash["totalEmployees"] == 1
    assert dash["presentToday"] == 1
    assert dash["absentEmployees"] == []

    report = client.get("/api/attendance/report?startDate=2025-06-01&endDate=2025-06-30&employee=all").get_json()
    assert report["summary"]["totalRecords"] == 1
    assert report["records"][0]["user"]["name"] == "Ann Api"

    assert client.get("/api/attendance/report?startDate=2025-06-01").status_code == 400

    calendar = client.get("/api/attendance/calendar?month=2025-06").get_json()["calendar"]
    assert len(calendar) == 30
    assert calendar[17]["present"] == 1

    csv_resp = client.get("/api/attendance/export?date=2025-06-18")
    assert csv_resp.mimetype == "text/csv"
    lines = csv_resp.get_data(as_text=True).splitlines()
    assert lines[0] == "Employee ID,Name,Department,Date,Check In,Check Out,Total Hours,Status"
    assert lines[1] == "EMP001,Ann Api,Engineering,2025-06-18,09:15:00,,,present"

    employees = client.get("/api/employees").get_json()["employees"]
    assert [e["email"] for e in employees] == ["ann@company.com"]


def test_check_in_on_absent_placeholder_returns_ok(app, client):
    _register(client, "Ann Api", "ann@company.com")
    container = app.extensions["attendance_tracker"]
    ann = container.user_service.get_user_by_email("ann@company.com")
    container.attendance_service.import_record(ann.user_id, "2025-06-18")

    resp = client.post("/api/attendance/checkin")
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "present"


def test_storage_failure_is_service_unavailable(app, client, monkeypatch):
    _register(client, "Ann Api", "ann@company.com")
    container = app.extensions["attendance_tracker"]

    def unavailable(*args, **kwargs):
        raise StorageUnavailable("Database is unavailable")

    monkeypatch.setattr(container.attendance_repo, "get_for_user_and_date", unavailable)

    resp = client.post("/api/attendance/checkin")
    assert resp.status_code == 503
    assert resp.get_json()["kind"] == "storage_unavailable"
