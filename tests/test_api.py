from dataclasses import replace
from datetime import datetime, timezone

import timeconnect.main as main_module
from timeconnect.database.connection import DBConfig, DatabaseConnection

from conftest import PASSWORD


def test_health(client):
    res = client.get("/health")

    assert res.status_code == 200
    assert res.get_json() == {"status": "ok"}


def test_register_then_profile(client):
    res = client.post(
        "/auth/register",
        json={
            "email": "eve@example.com",
            "names": "Eve",
            "employeeId": "EMP100",
            "phoneNumber": "250781111111",
            "password": "password123",
        },
    )
    assert res.status_code == 201
    body = res.get_json()
    assert "password" not in body["employee"]

    profile = client.get("/auth/profile", headers={"Authorization": f"Bearer {body['accessToken']}"})
    assert profile.status_code == 200
    assert profile.get_json()["employeeId"] == "EMP100"


def test_register_validation_and_conflict(client, employee):
    bad = client.post("/auth/register", json={"email": "x@example.com"})
    assert bad.status_code == 400
    assert bad.get_json()["success"] is False

    dup = client.post(
        "/auth/register",
        json={
            "email": "alice@example.com",
            "names": "Alice",
            "employeeId": "EMP555",
            "phoneNumber": "250781111111",
            "password": "password123",
        },
    )
    assert dup.status_code == 409


def test_login_and_logout(client, employee):
    res = client.post("/auth/login", json={"email": "alice@example.com", "password": PASSWORD})
    assert res.status_code == 200
    token = res.get_json()["accessToken"]

    out = client.post("/auth/logout", headers={"Authorization": f"Bearer {token}"})
    assert out.get_json() == {"message": "Logout successful. Please delete your access token."}

    wrong = client.post("/auth/login", json={"email": "alice@example.com", "password": "nope-nope"})
    assert wrong.status_code == 401


def test_forgot_password_never_returns_token(client, employee, dispatcher):
    known = client.post("/auth/forgot-password", json={"email": "alice@example.com"})
    unknown = client.post("/auth/forgot-password", json={"email": "ghost@example.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.get_json() == unknown.get_json()
    token = dispatcher.sent[0].token
    assert token not in known.get_data(as_text=True)

    reset = client.post("/auth/reset-password", json={"token": token, "newPassword": "fresh-pass-9"})
    assert reset.status_code == 200
    again = client.post("/auth/reset-password", json={"token": token, "newPassword": "fresh-pass-9"})
    assert again.status_code == 400


def test_protected_routes_require_token(client):
    assert client.get("/employees").status_code == 401
    assert client.get("/attendance/employee/EMP001", headers={"Authorization": "Bearer junk"}).status_code == 401


def test_employees_endpoints(client, employee, auth_headers):
    listing = client.get("/employees?page=1&limit=5", headers=auth_headers).get_json()
    assert listing["total"] == 1
    assert listing["totalPages"] == 1

    assert client.get(f"/employees/{employee.id}", headers=auth_headers).status_code == 200
    assert client.get("/employees/not-a-uuid", headers=auth_headers).status_code == 400
    assert client.get("/employees/email/alice@example.com", headers=auth_headers).status_code == 200
    assert client.get("/employees/employeeId/EMP404", headers=auth_headers).status_code == 404

    patched = client.patch(f"/employees/{employee.id}", json={"names": "Alice N."}, headers=auth_headers)
    assert patched.get_json()["names"] == "Alice N."


def test_attendance_flow(client, employee, auth_headers, attendance_repo):
    today = client.get("/attendance/employee/EMP001/today", headers=auth_headers)
    assert today.get_json() == {"message": "No attendance record for today"}

    first = client.post("/attendance/record", json={"employeeIdentifier": "EMP001"}, headers=auth_headers)
    assert first.status_code == 201
    body = first.get_json()
    assert body["entry"] == body["depart"]
    assert body["activeHours"] == 0
    assert body["comment"] == "N/A"
    assert body["employeeId"] == employee.id

    history = client.get("/attendance/employee/alice@example.com", headers=auth_headers).get_json()
    assert [r["id"] for r in history] == [body["id"]]

    missing = client.post("/attendance/record", json={"employeeIdentifier": "EMP999"}, headers=auth_headers)
    assert missing.status_code == 404
    assert missing.get_json()["message"] == "EMPLOYEE_NOT_FOUND"


def test_report_downloads(client, employee, auth_headers, attendance_service):
    attendance_service.record_event("EMP001", now=datetime(2025, 1, 6, 8, 0, tzinfo=timezone.utc))

    pdf = client.get("/reports/attendance/pdf", headers=auth_headers)
    assert pdf.status_code == 200
    assert pdf.mimetype == "application/pdf"
    assert pdf.data.startswith(b"%PDF")
    assert "attendance-report-" in pdf.headers["Content-Disposition"]

    xlsx = client.get("/reports/attendance/excel?employeeId=EMP001&startDate=2025-01-01", headers=auth_headers)
    assert xlsx.status_code == 200
    assert xlsx.headers["Content-Disposition"].endswith(".xlsx")

    bad = client.get("/reports/attendance/pdf?startDate=yesterday", headers=auth_headers)
    assert bad.status_code == 400


def test_unknown_route_is_json(client):
    res = client.get("/nope")

    assert res.status_code == 404
    assert res.get_json()["success"] is False


def test_app_stops_dispatcher_at_exit(monkeypatch, container):
    built = replace(container, conn=DatabaseConnection(DBConfig.from_dict({})))
    hooks = []
    monkeypatch.setattr(main_module, "build_container", lambda settings: built)
    monkeypatch.setattr(main_module.atexit, "register", lambda fn, **kwargs: hooks.append((fn, kwargs)))

    main_module.create_app()

    assert hooks == [(built.dispatcher.shutdown, {"wait": False, "cancel_pending": True})]
