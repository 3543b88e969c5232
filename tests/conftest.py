from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

os.environ.setdefault("APP_ENV", "testing")

from timeconnect.attendance.model import AttendanceRecord, AttendanceReportRow  # noqa: E402
from timeconnect.attendance.policy import AttendancePolicy  # noqa: E402
from timeconnect.attendance.service import AttendanceService  # noqa: E402
from timeconnect.auth.tokens import TokenService  # noqa: E402
from timeconnect.container import wire_services  # noqa: E402
from timeconnect.core.exceptions import DuplicateRecordError  # noqa: E402
from timeconnect.employees.model import Employee  # noqa: E402
from timeconnect.employees.service import EmployeeService  # noqa: E402
from timeconnect.main import create_app  # noqa: E402

PASSWORD = "secret-pass-1"
# Hashed once; scrypt is slow enough to matter across the suite.
PASSWORD_HASH = generate_password_hash(PASSWORD)


class InMemoryEmployees:
    def __init__(self):
        self.by_id: dict[str, Employee] = {}

    def add(self, employee: Employee) -> Employee:
        self.by_id[employee.id] = employee
        return employee

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self.by_id.get(employee_id)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return next((e for e in self.by_id.values() if e.email == email), None)

    def get_by_employee_code(self, employee_code: str) -> Optional[Employee]:
        return next((e for e in self.by_id.values() if e.employee_code == employee_code), None)

    def get_by_reset_token_hash(self, token_hash: str) -> Optional[Employee]:
        return next((e for e in self.by_id.values() if e.reset_token_hash == token_hash), None)

    def create(self, employee: Employee) -> None:
        for other in self.by_id.values():
            if other.email == employee.email or other.employee_code == employee.employee_code:
                raise DuplicateRecordError("duplicate employee")
        self.by_id[employee.id] = employee

    def update(self, employee: Employee) -> bool:
        if employee.id not in self.by_id:
            return False
        self.by_id[employee.id] = employee
        return True

    def list_page(self, *, offset: int, limit: int, search: Optional[str] = None):
        items = list(self.by_id.values())
        if search:
            items = [e for e in items if search.lower() in e.names.lower()]
        items.sort(key=lambda e: e.created_at, reverse=True)
        return items[offset:offset + limit], len(items)


class InMemoryAttendance:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.by_key: dict[tuple[str, date], AttendanceRecord] = {}

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self.by_key.get((employee_id, work_date))

    def list_for_employee(self, employee_id: str):
        items = [r for r in self.by_key.values() if r.employee_id == employee_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items

    def create(self, record: AttendanceRecord) -> None:
        key = (record.employee_id, record.work_date)
        if key in self.by_key:
            raise DuplicateRecordError("duplicate attendance")
        self.by_key[key] = record

    def update(self, record: AttendanceRecord) -> bool:
        key = (record.employee_id, record.work_date)
        if key not in self.by_key:
            return False
        self.by_key[key] = record
        return True

    def get_report_rows(self, *, start_date=None, end_date=None, employee_id=None):
        rows = []
        for r in sorted(self.by_key.values(), key=lambda r: r.work_date, reverse=True):
            if start_date and r.work_date < start_date:
                continue
            if end_date and r.work_date > end_date:
                continue
            if employee_id and r.employee_id != employee_id:
                continue
            e = self._employees.get_by_id(r.employee_id)
            rows.append(
                AttendanceReportRow(
                    employee_id=e.id,
                    employee_code=e.employee_code,
                    names=e.names,
                    work_date=r.work_date,
                    entry_time=r.entry_time,
                    depart_time=r.depart_time,
                    active_hours=r.active_hours,
                    status=r.status,
                    comment=r.comment,
                )
            )
        return rows


@dataclass
class FakeDispatcher:
    """Collects notifications instead of sending them; can be told to fail."""

    fail: bool = False

    def __post_init__(self):
        self.sent = []

    def dispatch(self, notification):
        if self.fail:
            raise RuntimeError("queue unavailable")
        self.sent.append(notification)

    def shutdown(self, *, wait=True, cancel_pending=False):
        self.stopped = True


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 6, 8, 30, tzinfo=timezone.utc)


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees()


@pytest.fixture
def attendance_repo(employees_repo) -> InMemoryAttendance:
    return InMemoryAttendance(employees_repo)


@pytest.fixture
def dispatcher() -> FakeDispatcher:
    return FakeDispatcher()


@pytest.fixture
def make_employee(employees_repo):
    counter = {"n": 0}

    def _make(**overrides) -> Employee:
        counter["n"] += 1
        n = counter["n"]
        created = datetime(2025, 1, 1, tzinfo=timezone.utc).replace(minute=n)
        fields = dict(
            id=f"00000000-0000-4000-8000-{n:012d}",
            email=f"employee{n}@example.com",
            names=f"Employee {n}",
            phone_number="250781234567",
            employee_code=f"EMP{n:03d}",
            password_hash=PASSWORD_HASH,
            created_at=created,
            updated_at=created,
        )
        fields.update(overrides)
        return employees_repo.add(Employee(**fields))

    return _make


@pytest.fixture
def employee(make_employee) -> Employee:
    return make_employee(email="alice@example.com", names="Alice Uwase", employee_code="EMP001")


@pytest.fixture
def employee_service(employees_repo) -> EmployeeService:
    return EmployeeService(employees_repo)


@pytest.fixture
def attendance_service(attendance_repo, employee_service, dispatcher) -> AttendanceService:
    return AttendanceService(attendance_repo, employee_service, dispatcher, policy=AttendancePolicy())


@pytest.fixture
def tokens() -> TokenService:
    return TokenService("test-jwt-secret")


@pytest.fixture
def container(employees_repo, attendance_repo, dispatcher, tokens):
    return wire_services(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        dispatcher=dispatcher,
        tokens=tokens,
        policy=AttendancePolicy(),
    )


@pytest.fixture
def app(container):
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(employee, tokens) -> dict:
    return {"Authorization": f"Bearer {tokens.issue(employee)}"}
