import pytest

from timeconnect.core.exceptions import ConflictError, NotFoundError, ValidationError
from timeconnect.employees.dto import RegisterEmployeeRequest, UpdateEmployeeRequest


def test_lookups(employee_service, employee):
    assert employee_service.get_by_id(employee.id) == employee
    assert employee_service.get_by_email("ALICE@example.com") == employee
    assert employee_service.get_by_employee_code("EMP001") == employee

    with pytest.raises(NotFoundError):
        employee_service.get_by_id("missing")
    with pytest.raises(NotFoundError):
        employee_service.get_by_email("ghost@example.com")
    with pytest.raises(NotFoundError):
        employee_service.get_by_employee_code("EMP404")


def test_resolve_by_email_or_code(employee_service, employee):
    assert employee_service.resolve("alice@example.com") == employee
    assert employee_service.resolve("EMP001") == employee
    with pytest.raises(NotFoundError, match="EMPLOYEE_NOT_FOUND"):
        employee_service.resolve("bob@example.com")


def test_update_partial_fields(employee_service, employee):
    updated = employee_service.update(employee.id, UpdateEmployeeRequest(names="Alice U."))

    assert updated.names == "Alice U."
    assert updated.email == employee.email
    assert updated.password_hash == employee.password_hash


def test_update_conflicts_with_other_employee(employee_service, employee, make_employee):
    other = make_employee(email="carol@example.com", employee_code="EMP077")

    with pytest.raises(ConflictError, match="Email already exists"):
        employee_service.update(employee.id, UpdateEmployeeRequest(email=other.email))
    with pytest.raises(ConflictError, match="Employee ID already exists"):
        employee_service.update(employee.id, UpdateEmployeeRequest(employee_code="EMP077"))


def test_update_unknown_employee(employee_service):
    with pytest.raises(NotFoundError):
        employee_service.update("missing", UpdateEmployeeRequest(names="X"))


def test_list_page_newest_first_with_search(employee_service, make_employee):
    for name in ("Ann", "Ben", "Annette"):
        make_employee(names=name)

    page = employee_service.list_page(page=1, limit=2)
    assert [e.names for e in page.data] == ["Annette", "Ben"]
    assert (page.total, page.page, page.total_pages) == (3, 1, 2)

    searched = employee_service.list_page(search="ann")
    assert {e.names for e in searched.data} == {"Ann", "Annette"}

    with pytest.raises(ValidationError):
        employee_service.list_page(page=0)
    with pytest.raises(ValidationError):
        employee_service.list_page(limit=1000)


def test_register_request_validation():
    payload = {
        "email": "Dan@Example.com",
        "names": "Dan",
        "employeeId": "EMP123",
        "phoneNumber": "250721234567",
        "password": "12345678",
    }
    req = RegisterEmployeeRequest.from_json(payload)
    assert req.email == "dan@example.com"

    for key, bad in [
        ("employeeId", "E123"),
        ("phoneNumber", "250751234567"),
        ("password", "short"),
        ("email", "not-an-email"),
        ("names", "  "),
    ]:
        with pytest.raises(ValidationError):
            RegisterEmployeeRequest.from_json({**payload, key: bad})


def test_update_request_validation():
    with pytest.raises(ValidationError, match="No fields to update"):
        UpdateEmployeeRequest.from_json({})
    with pytest.raises(ValidationError, match="Unsupported fields"):
        UpdateEmployeeRequest.from_json({"role": "admin"})
    assert UpdateEmployeeRequest.from_json({"phoneNumber": "250791234567"}).phone_number == "250791234567"
