from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import isoformat
from ..common.validators import (
    require_email,
    require_employee_code,
    require_json_object,
    require_min_length,
    require_non_empty,
    require_phone_number,
)
from ..core.exceptions import ValidationError
from .model import Employee, EmployeePage

MIN_PASSWORD_LENGTH = 8


@dataclass(frozen=True)
class RegisterEmployeeRequest:
    email: str
    names: str
    employee_code: str
    phone_number: str
    password: str

    @classmethod
    def from_json(cls, payload) -> "RegisterEmployeeRequest":
        payload = require_json_object(payload)
        return cls(
            email=require_email(payload.get("email")),
            names=require_non_empty(payload.get("names"), "names"),
            employee_code=require_employee_code(payload.get("employeeId")),
            phone_number=require_phone_number(payload.get("phoneNumber")),
            password=require_min_length(payload.get("password"), "password", MIN_PASSWORD_LENGTH),
        )


@dataclass(frozen=True)
class UpdateEmployeeRequest:
    """Partial update; fields left as None are unchanged."""

    email: Optional[str] = None
    names: Optional[str] = None
    employee_code: Optional[str] = None
    phone_number: Optional[str] = None
    password: Optional[str] = None

    @classmethod
    def from_json(cls, payload) -> "UpdateEmployeeRequest":
        payload = require_json_object(payload)
        known = {"email", "names", "employeeId", "phoneNumber", "password"}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ValidationError(f"Unsupported fields: {', '.join(unknown)}")

        def pick(key, check, *args):
            return check(payload[key], *args) if payload.get(key) is not None else None

        req = cls(
            email=pick("email", require_email),
            names=pick("names", require_non_empty, "names"),
            employee_code=pick("employeeId", require_employee_code),
            phone_number=pick("phoneNumber", require_phone_number),
            password=pick("password", require_min_length, "password", MIN_PASSWORD_LENGTH),
        )
        if req == cls():
            raise ValidationError("No fields to update")
        return req


def employee_to_json(employee: Employee) -> dict:
    # password and reset token fields never leave the service boundary
    return {
        "id": employee.id,
        "email": employee.email,
        "names": employee.names,
        "phoneNumber": employee.phone_number,
        "employeeId": employee.employee_code,
        "createdAt": isoformat(employee.created_at),
        "updatedAt": isoformat(employee.updated_at),
    }


def employee_page_to_json(page: EmployeePage) -> dict:
    return {
        "data": [employee_to_json(e) for e in page.data],
        "total": page.total,
        "page": page.page,
        "totalPages": page.total_pages,
    }
