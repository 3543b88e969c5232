from __future__ import annotations

import re

from ..core.exceptions import ValidationError

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
EMPLOYEE_CODE_RE = re.compile(r"^EMP\d{3,}$")
PHONE_RE = re.compile(r"^2507[8239]\d{7}$")


def require_non_empty(value, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters long")
    return value


def require_email(value, field_name: str = "email") -> str:
    value = require_non_empty(value, field_name)
    if not EMAIL_RE.match(value):
        raise ValidationError(f"{field_name} must be a valid email address")
    return value.lower()


def require_employee_code(value, field_name: str = "employeeId") -> str:
    value = require_non_empty(value, field_name)
    if not EMPLOYEE_CODE_RE.match(value):
        raise ValidationError(f"{field_name} must start with EMP followed by numbers (e.g., EMP001)")
    return value


def require_phone_number(value, field_name: str = "phoneNumber") -> str:
    value = require_non_empty(value, field_name)
    if not PHONE_RE.match(value):
        raise ValidationError(f"{field_name} must be an Airtel or MTN number formatted like 250*********")
    return value


def optional_string(value, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value


def require_json_object(payload) -> dict:
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload
