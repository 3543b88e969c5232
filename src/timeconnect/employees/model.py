from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee account.

    Note: This is a plain data object (no DB access code). `employee_code` is the
    human-facing identifier such as EMP001; `id` is the UUID primary key.
    """

    id: str
    email: str
    names: str
    phone_number: str
    employee_code: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
    reset_token_hash: Optional[str] = None
    reset_token_expiry: Optional[datetime] = None


@dataclass(frozen=True)
class EmployeePage:
    data: list[Employee]
    total: int
    page: int
    total_pages: int
