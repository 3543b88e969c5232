from __future__ import annotations

import logging
import math
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..core.exceptions import ConflictError, DuplicateRecordError, NotFoundError, ValidationError
from .dto import RegisterEmployeeRequest, UpdateEmployeeRequest
from .model import Employee, EmployeePage
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: look up, register and update employees."""

    def __init__(self, employees: EmployeeRepository, *, clock: Callable[[], datetime] = now_utc):
        self._employees = employees
        self._clock = clock

    def get_by_id(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee with ID {employee_id} not found")
        return employee

    def get_by_email(self, email: str) -> Employee:
        employee = self._employees.get_by_email(email.strip().lower())
        if not employee:
            raise NotFoundError(f"Employee with email: {email} not found")
        return employee

    def get_by_employee_code(self, employee_code: str) -> Employee:
        employee = self._employees.get_by_employee_code(employee_code.strip())
        if not employee:
            raise NotFoundError(f"Employee with id: {employee_code} not found")
        return employee

    def resolve(self, identifier: str) -> Employee:
        """Find an employee by email (anything containing '@') or by employee ID."""
        if not identifier or not identifier.strip():
            raise ValidationError("employeeIdentifier is required")
        try:
            if "@" in identifier:
                return self.get_by_email(identifier)
            return self.get_by_employee_code(identifier)
        except NotFoundError:
            raise NotFoundError("EMPLOYEE_NOT_FOUND") from None

    def register(self, req: RegisterEmployeeRequest) -> Employee:
        if self._employees.get_by_email(req.email):
            raise ConflictError("Email already exists")
        if self._employees.get_by_employee_code(req.employee_code):
            raise ConflictError("Employee ID already exists")

        now = self._clock()
        employee = Employee(
            id=str(uuid.uuid4()),
            email=req.email,
            names=req.names,
            phone_number=req.phone_number,
            employee_code=req.employee_code,
            password_hash=generate_password_hash(req.password),
            created_at=now,
            updated_at=now,
        )
        try:
            self._employees.create(employee)
        except DuplicateRecordError:
            # lost a race with a concurrent registration
            raise ConflictError("Email or Employee ID already exists") from None

        logger.info("Registered employee %s (%s)", employee.id, employee.employee_code)
        return employee

    def update(self, employee_id: str, req: UpdateEmployeeRequest) -> Employee:
        employee = self.get_by_id(employee_id)

        if req.email and req.email != employee.email:
            other = self._employees.get_by_email(req.email)
            if other and other.id != employee.id:
                raise ConflictError("Email already exists")

        if req.employee_code and req.employee_code != employee.employee_code:
            other = self._employees.get_by_employee_code(req.employee_code)
            if other and other.id != employee.id:
                raise ConflictError("Employee ID already exists")

        updated = replace(
            employee,
            email=req.email or employee.email,
            names=req.names or employee.names,
            phone_number=req.phone_number or employee.phone_number,
            employee_code=req.employee_code or employee.employee_code,
            password_hash=generate_password_hash(req.password) if req.password else employee.password_hash,
            updated_at=self._clock(),
        )
        try:
            if not self._employees.update(updated):
                raise NotFoundError(f"Employee with id: {employee_id} not found")
        except DuplicateRecordError:
            raise ConflictError("Email or Employee ID already exists") from None
        return updated

    def list_page(self, *, page: int = 1, limit: int = DEFAULT_PAGE_SIZE, search: Optional[str] = None) -> EmployeePage:
        if page < 1:
            raise ValidationError("page must be a positive integer")
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")

        rows, total = self._employees.list_page(offset=(page - 1) * limit, limit=limit, search=search or None)
        return EmployeePage(data=list(rows), total=total, page=page, total_pages=math.ceil(total / limit))
