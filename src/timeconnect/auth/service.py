from __future__ import annotations

import hashlib
import logging
import secrets
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Callable, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_utc, to_utc
from ..core.constants import DEFAULT_RESET_TOKEN_TTL_SECONDS
from ..core.exceptions import AuthenticationError, ValidationError
from ..employees.dto import RegisterEmployeeRequest
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..employees.service import EmployeeService
from ..notifications.dispatcher import NotificationDispatcher
from ..notifications.model import PasswordResetNotification
from .tokens import TokenService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
INVALID_RESET_TOKEN = "Invalid or expired reset token"


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class AuthService:
    """Use case: registration, login and the forgot/reset password flow."""

    def __init__(
        self,
        employees: EmployeeRepository,
        employee_service: EmployeeService,
        tokens: TokenService,
        dispatcher: Optional[NotificationDispatcher] = None,
        *,
        reset_token_ttl_seconds: int = DEFAULT_RESET_TOKEN_TTL_SECONDS,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._employees = employees
        self._employee_service = employee_service
        self._tokens = tokens
        self._dispatcher = dispatcher
        self._reset_ttl = timedelta(seconds=int(reset_token_ttl_seconds))
        self._clock = clock

    def register(self, req: RegisterEmployeeRequest) -> tuple[Employee, str]:
        employee = self._employee_service.register(req)
        return employee, self._tokens.issue(employee)

    def login(self, email: str, password: str) -> tuple[Employee, str]:
        employee = self._employees.get_by_email(email.strip().lower())
        if not employee:
            raise AuthenticationError(INVALID_CREDENTIALS)

        try:
            ok = check_password_hash(employee.password_hash, password)
        except Exception:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError(INVALID_CREDENTIALS)

        return employee, self._tokens.issue(employee)

    def forgot_password(self, email: str) -> None:
        """Issue a one-hour reset token if the email is known.

        Returns nothing either way so callers cannot tell whether the account exists.
        """
        employee = self._employees.get_by_email(email.strip().lower())
        if not employee:
            logger.info("Password reset requested for unknown email")
            return

        token = secrets.token_hex(32)
        expiry = self._clock() + self._reset_ttl
        self._employees.update(
            replace(
                employee,
                reset_token_hash=hash_reset_token(token),
                reset_token_expiry=expiry,
                updated_at=self._clock(),
            )
        )
        logger.info("Password reset token issued for employee %s", employee.id)

        if self._dispatcher is None:
            return
        try:
            self._dispatcher.dispatch(
                PasswordResetNotification(
                    employee_email=employee.email,
                    employee_name=employee.names,
                    token=token,
                    valid_minutes=int(self._reset_ttl.total_seconds() // 60),
                )
            )
        except Exception:
            logger.exception("Failed to queue password reset email for employee %s", employee.id)

    def reset_password(self, token: str, new_password: str) -> Employee:
        employee = self._employees.get_by_reset_token_hash(hash_reset_token(token))
        if not employee or not employee.reset_token_expiry:
            raise ValidationError(INVALID_RESET_TOKEN)
        if to_utc(employee.reset_token_expiry) <= self._clock():
            raise ValidationError(INVALID_RESET_TOKEN)

        updated = replace(
            employee,
            password_hash=generate_password_hash(new_password),
            reset_token_hash=None,
            reset_token_expiry=None,
            updated_at=self._clock(),
        )
        self._employees.update(updated)
        logger.info("Password reset completed for employee %s", employee.id)
        return updated

    def validate_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise AuthenticationError("Employee no longer exists")
        return employee
