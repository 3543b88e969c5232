from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note: the service layer depends on this interface, never on a concrete DB.
    """

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_employee_code(self, employee_code: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_reset_token_hash(self, token_hash: str) -> Optional[Employee]:
        raise NotImplementedError

    def create(self, employee: Employee) -> None:
        raise NotImplementedError

    def update(self, employee: Employee) -> bool:
        raise NotImplementedError

    def list_page(self, *, offset: int, limit: int, search: Optional[str] = None) -> tuple[Sequence[Employee], int]:
        """Return one page ordered by creation time (newest first) plus the total count."""

        raise NotImplementedError
