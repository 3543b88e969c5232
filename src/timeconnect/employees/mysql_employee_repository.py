from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import to_naive_utc, to_utc
from ..core.exceptions import DuplicateRecordError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    id, email, password, names, phone_number, employee_identifier,
    reset_token_hash, reset_token_expiry, created_at, updated_at
"""


def _to_employee(row: Dict[str, Any]) -> Employee:
    expiry = row.get("reset_token_expiry")
    return Employee(
        id=str(row["id"]),
        email=row["email"],
        names=row["names"],
        phone_number=row["phone_number"],
        employee_code=row["employee_identifier"],
        password_hash=row["password"],
        created_at=to_utc(row["created_at"]),
        updated_at=to_utc(row["updated_at"]),
        reset_token_hash=row.get("reset_token_hash"),
        reset_token_expiry=to_utc(expiry) if expiry else None,
    )


def _params(employee: Employee) -> tuple:
    return (
        employee.email,
        employee.password_hash,
        employee.names,
        employee.phone_number,
        employee.employee_code,
        employee.reset_token_hash,
        to_naive_utc(employee.reset_token_expiry) if employee.reset_token_expiry else None,
        to_naive_utc(employee.updated_at),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value: object) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._get_one("id", employee_id)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self._get_one("email", email)

    def get_by_employee_code(self, employee_code: str) -> Optional[Employee]:
        return self._get_one("employee_identifier", employee_code)

    def get_by_reset_token_hash(self, token_hash: str) -> Optional[Employee]:
        return self._get_one("reset_token_hash", token_hash)

    def create(self, employee: Employee) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(
                        email, password, names, phone_number, employee_identifier,
                        reset_token_hash, reset_token_expiry, updated_at, id, created_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    _params(employee) + (employee.id, to_naive_utc(employee.created_at)),
                )
        except Exception as e:
            if is_duplicate_key(e):
                raise DuplicateRecordError("Employee email or ID already exists") from e
            raise

    def update(self, employee: Employee) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE employees
                    SET email=%s, password=%s, names=%s, phone_number=%s, employee_identifier=%s,
                        reset_token_hash=%s, reset_token_expiry=%s, updated_at=%s
                    WHERE id=%s
                    """,
                    _params(employee) + (employee.id,),
                )
                return cur.rowcount > 0
        except Exception as e:
            if is_duplicate_key(e):
                raise DuplicateRecordError("Employee email or ID already exists") from e
            raise

    def list_page(self, *, offset: int, limit: int, search: Optional[str] = None) -> tuple[Sequence[Employee], int]:
        where = ""
        params: list[object] = []
        if search:
            where = "WHERE LOWER(names) LIKE %s"
            params.append(f"%{search.lower()}%")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM employees {where}", tuple(params))
            total = int((fetchone(cur) or {}).get("total", 0))

            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                {where}
                ORDER BY created_at DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params) + (int(limit), int(offset)),
            )
            return [_to_employee(r) for r in fetchall(cur)], total
