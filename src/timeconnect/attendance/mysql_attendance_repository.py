from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import to_naive_utc, to_utc
from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateRecordError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_COLUMNS = """
    id, employee_id, work_date, entry_time, depart_time,
    active_hours, status, comment, created_at, updated_at
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        work_date=r["work_date"],
        entry_time=to_utc(r["entry_time"]),
        depart_time=to_utc(r["depart_time"]) if r.get("depart_time") else None,
        active_hours=Decimal(str(r.get("active_hours") or "0.00")),
        status=AttendanceStatus(r["status"]),
        comment=r.get("comment"),
        created_at=to_utc(r["created_at"]),
        updated_at=to_utc(r["updated_at"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendances
                WHERE employee_id=%s AND work_date=%s
                """,
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_employee(self, employee_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendances
                WHERE employee_id=%s
                ORDER BY work_date DESC
                """,
                (employee_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create(self, record: AttendanceRecord) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendances(
                        id, employee_id, work_date, entry_time, depart_time,
                        active_hours, status, comment, created_at, updated_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.id,
                        record.employee_id,
                        record.work_date,
                        to_naive_utc(record.entry_time),
                        to_naive_utc(record.depart_time) if record.depart_time else None,
                        record.active_hours,
                        record.status.value,
                        record.comment,
                        to_naive_utc(record.created_at),
                        to_naive_utc(record.updated_at),
                    ),
                )
        except Exception as e:
            if is_duplicate_key(e):
                raise DuplicateRecordError("Attendance already recorded for this date") from e
            raise

    def update(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendances
                SET depart_time=%s, active_hours=%s, status=%s, comment=%s, updated_at=%s
                WHERE id=%s
                """,
                (
                    to_naive_utc(record.depart_time) if record.depart_time else None,
                    record.active_hours,
                    record.status.value,
                    record.comment,
                    to_naive_utc(record.updated_at),
                    record.id,
                ),
            )
            return cur.rowcount > 0

    def get_report_rows(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses: list[str] = []
        params: list[object] = []

        if start_date is not None:
            clauses.append("a.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("a.work_date <= %s")
            params.append(end_date)
        if employee_id is not None:
            clauses.append("a.employee_id = %s")
            params.append(employee_id)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    e.id AS employee_id, e.employee_identifier, e.names,
                    a.work_date, a.entry_time, a.depart_time, a.active_hours, a.status, a.comment
                FROM attendances a
                JOIN employees e ON e.id = a.employee_id
                {where}
                ORDER BY a.work_date DESC, e.names ASC
                """,
                tuple(params),
            )
            return [
                AttendanceReportRow(
                    employee_id=str(r["employee_id"]),
                    employee_code=r["employee_identifier"],
                    names=r["names"],
                    work_date=r["work_date"],
                    entry_time=to_utc(r["entry_time"]),
                    depart_time=to_utc(r["depart_time"]) if r.get("depart_time") else None,
                    active_hours=Decimal(str(r.get("active_hours") or "0.00")),
                    status=AttendanceStatus(r["status"]),
                    comment=r.get("comment"),
                )
                for r in fetchall(cur)
            ]
