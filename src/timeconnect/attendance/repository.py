from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[AttendanceRecord]:
        """All records of one employee, newest date first."""

        raise NotImplementedError

    def create(self, record: AttendanceRecord) -> None:
        """Insert; raises DuplicateRecordError if (employee, date) already exists."""

        raise NotImplementedError

    def update(self, record: AttendanceRecord) -> bool:
        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
