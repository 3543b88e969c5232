from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional, Sequence

from ..attendance.model import AttendanceReportRow
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_utc, parse_iso_date
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..employees.service import EmployeeService

HOURS_QUANTUM = Decimal("0.01")


@dataclass(frozen=True)
class ReportFilter:
    employee_identifier: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @classmethod
    def from_args(cls, args) -> "ReportFilter":
        """Build from query-string args (employeeId, startDate, endDate)."""
        return cls(
            employee_identifier=(args.get("employeeId") or "").strip() or None,
            start_date=_parse_date(args.get("startDate"), "startDate"),
            end_date=_parse_date(args.get("endDate"), "endDate"),
        )


def _parse_date(value: Optional[str], field_name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date formatted as YYYY-MM-DD") from None


@dataclass(frozen=True)
class ReportSummary:
    total_records: int
    total_hours: Decimal
    average_hours: Decimal


@dataclass(frozen=True)
class ReportData:
    rows: Sequence[AttendanceReportRow]
    summary: ReportSummary
    generated_at: datetime
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    employee: Optional[Employee] = None

    @property
    def period_label(self) -> str:
        start = self.start_date.isoformat() if self.start_date else "beginning"
        end = self.end_date.isoformat() if self.end_date else "today"
        return f"{start} to {end}"


def summarize(rows: Sequence[AttendanceReportRow]) -> ReportSummary:
    total = sum((r.active_hours for r in rows), Decimal("0"))
    count = len(rows)
    average = total / count if count else Decimal("0")
    return ReportSummary(
        total_records=count,
        total_hours=total.quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP),
        average_hours=average.quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP),
    )


class ReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employee_service: EmployeeService,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._attendance = attendance
        self._employee_service = employee_service
        self._clock = clock

    def build(self, report_filter: ReportFilter) -> ReportData:
        if (
            report_filter.start_date
            and report_filter.end_date
            and report_filter.start_date > report_filter.end_date
        ):
            raise ValidationError("startDate must not be after endDate")

        employee = None
        if report_filter.employee_identifier:
            employee = self._employee_service.resolve(report_filter.employee_identifier)

        rows = self._attendance.get_report_rows(
            start_date=report_filter.start_date,
            end_date=report_filter.end_date,
            employee_id=employee.id if employee else None,
        )
        return ReportData(
            rows=list(rows),
            summary=summarize(rows),
            generated_at=self._clock(),
            start_date=report_filter.start_date,
            end_date=report_filter.end_date,
            employee=employee,
        )
