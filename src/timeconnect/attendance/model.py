from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar (UTC) date."""

    id: str
    employee_id: str
    work_date: date
    entry_time: datetime
    depart_time: Optional[datetime]
    active_hours: Decimal
    status: AttendanceStatus
    comment: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for reports/exports (attendance joined with its employee)."""

    employee_id: str
    employee_code: str
    names: str
    work_date: date
    entry_time: datetime
    depart_time: Optional[datetime]
    active_hours: Decimal
    status: AttendanceStatus
    comment: Optional[str] = None
