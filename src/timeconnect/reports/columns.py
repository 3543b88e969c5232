from __future__ import annotations

from ..attendance.model import AttendanceReportRow
from ..common.datetime_utils import to_utc

COLUMNS = (
    "Date",
    "Employee Name",
    "Employee ID",
    "Entry",
    "Depart",
    "Active Hours",
    "Status",
    "Comment",
)

TIME_FORMAT = "%H:%M:%S"


def row_values(row: AttendanceReportRow) -> list:
    """One report line in column order; times are UTC."""
    return [
        row.work_date.isoformat(),
        row.names,
        row.employee_code,
        to_utc(row.entry_time).strftime(TIME_FORMAT),
        to_utc(row.depart_time).strftime(TIME_FORMAT) if row.depart_time else "",
        float(row.active_hours),
        row.status.value,
        row.comment or "",
    ]
