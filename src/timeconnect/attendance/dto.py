from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import isoformat
from ..common.validators import optional_string, require_json_object, require_non_empty
from .model import AttendanceRecord


@dataclass(frozen=True)
class RecordAttendanceRequest:
    employee_identifier: str
    comment: Optional[str] = None

    @classmethod
    def from_json(cls, payload) -> "RecordAttendanceRequest":
        payload = require_json_object(payload)
        return cls(
            employee_identifier=require_non_empty(payload.get("employeeIdentifier"), "employeeIdentifier"),
            comment=optional_string(payload.get("comment"), "comment"),
        )


def attendance_to_json(record: AttendanceRecord) -> dict:
    return {
        "id": record.id,
        "employeeId": record.employee_id,
        "entry": isoformat(record.entry_time),
        "depart": isoformat(record.depart_time),
        "date": record.work_date.isoformat(),
        "activeHours": float(record.active_hours),
        "status": record.status.value,
        "comment": record.comment,
        "createdAt": isoformat(record.created_at),
        "updatedAt": isoformat(record.updated_at),
    }
