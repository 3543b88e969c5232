from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance classification as stored in the database."""

    ON_TIME = "ONTIME"
    LATE = "LATE"
    OVERTIME = "OVERTIME"
    PRETIME = "PRETIME"
