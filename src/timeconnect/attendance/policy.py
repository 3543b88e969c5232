from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from decimal import ROUND_HALF_UP, Decimal

from ..common.datetime_utils import parse_clock_time, to_utc
from ..core.constants import DEFAULT_ARRIVAL_TIME, DEFAULT_STANDARD_WORK_HOURS
from ..core.exceptions import ValidationError

HOURS_QUANTUM = Decimal("0.01")


@dataclass(frozen=True)
class AttendancePolicy:
    """Expected arrival time-of-day (UTC) and the length of a standard working day."""

    arrival_time: time = time(9, 0)
    standard_work_hours: Decimal = Decimal(DEFAULT_STANDARD_WORK_HOURS)

    @classmethod
    def from_settings(
        cls,
        arrival_time: str = DEFAULT_ARRIVAL_TIME,
        standard_work_hours=DEFAULT_STANDARD_WORK_HOURS,
    ) -> "AttendancePolicy":
        hours = Decimal(str(standard_work_hours))
        if hours <= 0:
            raise ValueError("standard work hours must be positive")
        return cls(arrival_time=parse_clock_time(arrival_time), standard_work_hours=hours)

    def arrival_cutoff(self, work_date: date) -> datetime:
        return datetime.combine(work_date, self.arrival_time, tzinfo=timezone.utc)


def compute_active_hours(entry: datetime, depart: datetime) -> Decimal:
    """(depart - entry) in hours, rounded half-up to 2 decimals."""
    seconds = Decimal(str((to_utc(depart) - to_utc(entry)).total_seconds()))
    if seconds < 0:
        raise ValidationError("Departure time cannot be earlier than entry time")
    return (seconds / Decimal(3600)).quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)
