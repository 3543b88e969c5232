from __future__ import annotations

from decimal import Decimal

from ...core.enums import AttendanceStatus
from ..policy import AttendancePolicy
from .base import DepartureStrategy, StatusDecision


class EarlyLeaveStrategy(DepartureStrategy):
    """Left before completing the standard hours; overrides a LATE arrival too."""

    def decide_departure(
        self, *, active_hours: Decimal, current: AttendanceStatus, policy: AttendancePolicy
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRETIME)
