from __future__ import annotations

from decimal import Decimal

from ...core.enums import AttendanceStatus
from ..policy import AttendancePolicy
from .base import DepartureStrategy, StatusDecision


class OvertimeStrategy(DepartureStrategy):
    def decide_departure(
        self, *, active_hours: Decimal, current: AttendanceStatus, policy: AttendancePolicy
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.OVERTIME)
