from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from ...core.enums import AttendanceStatus
from ..policy import AttendancePolicy
from .base import ArrivalStrategy, DepartureStrategy, StatusDecision


class NormalStrategy(ArrivalStrategy, DepartureStrategy):
    """On-time arrival; a standard-length day keeps the arrival status."""

    def decide_arrival(self, *, entry: datetime, policy: AttendancePolicy) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)

    def decide_departure(
        self, *, active_hours: Decimal, current: AttendanceStatus, policy: AttendancePolicy
    ) -> StatusDecision:
        return StatusDecision(status=current)
