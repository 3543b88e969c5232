from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ..policy import AttendancePolicy
from .base import ArrivalStrategy, StatusDecision


class LateStrategy(ArrivalStrategy):
    """Arrival after the expected arrival time."""

    def decide_arrival(self, *, entry: datetime, policy: AttendancePolicy) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)
