from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from ..common.datetime_utils import to_utc
from .policy import AttendancePolicy
from .strategies.base import ArrivalStrategy, DepartureStrategy
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy
from .strategies.overtime_strategy import OvertimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_arrival(self, *, entry: datetime, policy: AttendancePolicy) -> ArrivalStrategy:
        entry = to_utc(entry)
        if entry > policy.arrival_cutoff(entry.date()):
            return LateStrategy()
        return NormalStrategy()

    def for_departure(self, *, active_hours: Decimal, policy: AttendancePolicy) -> DepartureStrategy:
        if active_hours < policy.standard_work_hours:
            return EarlyLeaveStrategy()
        if active_hours > policy.standard_work_hours:
            return OvertimeStrategy()
        return NormalStrategy()
