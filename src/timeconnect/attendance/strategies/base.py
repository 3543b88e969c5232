from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from ...core.enums import AttendanceStatus
from ..policy import AttendancePolicy


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus


class ArrivalStrategy(ABC):
    """Strategy Pattern: decide the status of a fresh arrival."""

    @abstractmethod
    def decide_arrival(self, *, entry: datetime, policy: AttendancePolicy) -> StatusDecision:
        raise NotImplementedError


class DepartureStrategy(ABC):
    """Strategy Pattern: decide the final status once active hours are known."""

    @abstractmethod
    def decide_departure(
        self, *, active_hours: Decimal, current: AttendanceStatus, policy: AttendancePolicy
    ) -> StatusDecision:
        raise NotImplementedError
