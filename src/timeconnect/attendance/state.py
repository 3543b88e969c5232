"""Per-employee, per-day attendance state machine.

A day moves Absent -> Arrived -> Departed. Every clock event is fed through
`AttendanceStateMachine.apply`, which returns the record to persist. Events on
a Departed day move the departure forward and re-classify the record.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional, Union

from ..common.datetime_utils import to_utc
from ..core.constants import DEFAULT_COMMENT
from ..core.enums import AttendanceStatus
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .policy import AttendancePolicy, compute_active_hours

ARRIVAL_STATUSES = frozenset({AttendanceStatus.ON_TIME, AttendanceStatus.LATE})


@dataclass(frozen=True)
class ClockEvent:
    employee_id: str
    timestamp: datetime
    comment: Optional[str] = None
    work_date: date = field(init=False)

    def __post_init__(self):
        ts = to_utc(self.timestamp)
        object.__setattr__(self, "timestamp", ts)
        object.__setattr__(self, "work_date", ts.date())


@dataclass(frozen=True)
class Absent:
    employee_id: str
    work_date: date


@dataclass(frozen=True)
class Arrived:
    record: AttendanceRecord


@dataclass(frozen=True)
class Departed:
    record: AttendanceRecord


DayState = Union[Absent, Arrived, Departed]


def day_state(employee_id: str, work_date: date, record: Optional[AttendanceRecord]) -> DayState:
    """Classify a stored row; an arrival stores departure == entry as a placeholder."""
    if record is None:
        return Absent(employee_id=employee_id, work_date=work_date)
    if record.depart_time is None or record.depart_time == record.entry_time:
        return Arrived(record=record)
    return Departed(record=record)


class AttendanceStateMachine:
    def __init__(
        self,
        policy: AttendancePolicy,
        factory: Optional[AttendanceStrategyFactory] = None,
        *,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self._policy = policy
        self._factory = factory or AttendanceStrategyFactory()
        self._new_id = id_factory

    def apply(self, state: DayState, event: ClockEvent) -> AttendanceRecord:
        if isinstance(state, Absent):
            if (state.employee_id, state.work_date) != (event.employee_id, event.work_date):
                raise ValueError("Event does not belong to this attendance day")
            return self._arrive(event)
        if isinstance(state, (Arrived, Departed)):
            record = state.record
            if (record.employee_id, record.work_date) != (event.employee_id, event.work_date):
                raise ValueError("Event does not belong to this attendance day")
            return self._depart(record, event)
        raise TypeError(f"Unknown attendance state: {state!r}")

    def arrival_status(self, entry: datetime) -> AttendanceStatus:
        strategy = self._factory.for_arrival(entry=entry, policy=self._policy)
        return strategy.decide_arrival(entry=entry, policy=self._policy).status

    def _arrive(self, event: ClockEvent) -> AttendanceRecord:
        return AttendanceRecord(
            id=self._new_id(),
            employee_id=event.employee_id,
            work_date=event.work_date,
            entry_time=event.timestamp,
            depart_time=event.timestamp,
            active_hours=Decimal("0.00"),
            status=self.arrival_status(event.timestamp),
            comment=event.comment or DEFAULT_COMMENT,
            created_at=event.timestamp,
            updated_at=event.timestamp,
        )

    def _depart(self, record: AttendanceRecord, event: ClockEvent) -> AttendanceRecord:
        active_hours = compute_active_hours(record.entry_time, event.timestamp)

        # OVERTIME/PRETIME replaced the arrival classification; recover it from the entry time.
        current = record.status if record.status in ARRIVAL_STATUSES else self.arrival_status(record.entry_time)
        strategy = self._factory.for_departure(active_hours=active_hours, policy=self._policy)
        decision = strategy.decide_departure(active_hours=active_hours, current=current, policy=self._policy)

        return replace(
            record,
            depart_time=event.timestamp,
            active_hours=active_hours,
            status=decision.status,
            comment=event.comment if event.comment else record.comment,
            updated_at=event.timestamp,
        )
