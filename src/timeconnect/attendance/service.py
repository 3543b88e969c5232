from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_utc, to_utc
from ..core.exceptions import DuplicateRecordError
from ..employees.model import Employee
from ..employees.service import EmployeeService
from ..notifications.dispatcher import NotificationDispatcher
from ..notifications.model import AttendanceNotification
from .locks import KeyedLock
from .model import AttendanceRecord
from .policy import AttendancePolicy
from .repository import AttendanceRepository
from .state import AttendanceStateMachine, ClockEvent, day_state

logger = logging.getLogger(__name__)

CLOCK_FORMAT = "%H:%M:%S"


class AttendanceService:
    """Use case: record clock events and read attendance history.

    The first event of a UTC day is the arrival, every later one is the
    departure. Events for one employee and day are serialized.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employee_service: EmployeeService,
        dispatcher: Optional[NotificationDispatcher] = None,
        *,
        policy: Optional[AttendancePolicy] = None,
        state_machine: Optional[AttendanceStateMachine] = None,
        locks: Optional[KeyedLock] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._attendance = attendance
        self._employee_service = employee_service
        self._dispatcher = dispatcher
        self._machine = state_machine or AttendanceStateMachine(policy or AttendancePolicy())
        self._locks = locks or KeyedLock()
        self._clock = clock

    def record_event(
        self,
        identifier: str,
        *,
        comment: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        employee = self._employee_service.resolve(identifier)
        event = ClockEvent(employee_id=employee.id, timestamp=now or self._clock(), comment=comment)

        with self._locks.hold((employee.id, event.work_date)):
            try:
                record = self._apply(event)
            except DuplicateRecordError:
                # Another process inserted the arrival first; this event is the departure.
                logger.info("Concurrent arrival for employee %s on %s, retrying", employee.id, event.work_date)
                record = self._apply(event)

        logger.info(
            "Attendance recorded for employee %s on %s: %s (%.2fh)",
            employee.id, record.work_date, record.status.value, record.active_hours,
        )
        self._notify(employee, record)
        return record

    def get_history(self, identifier: str) -> Sequence[AttendanceRecord]:
        employee = self._employee_service.resolve(identifier)
        return self._attendance.list_for_employee(employee.id)

    def get_today(self, identifier: str, *, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        employee = self._employee_service.resolve(identifier)
        today = to_utc(now or self._clock()).date()
        return self._attendance.get_for_employee_and_date(employee.id, today)

    def _apply(self, event: ClockEvent) -> AttendanceRecord:
        existing = self._attendance.get_for_employee_and_date(event.employee_id, event.work_date)
        record = self._machine.apply(day_state(event.employee_id, event.work_date, existing), event)
        if existing is None:
            self._attendance.create(record)
        else:
            self._attendance.update(record)
        return record

    def _notify(self, employee: Employee, record: AttendanceRecord) -> None:
        if self._dispatcher is None:
            return
        depart = record.depart_time or record.entry_time
        try:
            self._dispatcher.dispatch(
                AttendanceNotification(
                    employee_email=employee.email,
                    employee_name=employee.names,
                    date=record.work_date.isoformat(),
                    clock_in=to_utc(record.entry_time).strftime(CLOCK_FORMAT),
                    clock_out=to_utc(depart).strftime(CLOCK_FORMAT),
                    active_hours=record.active_hours,
                    status=record.status.value,
                )
            )
        except Exception:
            logger.exception("Failed to queue attendance email for employee %s", employee.id)
