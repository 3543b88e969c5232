from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from timeconnect.attendance.policy import AttendancePolicy, compute_active_hours
from timeconnect.attendance.state import (
    Absent,
    Arrived,
    AttendanceStateMachine,
    ClockEvent,
    Departed,
    day_state,
)
from timeconnect.core.enums import AttendanceStatus
from timeconnect.core.exceptions import ValidationError

EMP = "emp-1"
DAY = date(2025, 1, 6)


def at(hour, minute=0, second=0):
    return datetime(2025, 1, 6, hour, minute, second, tzinfo=timezone.utc)


@pytest.fixture
def machine():
    return AttendanceStateMachine(AttendancePolicy(), id_factory=lambda: "rec-1")


def test_arrival_creates_placeholder_record(machine):
    record = machine.apply(Absent(EMP, DAY), ClockEvent(EMP, at(8, 30)))

    assert record.id == "rec-1"
    assert record.entry_time == record.depart_time == at(8, 30)
    assert record.active_hours == Decimal("0.00")
    assert record.status == AttendanceStatus.ON_TIME
    assert record.comment == "N/A"
    assert isinstance(day_state(EMP, DAY, record), Arrived)


def test_departure_computes_hours_and_status(machine):
    arrived = machine.apply(Absent(EMP, DAY), ClockEvent(EMP, at(9, 15)))
    departed = machine.apply(Arrived(arrived), ClockEvent(EMP, at(16, 0), comment="doctor"))

    assert arrived.status == AttendanceStatus.LATE
    assert departed.active_hours == Decimal("6.75")
    assert departed.status == AttendanceStatus.PRETIME
    assert departed.comment == "doctor"
    assert departed.id == arrived.id
    assert isinstance(day_state(EMP, DAY, departed), Departed)


def test_departure_without_comment_keeps_arrival_comment(machine):
    arrived = machine.apply(Absent(EMP, DAY), ClockEvent(EMP, at(8, 0), comment="train delay"))
    departed = machine.apply(Arrived(arrived), ClockEvent(EMP, at(16, 0)))

    assert departed.comment == "train delay"


def test_exact_standard_day_keeps_late_status(machine):
    arrived = machine.apply(Absent(EMP, DAY), ClockEvent(EMP, at(9, 30)))
    departed = machine.apply(Arrived(arrived), ClockEvent(EMP, at(17, 30)))

    assert departed.active_hours == Decimal("8.00")
    assert departed.status == AttendanceStatus.LATE


def test_later_event_moves_departure_and_recovers_arrival_status(machine):
    arrived = machine.apply(Absent(EMP, DAY), ClockEvent(EMP, at(8, 0)))
    early = machine.apply(Arrived(arrived), ClockEvent(EMP, at(12, 0)))
    exact = machine.apply(Departed(early), ClockEvent(EMP, at(16, 0)))

    assert early.status == AttendanceStatus.PRETIME
    assert exact.depart_time == at(16, 0)
    assert exact.status == AttendanceStatus.ON_TIME


def test_event_for_another_day_is_rejected(machine):
    with pytest.raises(ValueError):
        machine.apply(Absent(EMP, date(2025, 1, 7)), ClockEvent(EMP, at(8, 0)))


def test_naive_timestamp_is_treated_as_utc():
    event = ClockEvent(EMP, datetime(2025, 1, 6, 23, 59))

    assert event.timestamp.tzinfo is not None
    assert event.work_date == DAY


def test_active_hours_rounding_and_negative_duration():
    assert compute_active_hours(at(8, 0), at(8, 0, 18)) == Decimal("0.01")
    assert compute_active_hours(at(8, 0), at(17, 20)) == Decimal("9.33")
    with pytest.raises(ValidationError):
        compute_active_hours(at(10, 0), at(9, 0))


def test_policy_from_settings():
    policy = AttendancePolicy.from_settings("08:15", "7.5")

    assert policy.arrival_cutoff(DAY) == at(8, 15)
    assert policy.standard_work_hours == Decimal("7.5")
    with pytest.raises(ValueError):
        AttendancePolicy.from_settings("09:00", 0)
