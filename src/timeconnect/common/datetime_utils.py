from __future__ import annotations

from datetime import date, datetime, time, timezone


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_clock_time(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value, "%H:%M").time()


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_naive_utc(value: datetime) -> datetime:
    """MySQL DATETIME columns carry no zone; we always write UTC."""
    return to_utc(value).replace(tzinfo=None)


def isoformat(value: datetime | None) -> str | None:
    if value is None:
        return None
    return to_utc(value).isoformat().replace("+00:00", "Z")
