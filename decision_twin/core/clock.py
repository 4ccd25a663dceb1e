"""Clock Helpers — wall-clock access and UTC normalization.

Invariants:
    - Every datetime leaving this module is timezone-aware UTC
    - Naive datetimes are interpreted as UTC, never as local time
    - Core rules take `now` as a parameter; only services call utc_now()
"""

from datetime import datetime, timedelta, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def add_days(value: datetime, days: float) -> datetime:
    return value + timedelta(days=days)


def to_iso(value: datetime) -> str:
    """ISO-8601 in UTC, millisecond precision, trailing Z (`2024-01-01T12:00:00.000Z`)."""
    return as_utc(value).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
