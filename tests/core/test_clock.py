"""Tests for clock helpers — UTC coercion and the stored timestamp format."""

from datetime import datetime, timedelta, timezone

from decision_twin.core.clock import as_utc, to_iso


def test_to_iso_always_writes_milliseconds():
    assert to_iso(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)) == "2024-01-01T12:00:00.000Z"


def test_to_iso_truncates_microseconds():
    value = datetime(2024, 1, 1, 12, 0, 5, 123999, tzinfo=timezone.utc)
    assert to_iso(value) == "2024-01-01T12:00:05.123Z"


def test_to_iso_converts_offsets_to_utc():
    value = datetime(2024, 1, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))
    assert to_iso(value) == "2024-01-01T12:30:00.000Z"


def test_naive_datetimes_are_utc():
    assert as_utc(datetime(2024, 1, 1, 12, 0)).tzinfo == timezone.utc
