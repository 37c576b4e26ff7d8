from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.core.errors import BadRequestError, UnsupportedTimeframeError
from src.shared.time import EPOCH, parse_event_datetime, resolve_time_window


NOW = datetime(2026, 3, 31, 12, 0, tzinfo=timezone.utc)


def test_week_window_ends_now():
    window = resolve_time_window("week", now=NOW)

    assert window.end == NOW
    assert window.start == NOW - timedelta(days=7)


def test_month_window_clamps_to_end_of_shorter_month():
    window = resolve_time_window("month", now=NOW)

    assert window.start == datetime(2026, 2, 28, 12, 0, tzinfo=timezone.utc)


def test_quarter_and_year_windows():
    assert resolve_time_window("quarter", now=NOW).start == datetime(
        2025, 12, 31, 12, 0, tzinfo=timezone.utc
    )
    assert resolve_time_window("YEAR", now=NOW).start == datetime(
        2025, 3, 31, 12, 0, tzinfo=timezone.utc
    )


def test_all_window_starts_at_epoch():
    assert resolve_time_window("all", now=NOW).start == EPOCH


def test_previous_window_is_adjacent_and_equal_length():
    window = resolve_time_window("week", now=NOW)

    previous = window.previous()

    assert previous.end == window.start
    assert previous.duration == window.duration
    assert previous.start == NOW - timedelta(days=14)


def test_custom_bounds_take_precedence_over_selector():
    window = resolve_time_window("week", "2026-01-01", "2026-01-31T23:59:59Z", now=NOW)

    assert window.start == datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert window.end == datetime(2026, 1, 31, 23, 59, 59, tzinfo=timezone.utc)
    assert window.previous().start == datetime(2025, 12, 1, 0, 0, 1, tzinfo=timezone.utc)


def test_unknown_timeframe_is_rejected():
    with pytest.raises(UnsupportedTimeframeError):
        resolve_time_window("fortnight", now=NOW)


def test_custom_selector_without_bounds_is_rejected():
    with pytest.raises(BadRequestError):
        resolve_time_window("custom", "2026-01-01", None, now=NOW)


def test_custom_end_before_start_is_rejected():
    with pytest.raises(BadRequestError):
        resolve_time_window("custom", "2026-02-01", "2026-01-01", now=NOW)


def test_parse_event_datetime_normalizes_to_utc():
    assert parse_event_datetime("2026-03-14") == datetime(2026, 3, 14, tzinfo=timezone.utc)
    assert parse_event_datetime("2026-03-14T20:00:00Z") == datetime(
        2026, 3, 14, 20, tzinfo=timezone.utc
    )
    assert parse_event_datetime("2026-03-14T15:00:00-05:00") == datetime(
        2026, 3, 14, 20, tzinfo=timezone.utc
    )


@pytest.mark.parametrize("raw", [None, "", "not a date", "2026-13-45"])
def test_parse_event_datetime_rejects_bad_values(raw):
    with pytest.raises(ValueError):
        parse_event_datetime(raw)
