"""Unit tests for weekly schedule open/closed/unknown evaluation."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from storebot.recommend.opening_hours import is_open_now, local_clock, status_at

TAIPEI = timezone(timedelta(hours=8))

WEEKDAY_SPAN = [{"open": {"day": 1, "time": "0900"}, "close": {"day": 1, "time": "1700"}}]
LATE_NIGHT_SPAN = [{"open": {"day": 5, "time": "2200"}, "close": {"day": 6, "time": "0200"}}]


@pytest.mark.parametrize(
    ("weekday", "hhmm", "expected"),
    [
        (1, 1000, "open"),
        (1, 900, "open"),
        (1, 1700, "closed"),
        (1, 1800, "closed"),
        (1, 859, "closed"),
        (2, 1000, "closed"),
    ],
)
def test_same_day_span_is_half_open(weekday: int, hhmm: int, expected: str) -> None:
    assert is_open_now(WEEKDAY_SPAN, weekday, hhmm) == expected


@pytest.mark.parametrize(
    ("weekday", "hhmm", "expected"),
    [
        (5, 2300, "open"),
        (5, 2200, "open"),
        (5, 2159, "closed"),
        (6, 100, "open"),
        (6, 200, "closed"),
        (6, 300, "closed"),
        (4, 2300, "closed"),
    ],
)
def test_cross_midnight_span(weekday: int, hhmm: int, expected: str) -> None:
    assert is_open_now(LATE_NIGHT_SPAN, weekday, hhmm) == expected


def test_saturday_night_wraps_to_sunday() -> None:
    schedule = [{"open": {"day": 6, "time": "1800"}, "close": {"day": 0, "time": "0100"}}]
    assert is_open_now(schedule, 6, 2330) == "open"
    assert is_open_now(schedule, 0, 30) == "open"
    assert is_open_now(schedule, 0, 130) == "closed"


def test_missing_schedule_is_unknown() -> None:
    assert is_open_now([], 1, 1000) == "unknown"
    assert is_open_now(None, 1, 1000) == "unknown"


def test_span_without_close_covers_its_whole_weekday() -> None:
    schedule = [{"open": {"day": 0, "time": "0000"}}]
    assert is_open_now(schedule, 0, 0) == "open"
    assert is_open_now(schedule, 0, 2359) == "open"
    assert is_open_now(schedule, 1, 0) == "closed"


def test_malformed_spans_are_skipped() -> None:
    schedule = [
        "not a span",
        {"open": {"day": 9, "time": "0900"}, "close": {"day": 9, "time": "1700"}},
        {"open": {"day": 1, "time": "25:00"}, "close": {"day": 1, "time": "2600"}},
        {"open": {"day": 1, "time": "0960"}, "close": {"day": 1, "time": "1700"}},
        {"open": {"day": 1, "time": "0900"}, "close": {"day": "x", "time": "1700"}},
        {"open": {"day": "²", "time": "0900"}, "close": {"day": 1, "time": "1700"}},
        {"open": {"day": 1, "time": "09²0"}, "close": {"day": 1, "time": "1700"}},
        {"open": {"day": 1, "time": "0900"}, "close": {"day": "١", "time": "1700"}},
        {"open": {"day": "1", "time": "09:00"}, "close": {"day": 1, "time": 1700}},
    ]
    assert is_open_now(schedule, 1, 1000) == "open"


def test_non_ascii_digits_are_malformed_not_fatal() -> None:
    schedule = [
        {"open": {"day": "²", "time": "0900"}, "close": {"day": "²", "time": "1700"}},
        {"open": {"day": 1, "time": "０９００"}, "close": {"day": 1, "time": "1700"}},
    ]
    assert is_open_now(schedule, 1, 1000) == "closed"


def test_only_malformed_spans_is_a_definite_closed() -> None:
    assert is_open_now([{"open": None}, {"close": {"day": 1, "time": "1700"}}], 1, 1000) == "closed"


def test_local_clock_uses_sunday_zero_and_hhmm() -> None:
    # 2026-10-19 is a Monday.
    assert local_clock(datetime(2026, 10, 19, 14, 5, tzinfo=TAIPEI)) == (1, 1405)
    assert local_clock(datetime(2026, 10, 18, 9, 0)) == (0, 900)


def test_local_clock_converts_into_business_zone() -> None:
    utc_evening = datetime(2026, 10, 18, 23, 30, tzinfo=timezone.utc)
    assert local_clock(utc_evening, TAIPEI) == (1, 730)


def test_status_at_evaluates_in_business_zone() -> None:
    utc_morning = datetime(2026, 10, 19, 2, 0, tzinfo=timezone.utc)
    assert status_at(WEEKDAY_SPAN, utc_morning, TAIPEI) == "open"
    assert status_at(WEEKDAY_SPAN, utc_morning, timezone.utc) == "closed"
