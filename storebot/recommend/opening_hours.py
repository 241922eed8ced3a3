"""Engine layer: tri-state open/closed/unknown evaluation over a weekly schedule.

A schedule is a list of spans shaped like Google Places ``periods``::

    {"open": {"day": 5, "time": "2200"}, "close": {"day": 6, "time": "0200"}}

Days run 0=Sunday..6=Saturday and times use the ``hour*100 + minute`` encoding,
so the current clock can be compared to stored times directly.

- Same-day span: open while ``open.time <= now < close.time`` on that day.
- Cross-midnight span: open from ``open.time`` on the open day, and before
  ``close.time`` on the close day.
- No close marker: open for the whole open weekday.

Malformed spans are skipped. Once any schedule exists the answer is definite;
``"unknown"`` only means there is no schedule at all.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, tzinfo
from typing import Any

from storebot.recommend.models import OpenStatus


def local_clock(now: datetime, tz: tzinfo | None = None) -> tuple[int, int]:
    """Return (weekday with 0=Sunday, hhmm) for ``now`` seen in ``tz``."""
    if tz is not None and now.tzinfo is not None:
        now = now.astimezone(tz)
    weekday = (now.weekday() + 1) % 7
    return weekday, now.hour * 100 + now.minute


def _parse_day(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int) or not 0 <= value <= 6:
        return None
    return value


def _parse_time(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        raw = value.strip().replace(":", "")
        if not (raw.isascii() and raw.isdigit()) or len(raw) > 4:
            return None
        value = int(raw)
    if not isinstance(value, int) or not 0 <= value <= 2359 or value % 100 >= 60:
        return None
    return value


def _parse_marker(marker: Any) -> tuple[int, int] | None:
    if not isinstance(marker, dict):
        return None
    day = _parse_day(marker.get("day"))
    time = _parse_time(marker.get("time"))
    if day is None or time is None:
        return None
    return day, time


def _span_matches(span: Any, weekday: int, hhmm: int) -> bool:
    if not isinstance(span, dict):
        return False
    opened = _parse_marker(span.get("open"))
    if opened is None:
        return False
    open_day, open_time = opened

    close_raw = span.get("close")
    if close_raw is None:
        return weekday == open_day
    closed = _parse_marker(close_raw)
    if closed is None:
        return False
    close_day, close_time = closed

    if open_day == close_day:
        return weekday == open_day and open_time <= hhmm < close_time
    if weekday == open_day:
        return hhmm >= open_time
    if weekday == close_day:
        return hhmm < close_time
    return False


def is_open_now(schedule: Sequence[Any] | None, weekday: int, hhmm: int) -> OpenStatus:
    """Evaluate ``schedule`` at one local (weekday, hhmm) instant."""
    if not schedule:
        return "unknown"
    for span in schedule:
        if _span_matches(span, weekday, hhmm):
            return "open"
    return "closed"


def status_at(schedule: Sequence[Any] | None, now: datetime, tz: tzinfo | None = None) -> OpenStatus:
    weekday, hhmm = local_clock(now, tz)
    return is_open_now(schedule, weekday, hhmm)
