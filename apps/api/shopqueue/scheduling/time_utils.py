"""
Time helpers for slot generation.

All wall-clock arithmetic is UTC-naive by design of the booking grid: a
calendar date is anchored at UTC midnight and shop hours are offsets from it.
"""
from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timedelta, timezone

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_hhmm(value) -> tuple[int, int]:
    """
    Accepts "09:00", "09:00:00" or a datetime.time and returns (hour, minute).
    Seconds are validated, then dropped.
    """
    if hasattr(value, "hour"):
        return int(value.hour), int(value.minute)

    parts = str(value or "").strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid time {value!r} (expected HH:MM or HH:MM:SS)")
    try:
        hh, mm = int(parts[0]), int(parts[1])
        ss = int(parts[2]) if len(parts) == 3 else 0
    except ValueError:
        raise ValueError(f"Invalid time {value!r} (expected HH:MM or HH:MM:SS)")
    if not 0 <= ss < 60:
        raise ValueError(f"Invalid time {value!r}")
    if not (0 <= hh <= 23 and 0 <= mm < 60) and (hh, mm, ss) != (24, 0, 0):
        raise ValueError(f"Invalid time {value!r}")
    return hh, mm


def format_time(value) -> str | None:
    if value is None:
        return None
    if isinstance(value, time):
        return value.strftime("%H:%M:%S")
    hh, mm = parse_hhmm(value)
    return f"{hh:02d}:{mm:02d}:00"


def parse_day(value: str) -> date:
    """Strict YYYY-MM-DD; anything else (including 2024-02-30) raises ValueError."""
    value = (value or "").strip()
    if not DATE_RE.match(value):
        raise ValueError("Invalid date format (expected YYYY-MM-DD)")
    return date.fromisoformat(value)


def add_minutes(dt: datetime, minutes: int) -> datetime:
    return dt + timedelta(minutes=minutes)


def as_utc(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def day_start(day: date) -> datetime:
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """[day 00:00 UTC, next day 00:00 UTC)"""
    start = day_start(day)
    return start, start + timedelta(days=1)


def day_of_week(day: date) -> int:
    # 0=Sun ... 6=Sat (date.weekday() is 0=Mon)
    return (day.weekday() + 1) % 7


def at_offset(day: date, value) -> datetime:
    """The UTC instant `value` (HH:MM) past midnight of `day`; 24:00 rolls to the next day."""
    hh, mm = parse_hhmm(value)
    return day_start(day) + timedelta(hours=hh, minutes=mm)


def minutes_until(start: datetime, now: datetime) -> int:
    delta = (as_utc(start) - as_utc(now)).total_seconds()
    if delta <= 0:
        return 0
    return int(math.ceil(delta / 60))
