"""
Bookable slot computation.

Candidate starts sit on a fixed grid (every `step_minutes` from opening) and
are kept only if the whole service fits before closing and the interval does
not overlap an existing booking. Slots are derived per request and never
persisted.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator

from shopqueue.scheduling.time_utils import as_utc, at_offset

DEFAULT_STEP_MINUTES = 10


@dataclass(frozen=True)
class Slot:
    start: datetime
    end: datetime

    @property
    def label(self) -> str:
        return self.start.strftime("%H:%M")

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "label": self.label,
        }


def intervals_overlap(s1: datetime, e1: datetime, s2: datetime, e2: datetime) -> bool:
    # half-open [s, e): touching intervals do not overlap
    return s1 < e2 and e1 > s2


def generate_slots(
    open_time,
    close_time,
    day: date,
    duration_minutes: int,
    step_minutes: int = DEFAULT_STEP_MINUTES,
) -> Iterator[Slot]:
    if duration_minutes <= 0:
        raise ValueError("duration_minutes must be > 0")
    if step_minutes <= 0:
        raise ValueError("step_minutes must be > 0")

    open_at = at_offset(day, open_time)
    close_at = at_offset(day, close_time)
    duration = timedelta(minutes=duration_minutes)
    step = timedelta(minutes=step_minutes)

    cursor = open_at
    while cursor + duration <= close_at:
        yield Slot(start=cursor, end=cursor + duration)
        cursor += step


def filter_available(
    slots: Iterable[Slot],
    booked: Iterable[tuple[datetime, datetime]],
) -> list[Slot]:
    """
    Drops every slot that overlaps one of the `booked` (start, end) intervals.

    The caller restricts `booked` to status=booked rows of the same shop
    starting inside the day window; no date filtering happens here.
    """
    intervals = [(as_utc(s), as_utc(e)) for s, e in booked]
    return [
        slot
        for slot in slots
        if not any(intervals_overlap(slot.start, slot.end, bs, be) for bs, be in intervals)
    ]
