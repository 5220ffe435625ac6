"""
Wait-time projection for a single-server FIFO queue.

An entry's ETA is the total service time of everyone ahead of it, so the
front of the queue is always 0 and ETAs never decrease down the line.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence, TypeVar

T = TypeVar("T")


def safe_minutes(value) -> int:
    """Duration as a non-negative int; missing or junk values count as 0."""
    try:
        n = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(n) or n < 0:
        return 0
    return int(n)


def _duration_attr(entry) -> int:
    return safe_minutes(getattr(entry, "duration_minutes", None))


def project_etas(
    entries: Iterable[T],
    duration_of: Callable[[T], object] = _duration_attr,
) -> list[tuple[T, int]]:
    """Pairs each entry (already ordered by created_at) with its ETA in minutes."""
    running = 0
    out: list[tuple[T, int]] = []
    for entry in entries:
        out.append((entry, running))
        running += safe_minutes(duration_of(entry))
    return out


@dataclass(frozen=True)
class QueueStats:
    total_active: int
    queued: int
    arrived: int
    avg_eta_minutes: int

    def to_dict(self) -> dict:
        return {
            "total_active": self.total_active,
            "queued": self.queued,
            "arrived": self.arrived,
            "avg_eta_minutes": self.avg_eta_minutes,
        }


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _status_attr(entry) -> str:
    status = getattr(entry, "status", None)
    return getattr(status, "value", status) or ""


def aggregate_queue(
    projected: Sequence[tuple[T, int]],
    status_of: Callable[[T], str] = _status_attr,
) -> QueueStats:
    total = len(projected)
    queued = sum(1 for entry, _ in projected if status_of(entry) == "queued")
    arrived = sum(1 for entry, _ in projected if status_of(entry) == "arrived")
    avg = round_half_up(sum(eta for _, eta in projected) / total) if total else 0
    return QueueStats(total_active=total, queued=queued, arrived=arrived, avg_eta_minutes=avg)
