from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class OpeningWindow:
    open_time: time
    close_time: time


def resolve_hours(row) -> OpeningWindow | None:
    """
    Opening window for one shop_hours row, or None when the shop is closed.

    A missing row and an explicit is_closed day are the same thing: no slots.
    A row without both times is treated as closed too.
    """
    if row is None or getattr(row, "is_closed", False):
        return None
    if row.open_time is None or row.close_time is None:
        return None
    return OpeningWindow(open_time=row.open_time, close_time=row.close_time)
