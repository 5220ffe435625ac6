import math
from datetime import time

def validate_time_range(start: time, end: time) -> None:
    # MVP: require end > start (no overnight opening hours yet)
    if end <= start:
        raise ValueError("close_time must be after open_time")

def clamp_int(value, lo: int, hi: int, default: int) -> int:
    """Coerce to int within [lo, hi]; non-numeric or non-finite input falls back to default first."""
    try:
        n = float(value)
    except (TypeError, ValueError):
        n = default
    if not math.isfinite(n):
        n = default
    return min(hi, max(lo, int(n)))
