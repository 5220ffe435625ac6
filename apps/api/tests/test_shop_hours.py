from datetime import time
from types import SimpleNamespace

from shopqueue.scheduling.shop_hours import OpeningWindow, resolve_hours


def row(open_time=time(9, 0), close_time=time(17, 0), is_closed=False):
    return SimpleNamespace(open_time=open_time, close_time=close_time, is_closed=is_closed)


def test_open_day_returns_window():
    assert resolve_hours(row()) == OpeningWindow(open_time=time(9, 0), close_time=time(17, 0))


def test_missing_row_and_closed_day_are_both_closed():
    assert resolve_hours(None) is None
    assert resolve_hours(row(is_closed=True)) is None


def test_closed_flag_wins_over_stored_times():
    assert resolve_hours(row(open_time=time(9, 0), close_time=time(17, 0), is_closed=True)) is None


def test_row_without_times_is_closed():
    assert resolve_hours(row(open_time=None)) is None
    assert resolve_hours(row(close_time=None)) is None
