"""
Glue between the store and the pure slot engine: loads hours and the day's
booked intervals, then generates and filters the grid.
"""
from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from shopqueue.models.booking import Booking, BookingStatus
from shopqueue.models.shop_hours import ShopHours
from shopqueue.scheduling.shop_hours import OpeningWindow, resolve_hours
from shopqueue.scheduling.slots import Slot, filter_available, generate_slots, intervals_overlap
from shopqueue.scheduling.time_utils import as_utc, day_bounds, day_of_week


def load_shop_hours(db: Session, shop_id: UUID, day: date) -> OpeningWindow | None:
    row = db.execute(
        select(ShopHours).where(
            and_(
                ShopHours.shop_id == shop_id,
                ShopHours.day_of_week == day_of_week(day),
            )
        )
    ).scalar_one_or_none()
    return resolve_hours(row)


def load_booked_intervals(db: Session, shop_id: UUID, day: date) -> list[tuple[datetime, datetime]]:
    start, end = day_bounds(day)
    rows = db.execute(
        select(Booking.start_at, Booking.end_at)
        .where(
            and_(
                Booking.shop_id == shop_id,
                Booking.status == BookingStatus.booked,
                Booking.start_at >= start,
                Booking.start_at < end,
            )
        )
        .order_by(Booking.start_at.asc())
    ).all()
    return [(r.start_at, r.end_at) for r in rows]


def available_slots(
    db: Session,
    shop_id: UUID,
    day: date,
    duration_minutes: int,
    step_minutes: int,
) -> tuple[OpeningWindow | None, list[Slot]]:
    window = load_shop_hours(db, shop_id, day)
    if window is None:
        # closed: skip the bookings query entirely
        return None, []

    candidates = generate_slots(window.open_time, window.close_time, day, duration_minutes, step_minutes)
    return window, filter_available(candidates, load_booked_intervals(db, shop_id, day))


def find_conflicting_booking(
    db: Session,
    shop_id: UUID,
    start_at: datetime,
    end_at: datetime,
) -> Booking | None:
    """
    Write-time re-check for stores without an exclusion constraint. Not a
    lock: concurrent inserts still rely on the store to reject the loser.
    """
    candidates = db.execute(
        select(Booking).where(
            and_(
                Booking.shop_id == shop_id,
                Booking.status == BookingStatus.booked,
                Booking.start_at < end_at,
                Booking.end_at > start_at,
            )
        )
    ).scalars().all()
    for b in candidates:
        if intervals_overlap(as_utc(start_at), as_utc(end_at), as_utc(b.start_at), as_utc(b.end_at)):
            return b
    return None
