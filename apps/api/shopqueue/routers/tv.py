from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from shopqueue.core.database import get_db
from shopqueue.models.ad import Ad
from shopqueue.models.shop import Shop
from shopqueue.scheduling.time_utils import as_utc, day_bounds, minutes_until, utcnow
from shopqueue.services.display import tv_settings
from shopqueue.services.queue_snapshot import booking_item, load_booked_for_window, projected_queue

router = APIRouter()

TV_QUEUE_LIMIT = 20
TV_BOOKINGS_LIMIT = 20
TV_ADS_LIMIT = 10


def ad_dict(ad: Ad) -> dict:
    return {
        "ad_id": str(ad.ad_id),
        "title": ad.title,
        "image_url": ad.image_url,
        "video_url": ad.video_url,
    }


@router.get("/tv")
def get_tv_snapshot(
    shop_id: UUID = Query(alias="shopId"),
    db: Session = Depends(get_db),
    now: datetime = Depends(utcnow),
):
    """
    Everything the in-shop TV needs in one poll: queue with ETAs, the rest of
    today's appointments, active ads and display settings.

    A missing shop row still renders (default settings, empty lists).
    """
    shop = db.get(Shop, shop_id)

    queue = [item.to_dict(eta) for item, eta in projected_queue(db, shop_id, TV_QUEUE_LIMIT)]

    # upcoming only: an appointment leaves the TV once it has started
    now = as_utc(now)
    _, day_end = day_bounds(now.date())
    bookings = []
    for booking, customer, service in load_booked_for_window(db, shop_id, now, day_end, TV_BOOKINGS_LIMIT):
        item = booking_item(booking, customer, service)
        item["eta_minutes"] = minutes_until(booking.start_at, now)
        bookings.append(item)

    ads = db.execute(
        select(Ad)
        .where(and_(Ad.shop_id == shop_id, Ad.is_active == True))  # noqa: E712
        .order_by(Ad.created_at.desc())
        .limit(TV_ADS_LIMIT)
    ).scalars().all()

    return {
        "ok": True,
        **tv_settings(shop),
        "queue": queue,
        "bookings": bookings,
        "ads": [ad_dict(a) for a in ads],
    }
