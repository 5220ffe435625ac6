import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from shopqueue.core.config import settings
from shopqueue.core.database import get_db
from shopqueue.routers.shops import require_service, require_shop
from shopqueue.scheduling.time_utils import DATE_RE, day_of_week, format_time, parse_day
from shopqueue.services.availability import available_slots

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/availability")
def get_availability(
    shop_id: UUID = Query(alias="shopId"),
    service_id: UUID = Query(alias="serviceId"),
    date: str = Query(pattern=DATE_RE.pattern),
    db: Session = Depends(get_db),
):
    """
    Open slots for one service on one day.

    A closed day (or a day with no hours row) is not an error: slots is empty
    and open_time/close_time are null.
    """
    try:
        day = parse_day(date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    shop = require_shop(db, shop_id)
    svc = require_service(db, shop_id, service_id)
    step = settings.slot_step_minutes

    window, slots = available_slots(db, shop_id, day, svc.duration_minutes, step)
    logger.debug("availability shop=%s service=%s date=%s slots=%d", shop_id, service_id, day, len(slots))

    return {
        "ok": True,
        "shop": {"shop_id": str(shop.shop_id), "name": shop.name},
        "service": {
            "service_id": str(svc.service_id),
            "name": svc.name,
            "duration_minutes": svc.duration_minutes,
        },
        "date": day.isoformat(),
        "day_of_week": day_of_week(day),
        "open_time": format_time(window.open_time) if window else None,
        "close_time": format_time(window.close_time) if window else None,
        "step_minutes": step,
        "slots": [s.to_dict() for s in slots],
    }
