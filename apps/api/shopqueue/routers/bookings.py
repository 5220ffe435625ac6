import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from shopqueue.core.database import get_db
from shopqueue.core.errors import STATUS_CONFLICT, commit_or_raise
from shopqueue.models.booking import Booking, BookingStatus
from shopqueue.routers.shops import require_service, require_shop
from shopqueue.scheduling.time_utils import add_minutes, as_utc
from shopqueue.schemas.bookings import BookingCreate, BookingOut, BookingResponse
from shopqueue.services.availability import find_conflicting_booking
from shopqueue.services.customers import find_or_create_customer

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/bookings", response_model=BookingResponse)
def create_booking(payload: BookingCreate, db: Session = Depends(get_db)):
    """
    Book an appointment. end_at = start_at + service duration.

    Overlap with another booked appointment is a normal outcome (two customers
    raced for the same slot) and comes back as 409 with the store's message.
    """
    require_shop(db, payload.shop_id)
    svc = require_service(db, payload.shop_id, payload.service_id)

    start = as_utc(payload.start_at)
    end = add_minutes(start, svc.duration_minutes)

    customer = find_or_create_customer(db, payload.first_name, payload.last_name, payload.phone)

    clash = find_conflicting_booking(db, payload.shop_id, start, end)
    if clash:
        db.rollback()
        logger.warning("Booking overlap at shop %s for %s (clashes with %s)", payload.shop_id, start, clash.booking_id)
        raise HTTPException(status_code=STATUS_CONFLICT, detail="Booking failed: time slot overlaps an existing booking")

    booking = Booking(
        shop_id=payload.shop_id,
        service_id=svc.service_id,
        customer_id=customer.customer_id,
        start_at=start,
        end_at=end,
        status=BookingStatus.booked,
    )
    db.add(booking)
    commit_or_raise(db, "Booking")
    db.refresh(booking)
    logger.info("Booked %s at shop %s %s-%s", booking.booking_id, payload.shop_id, start, end)

    return BookingResponse(
        booking=BookingOut(
            booking_id=str(booking.booking_id),
            shop_id=str(booking.shop_id),
            service_id=str(booking.service_id),
            customer_id=str(booking.customer_id),
            start_at=as_utc(booking.start_at),
            end_at=as_utc(booking.end_at),
            status=booking.status.value,
        )
    )
