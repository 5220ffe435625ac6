import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from shopqueue.core.database import get_db
from shopqueue.core.errors import commit_or_raise
from shopqueue.models.queue_entry import QueueEntry, QueueStatus
from shopqueue.routers.shops import require_service, require_shop
from shopqueue.scheduling.time_utils import utcnow
from shopqueue.schemas.queue import (
    JoinQueueRequest,
    JoinQueueResponse,
    KioskCheckinRequest,
    KioskCheckinResponse,
)
from shopqueue.services.customers import find_customer_by_phone, find_or_create_customer

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/join-queue", response_model=JoinQueueResponse)
def join_queue(payload: JoinQueueRequest, db: Session = Depends(get_db)):
    require_shop(db, payload.shop_id)
    svc = require_service(db, payload.shop_id, payload.service_id)

    customer = find_or_create_customer(db, payload.first_name, payload.last_name, payload.phone)

    entry = QueueEntry(
        shop_id=payload.shop_id,
        customer_id=customer.customer_id,
        service_id=svc.service_id,
        status=QueueStatus.queued,
    )
    db.add(entry)
    commit_or_raise(db, "Queue join")
    logger.info("Customer %s joined queue at shop %s", customer.customer_id, payload.shop_id)

    return JoinQueueResponse(
        customer_id=str(customer.customer_id),
        queue_entry_id=str(entry.queue_entry_id),
    )


@router.post("/kiosk-checkin", response_model=KioskCheckinResponse)
def kiosk_checkin(
    payload: KioskCheckinRequest,
    db: Session = Depends(get_db),
    now=Depends(utcnow),
):
    """Walk-in arrives at the shop: queued -> arrived for their latest queue entry."""
    customer = find_customer_by_phone(db, payload.phone)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found. Please join queue first.")

    if (customer.last_name or "").strip().lower() != payload.last_name.lower():
        raise HTTPException(status_code=401, detail="Last name does not match phone number.")

    entry = db.execute(
        select(QueueEntry)
        .where(
            and_(
                QueueEntry.shop_id == payload.shop_id,
                QueueEntry.customer_id == customer.customer_id,
                QueueEntry.status == QueueStatus.queued,
            )
        )
        .order_by(QueueEntry.created_at.desc())
        .limit(1)
    ).scalar_one_or_none()

    if not entry:
        raise HTTPException(status_code=404, detail="No active queued booking found for this customer.")

    entry.status = QueueStatus.arrived
    entry.checked_in_at = now
    commit_or_raise(db, "Check-in")
    logger.info("Queue entry %s checked in", entry.queue_entry_id)

    return KioskCheckinResponse(queue_entry_id=str(entry.queue_entry_id))
