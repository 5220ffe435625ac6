from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from shopqueue.models.booking import Booking, BookingStatus
from shopqueue.models.customer import Customer
from shopqueue.models.queue_entry import ACTIVE_QUEUE_STATUSES, QueueEntry
from shopqueue.models.service import Service
from shopqueue.scheduling.queue_eta import project_etas
from shopqueue.scheduling.time_utils import as_utc

UNKNOWN_CUSTOMER = {"first_name": "?", "last_name": "?"}


@dataclass
class QueueItem:
    queue_entry_id: UUID
    status: str
    created_at: datetime
    customer: dict
    service_name: str
    duration_minutes: int | None

    def to_dict(self, eta_minutes: int) -> dict:
        return {
            "queue_entry_id": str(self.queue_entry_id),
            "status": self.status,
            "created_at": as_utc(self.created_at).isoformat(),
            "eta_minutes": eta_minutes,
            "customer": self.customer,
            "service": {"name": self.service_name, "duration_minutes": self.duration_minutes},
        }


def _customer_dict(c: Customer | None) -> dict:
    if c is None:
        return dict(UNKNOWN_CUSTOMER)
    return {"first_name": c.first_name, "last_name": c.last_name}


def load_active_queue(db: Session, shop_id: UUID, limit: int) -> list[QueueItem]:
    """queued + arrived entries, FIFO by created_at."""
    rows = db.execute(
        select(QueueEntry, Customer, Service)
        .outerjoin(Customer, Customer.customer_id == QueueEntry.customer_id)
        .outerjoin(Service, Service.service_id == QueueEntry.service_id)
        .where(
            and_(
                QueueEntry.shop_id == shop_id,
                QueueEntry.status.in_(ACTIVE_QUEUE_STATUSES),
            )
        )
        .order_by(QueueEntry.created_at.asc())
        .limit(limit)
    ).all()

    return [
        QueueItem(
            queue_entry_id=entry.queue_entry_id,
            status=entry.status.value,
            created_at=entry.created_at,
            customer=_customer_dict(customer),
            service_name=service.name if service else "Service",
            duration_minutes=service.duration_minutes if service else None,
        )
        for entry, customer, service in rows
    ]


def projected_queue(db: Session, shop_id: UUID, limit: int) -> list[tuple[QueueItem, int]]:
    return project_etas(load_active_queue(db, shop_id, limit))


def load_booked_for_window(
    db: Session,
    shop_id: UUID,
    start: datetime,
    end: datetime,
    limit: int,
) -> list[tuple[Booking, Customer | None, Service | None]]:
    """status=booked rows with start_at in [start, end), earliest first."""
    return db.execute(
        select(Booking, Customer, Service)
        .outerjoin(Customer, Customer.customer_id == Booking.customer_id)
        .outerjoin(Service, Service.service_id == Booking.service_id)
        .where(
            and_(
                Booking.shop_id == shop_id,
                Booking.status == BookingStatus.booked,
                Booking.start_at >= start,
                Booking.start_at < end,
            )
        )
        .order_by(Booking.start_at.asc())
        .limit(limit)
    ).all()


def booking_item(booking: Booking, customer: Customer | None, service: Service | None) -> dict:
    return {
        "booking_id": str(booking.booking_id),
        "status": booking.status.value,
        "start_at": as_utc(booking.start_at).isoformat(),
        "end_at": as_utc(booking.end_at).isoformat(),
        "customer": _customer_dict(customer),
        "service": {
            "name": service.name if service else "Service",
            "duration_minutes": service.duration_minutes if service else None,
        },
    }
