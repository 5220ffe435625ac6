import enum
import uuid
from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from shopqueue.core.database import Base

class BookingStatus(str, enum.Enum):
    booked = "booked"
    cancelled = "cancelled"
    completed = "completed"

class Booking(Base):
    __tablename__ = "bookings"

    booking_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    shop_id = Column(UUID(as_uuid=True), ForeignKey("shops.shop_id", ondelete="CASCADE"), nullable=False)
    service_id = Column(UUID(as_uuid=True), ForeignKey("services.service_id", ondelete="SET NULL"), nullable=True)
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.customer_id", ondelete="CASCADE"), nullable=False)

    start_at = Column(DateTime(timezone=True), nullable=False)
    end_at = Column(DateTime(timezone=True), nullable=False)  # start_at + service.duration_minutes

    status = Column(
        Enum(BookingStatus, name="booking_status", native_enum=False),
        nullable=False,
        default=BookingStatus.booked,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # NOTE: the no-overlap rule for booked rows is a PostgreSQL exclusion
    # constraint created in alembic (0001_initial); it has no portable ORM form.
    __table_args__ = (
        CheckConstraint("end_at > start_at", name="ck_bookings_end_after_start"),
        Index("ix_bookings_shop_start", "shop_id", "start_at"),
    )
