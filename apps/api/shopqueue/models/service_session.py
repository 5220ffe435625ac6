import uuid
from sqlalchemy import Column, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID

from shopqueue.core.database import Base
from shopqueue.scheduling.time_utils import utcnow

class ServiceSession(Base):
    __tablename__ = "service_sessions"

    service_session_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    shop_id = Column(UUID(as_uuid=True), ForeignKey("shops.shop_id", ondelete="CASCADE"), nullable=False)
    employee_id = Column(
        UUID(as_uuid=True),
        ForeignKey("employees.employee_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # exactly what is being served: a walk-in queue entry or a booking
    queue_entry_id = Column(UUID(as_uuid=True), ForeignKey("queue_entries.queue_entry_id", ondelete="SET NULL"), nullable=True)
    booking_id = Column(UUID(as_uuid=True), ForeignKey("bookings.booking_id", ondelete="SET NULL"), nullable=True)

    started_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    finished_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "queue_entry_id IS NOT NULL OR booking_id IS NOT NULL",
            name="ck_service_sessions_target",
        ),
    )
