import enum
import uuid
from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from shopqueue.core.database import Base
from shopqueue.scheduling.time_utils import utcnow

class QueueStatus(str, enum.Enum):
    queued = "queued"
    arrived = "arrived"
    completed = "completed"
    cancelled = "cancelled"

ACTIVE_QUEUE_STATUSES = (QueueStatus.queued, QueueStatus.arrived)

class QueueEntry(Base):
    __tablename__ = "queue_entries"

    queue_entry_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    shop_id = Column(UUID(as_uuid=True), ForeignKey("shops.shop_id", ondelete="CASCADE"), nullable=False)
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.customer_id", ondelete="CASCADE"), nullable=False)
    service_id = Column(UUID(as_uuid=True), ForeignKey("services.service_id", ondelete="SET NULL"), nullable=True)

    status = Column(
        Enum(QueueStatus, name="queue_status", native_enum=False),
        nullable=False,
        default=QueueStatus.queued,
    )

    # FIFO position is created_at ascending; python-side default keeps sub-second order
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    checked_in_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_queue_entries_shop_status_created", "shop_id", "status", "created_at"),
    )
