import uuid
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID

from shopqueue.core.database import Base
from shopqueue.scheduling.time_utils import utcnow

class Ad(Base):
    __tablename__ = "ads"

    ad_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    shop_id = Column(
        UUID(as_uuid=True),
        ForeignKey("shops.shop_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = Column(String, nullable=True)
    image_url = Column(String, nullable=True)  # media lives in external blob storage
    video_url = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
