import uuid
from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from shopqueue.core.database import Base

class Shop(Base):
    __tablename__ = "shops"

    shop_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    suburb = Column(String, nullable=True)

    # TV display split (left queue panel width) and ad rotation cadence
    tv_left_percent = Column(Integer, nullable=False, default=70)
    tv_ad_rotation_seconds = Column(Integer, nullable=False, default=10)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
