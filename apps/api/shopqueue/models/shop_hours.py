import uuid
from sqlalchemy import Column, Time, SmallInteger, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID

from shopqueue.core.database import Base

class ShopHours(Base):
    __tablename__ = "shop_hours"

    shop_hours_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    shop_id = Column(
        UUID(as_uuid=True),
        ForeignKey("shops.shop_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    day_of_week = Column(SmallInteger, nullable=False)  # 0=Sun ... 6=Sat
    open_time = Column(Time, nullable=True)
    close_time = Column(Time, nullable=True)
    is_closed = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint("shop_id", "day_of_week", name="uq_shop_hours_shop_day"),
    )
