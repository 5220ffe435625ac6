import uuid
from sqlalchemy import Column, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID

from shopqueue.core.database import Base
from shopqueue.scheduling.time_utils import utcnow

class EmployeeAttendance(Base):
    __tablename__ = "employee_attendance"

    attendance_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    shop_id = Column(UUID(as_uuid=True), ForeignKey("shops.shop_id", ondelete="CASCADE"), nullable=False)
    employee_id = Column(
        UUID(as_uuid=True),
        ForeignKey("employees.employee_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    clock_in_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    clock_out_at = Column(DateTime(timezone=True), nullable=True)  # NULL while clocked in
