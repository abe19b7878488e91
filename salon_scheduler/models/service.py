# salon_scheduler/models/service.py
"""
ServiceVariant Model - bookable priced service definitions
Each variant belongs to one salon and is the source of truth for price/duration.
"""
from sqlalchemy import Column, String, Numeric, Integer, ForeignKey, Boolean, DateTime, Uuid, CheckConstraint
from sqlalchemy.sql import func
import uuid
from salon_scheduler.models.base import Base


class ServiceVariant(Base):
    """
    A concrete bookable option of a service (e.g. "Haircut - long hair").
    Appointments snapshot its price and derive their end time from its duration.
    """
    __tablename__ = "service_variants"
    __table_args__ = (
        CheckConstraint("duration_minutes > 0", name="ck_service_variants_positive_duration"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    salon_id = Column(
        Uuid,
        ForeignKey("salons.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name = Column(String(100), nullable=False)

    # Duration in minutes
    duration_minutes = Column(Integer, nullable=False)

    # Stored as decimal for precision
    price = Column(Numeric(10, 2), nullable=False)

    is_active = Column(Boolean, default=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<ServiceVariant(id={self.id}, name={self.name}, salon_id={self.salon_id})>"

