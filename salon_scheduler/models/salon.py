# salon_scheduler/models/salon.py
"""
Salon Model - the tenant
Only the settings the booking engine reads live here; the rest of the salon
profile is owned by the settings service.
"""
from sqlalchemy import Column, String, Integer, DateTime, Uuid
from sqlalchemy.sql import func
import uuid
from salon_scheduler.config.settings import get_settings
from salon_scheduler.models.base import Base

settings = get_settings()


class Salon(Base):
    __tablename__ = "salons"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)

    # Wall-clock reference for weekly schedules and day boundaries
    timezone = Column(String(50), nullable=False, default=settings.DEFAULT_TIMEZONE)
    cancellation_window_hours = Column(Integer, nullable=False, default=settings.DEFAULT_CANCELLATION_WINDOW_HOURS)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Salon(id={self.id}, name={self.name})>"
