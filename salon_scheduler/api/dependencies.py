# ============================================================================
# FILE: salon_scheduler/api/dependencies.py
# Tenant resolution and service providers
# ============================================================================
from fastapi import Depends, Header
from sqlalchemy.orm import Session
from uuid import UUID

from salon_scheduler.config.database import get_db
from salon_scheduler.services.appointment.appointment_service import AppointmentService
from salon_scheduler.services.availability.availability_service import AvailabilityService
from salon_scheduler.services.schedule.schedule_service import ScheduleService


def get_salon_id(x_salon_id: UUID = Header(..., alias="X-Salon-Id", description="Tenant (salon) ID")) -> UUID:
    """The tenant travels explicitly with every request"""
    return x_salon_id


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    return AppointmentService(db)


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(db)


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    return ScheduleService(db)
