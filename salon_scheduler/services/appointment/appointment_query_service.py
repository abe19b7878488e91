# ============================================================================
# salon_scheduler/services/appointment/appointment_query_service.py
# Read side - no FastAPI dependencies, fully testable
# ============================================================================
from sqlalchemy.orm import Session
from datetime import date, timedelta
from typing import Optional, Dict, Iterable, List
from uuid import UUID
from zoneinfo import ZoneInfo

from salon_scheduler.core.exceptions import AppointmentNotFoundError, SalonNotFoundError
from salon_scheduler.domain.availability import local_day_bounds
from salon_scheduler.models import Appointment, AppointmentStatus
from salon_scheduler.repositories import AppointmentRepository, SalonRepository
from salon_scheduler.services.availability.availability_service import salon_timezone


class AppointmentQueryService:
    """Lookups of appointments for one salon, bounded by salon-local days."""

    @staticmethod
    def _salon_timezone(db: Session, salon_id: UUID) -> ZoneInfo:
        salon = SalonRepository.get(db, salon_id)
        if not salon:
            raise SalonNotFoundError(salon_id)
        return salon_timezone(salon)

    @staticmethod
    def get(db: Session, salon_id: UUID, appointment_id: UUID) -> Appointment:
        appointment = AppointmentRepository.get_in_salon(db, appointment_id, salon_id)
        if not appointment:
            raise AppointmentNotFoundError(appointment_id)
        return appointment

    @staticmethod
    def list_for_day(
            db: Session,
            salon_id: UUID,
            day: date,
            employee_id: Optional[UUID] = None,
            statuses: Optional[Iterable[AppointmentStatus]] = None
    ) -> List[Appointment]:
        """Appointments starting on the salon-local ``day``, ordered by start."""
        tz = AppointmentQueryService._salon_timezone(db, salon_id)
        bounds = local_day_bounds(day, tz)

        appointments = AppointmentRepository.list_starting_between(
            db, salon_id, bounds.start, bounds.end, employee_id=employee_id
        )
        if statuses:
            wanted = set(statuses)
            appointments = [appt for appt in appointments if appt.status in wanted]
        return appointments

    @staticmethod
    def list_for_week(db: Session, salon_id: UUID, week_start: date) -> Dict[date, List[Appointment]]:
        """Seven salon-local days from ``week_start``; days without bookings map to []"""
        tz = AppointmentQueryService._salon_timezone(db, salon_id)
        range_start = local_day_bounds(week_start, tz).start
        range_end = local_day_bounds(week_start + timedelta(days=6), tz).end

        week = {week_start + timedelta(days=offset): [] for offset in range(7)}
        for appt in AppointmentRepository.list_starting_between(db, salon_id, range_start, range_end):
            week[appt.start_at.astimezone(tz).date()].append(appt)
        return week

