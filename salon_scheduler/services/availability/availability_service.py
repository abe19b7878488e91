# ===== salon_scheduler/services/availability/availability_service.py =====
from typing import Callable, List, Optional
from datetime import date, datetime
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from sqlalchemy.orm import Session
from salon_scheduler.config.settings import settings
from salon_scheduler.core.exceptions import SalonNotFoundError, StaffNotFoundError, StaffUnavailableError
from salon_scheduler.domain.availability import (
    AvailableSlot,
    blocks_whole_window,
    candidate_rejection_reason,
    generate_slots,
    working_window,
)
from salon_scheduler.domain.time_slot import TimeSlot
from salon_scheduler.models import BLOCKING_STATUSES, Salon
from salon_scheduler.models.base import utcnow
from salon_scheduler.repositories import (
    AppointmentRepository,
    EmployeeRepository,
    SalonRepository,
    ScheduleExceptionRepository,
    WeeklyScheduleRepository,
)
import logging

logger = logging.getLogger(__name__)


def salon_timezone(salon: Salon) -> ZoneInfo:
    """The salon's IANA zone; an unknown name falls back to DEFAULT_TIMEZONE"""
    if not salon.timezone:
        return ZoneInfo(settings.DEFAULT_TIMEZONE)
    try:
        return ZoneInfo(salon.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(
            f"Salon {salon.id} has unknown timezone {salon.timezone!r}, using {settings.DEFAULT_TIMEZONE}"
        )
        return ZoneInfo(settings.DEFAULT_TIMEZONE)


class AvailabilityService:
    """Answers "when can this employee be booked" from weekly schedule, exceptions and bookings"""

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.clock = clock

    def get_salon(self, salon_id: UUID) -> Salon:
        salon = SalonRepository.get(self.db, salon_id)
        if not salon:
            raise SalonNotFoundError(salon_id)
        return salon

    def available_slots(
            self,
            salon_id: UUID,
            employee_id: UUID,
            day: date,
            duration_minutes: int
    ) -> List[AvailableSlot]:
        """
        Bookable slots of ``duration_minutes`` for one employee on one salon-local day.

        Recomputed on every call:
        1. Weekly schedule for the weekday (missing or day off -> nothing)
        2. Schedule exceptions; one covering the whole window -> nothing
        3. Blocking appointments inside the window
        4. 15-minute grid walk with lead time, booking and exception filters
        """
        if duration_minutes <= 0:
            raise ValueError("duration_minutes must be positive")

        salon = self.get_salon(salon_id)
        employee = EmployeeRepository.get_in_salon(self.db, employee_id, salon_id)
        if not employee:
            raise StaffNotFoundError(employee_id)

        tz = salon_timezone(salon)
        window = self._working_window(employee_id, day, tz)
        if window is None:
            return []

        exceptions = ScheduleExceptionRepository.find_overlapping(
            self.db, employee_id, window.start, window.end
        )
        blocked = [TimeSlot(ex.start_at, ex.end_at) for ex in exceptions]

        if blocks_whole_window(window, blocked):
            logger.debug(f"Employee {employee_id} fully blocked on {day}")
            return []

        appointments = AppointmentRepository.find_overlapping(
            self.db, employee_id, window.start, window.end, BLOCKING_STATUSES
        )
        busy = [TimeSlot(appt.start_at, appt.end_at) for appt in appointments]

        slots = generate_slots(window, duration_minutes, busy, blocked, self.clock(), tz)
        logger.debug(f"Generated {len(slots)} slots for employee {employee_id} on {day}")
        return slots

    def ensure_available(
            self,
            salon: Salon,
            employee_id: UUID,
            start_at: datetime,
            end_at: datetime
    ) -> None:
        """Raise StaffUnavailableError unless the weekly schedule and exceptions allow the interval"""
        tz = salon_timezone(salon)
        candidate = TimeSlot(start_at, end_at)
        local_day = start_at.astimezone(tz).date()

        window = self._working_window(employee_id, local_day, tz)
        exceptions = ScheduleExceptionRepository.find_overlapping(self.db, employee_id, start_at, end_at)
        blocked = [TimeSlot(ex.start_at, ex.end_at) for ex in exceptions]

        reason = candidate_rejection_reason(window, candidate, blocked)
        if reason:
            logger.info(f"Employee {employee_id} unavailable at {start_at.isoformat()}: {reason}")
            raise StaffUnavailableError(employee_id, start_at, reason)

    def _working_window(self, employee_id: UUID, day: date, tz: ZoneInfo) -> Optional[TimeSlot]:
        schedule = WeeklyScheduleRepository.get_for_day(self.db, employee_id, day.weekday())
        if schedule is None or not schedule.is_working_day:
            return None
        return working_window(day, schedule.start_time, schedule.end_time, tz)
