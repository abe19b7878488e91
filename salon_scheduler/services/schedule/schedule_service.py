# salon_scheduler/services/schedule/schedule_service.py
"""Service for managing employee working hours and schedule exceptions"""
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Callable, List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from salon_scheduler.core.exceptions import InvalidScheduleError, ScheduleExceptionNotFoundError, StaffNotFoundError
from salon_scheduler.domain.availability import local_day_bounds
from salon_scheduler.domain.schedule_validator import validate_schedule_exception, validate_working_day
from salon_scheduler.domain.time_slot import TimeSlot
from salon_scheduler.models import Employee, ScheduleException, ScheduleExceptionType, WeeklySchedule
from salon_scheduler.models.base import utcnow
from salon_scheduler.repositories import (
    EmployeeRepository,
    SalonRepository,
    ScheduleExceptionRepository,
    WeeklyScheduleRepository,
)
from salon_scheduler.services.availability.availability_service import salon_timezone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DaySchedule:
    day_of_week: int  # 0=Monday, 6=Sunday
    start_time: Optional[time]
    end_time: Optional[time]
    is_working_day: bool = True


class ScheduleService:
    """Weekly working hours and one-off exceptions of a salon's employees"""

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.clock = clock

    def _get_employee(self, salon_id: UUID, employee_id: UUID) -> Employee:
        employee = EmployeeRepository.get_in_salon(self.db, employee_id, salon_id)
        if not employee:
            raise StaffNotFoundError(employee_id)
        return employee

    # ------------------------------------------------------------------
    # Weekly schedule
    # ------------------------------------------------------------------

    def get_weekly_schedule(self, salon_id: UUID, employee_id: UUID) -> List[DaySchedule]:
        """Always seven days; days without a stored row come back as non-working 00:00-00:00"""
        self._get_employee(salon_id, employee_id)
        stored = {
            row.day_of_week: row
            for row in WeeklyScheduleRepository.list_for_employee(self.db, employee_id)
        }

        week = []
        for day_of_week in range(7):
            row = stored.get(day_of_week)
            if row is None:
                week.append(DaySchedule(day_of_week, time(0, 0), time(0, 0), is_working_day=False))
            else:
                week.append(DaySchedule(row.day_of_week, row.start_time, row.end_time, row.is_working_day))
        return week

    def replace_weekly_schedule(self, salon_id: UUID, employee_id: UUID, days: List[DaySchedule]) -> List[DaySchedule]:
        """Replace the whole week; only working days are stored"""
        self._get_employee(salon_id, employee_id)

        seen = set()
        for day in days:
            if not 0 <= day.day_of_week <= 6:
                raise InvalidScheduleError(f"Invalid day of week: {day.day_of_week}")
            if day.day_of_week in seen:
                raise InvalidScheduleError(f"Duplicate day of week: {day.day_of_week}")
            seen.add(day.day_of_week)
            if day.is_working_day:
                if day.start_time is None or day.end_time is None:
                    raise InvalidScheduleError(f"Working day {day.day_of_week} needs a start and end time")
                validate_working_day(day.start_time, day.end_time)

        rows = [
            WeeklySchedule(
                salon_id=salon_id,
                employee_id=employee_id,
                day_of_week=day.day_of_week,
                start_time=day.start_time,
                end_time=day.end_time,
                is_working_day=True,
            )
            for day in days
            if day.is_working_day
        ]

        try:
            WeeklyScheduleRepository.replace_all(self.db, employee_id, rows)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Replaced weekly schedule for employee {employee_id}: {len(rows)} working days")
        return self.get_weekly_schedule(salon_id, employee_id)

    # ------------------------------------------------------------------
    # Exceptions
    # ------------------------------------------------------------------

    def add_schedule_exception(
            self,
            salon_id: UUID,
            employee_id: UUID,
            start_at: datetime,
            end_at: datetime,
            exception_type: ScheduleExceptionType,
            reason: Optional[str] = None
    ) -> ScheduleException:
        self._get_employee(salon_id, employee_id)

        existing = []
        if end_at > start_at:
            existing = [
                TimeSlot(ex.start_at, ex.end_at)
                for ex in ScheduleExceptionRepository.find_overlapping(self.db, employee_id, start_at, end_at)
            ]
        validate_schedule_exception(employee_id, start_at, end_at, self.clock(), existing)

        try:
            exception = ScheduleExceptionRepository.create(
                self.db,
                salon_id=salon_id,
                employee_id=employee_id,
                start_at=start_at,
                end_at=end_at,
                type=exception_type,
                reason=reason,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(exception)
        logger.info(
            f"Added {exception_type.value} exception {exception.id} for employee {employee_id}: "
            f"{start_at.isoformat()} - {end_at.isoformat()}"
        )
        return exception

    def list_schedule_exceptions(
            self,
            salon_id: UUID,
            employee_id: UUID,
            date_from: date,
            date_to: date
    ) -> List[ScheduleException]:
        """Exceptions lying fully inside the salon-local days ``date_from``..``date_to``"""
        if date_to < date_from:
            raise InvalidScheduleError("date_to must not be before date_from")

        self._get_employee(salon_id, employee_id)
        tz = salon_timezone(SalonRepository.get(self.db, salon_id))
        range_start = local_day_bounds(date_from, tz).start
        range_end = local_day_bounds(date_to, tz).end

        return ScheduleExceptionRepository.list_within(self.db, employee_id, salon_id, range_start, range_end)

    def delete_schedule_exception(self, salon_id: UUID, employee_id: UUID, exception_id: UUID) -> None:
        exception = ScheduleExceptionRepository.get(self.db, exception_id, employee_id, salon_id)
        if not exception:
            raise ScheduleExceptionNotFoundError(exception_id)

        try:
            ScheduleExceptionRepository.delete(self.db, exception)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Deleted schedule exception {exception_id} for employee {employee_id}")
