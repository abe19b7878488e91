"""Weekly schedule and schedule exception database operations"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from ..models import ScheduleException, WeeklySchedule


class WeeklyScheduleRepository:

    @staticmethod
    def get_for_day(db: Session, employee_id: UUID, day_of_week: int) -> Optional[WeeklySchedule]:
        return (
            db.query(WeeklySchedule)
            .filter(
                WeeklySchedule.employee_id == employee_id,
                WeeklySchedule.day_of_week == day_of_week,
            )
            .first()
        )

    @staticmethod
    def list_for_employee(db: Session, employee_id: UUID) -> List[WeeklySchedule]:
        return (
            db.query(WeeklySchedule)
            .filter(WeeklySchedule.employee_id == employee_id)
            .order_by(WeeklySchedule.day_of_week)
            .all()
        )

    @staticmethod
    def replace_all(db: Session, employee_id: UUID, rows: List[WeeklySchedule]) -> List[WeeklySchedule]:
        """Delete every stored day for the employee and insert ``rows`` (no commit)"""
        db.query(WeeklySchedule).filter(
            WeeklySchedule.employee_id == employee_id
        ).delete(synchronize_session=False)
        # Deletes must hit the table before the unique (employee, day) rows come back
        db.flush()
        db.add_all(rows)
        db.flush()
        return rows


class ScheduleExceptionRepository:

    @staticmethod
    def find_overlapping(
            db: Session,
            employee_id: UUID,
            start_at: datetime,
            end_at: datetime,
    ) -> List[ScheduleException]:
        """Exceptions sharing any instant with ``[start_at, end_at)``"""
        return (
            db.query(ScheduleException)
            .filter(
                ScheduleException.employee_id == employee_id,
                ScheduleException.start_at < end_at,
                ScheduleException.end_at > start_at,
            )
            .order_by(ScheduleException.start_at)
            .all()
        )

    @staticmethod
    def list_within(
            db: Session,
            employee_id: UUID,
            salon_id: UUID,
            range_start: datetime,
            range_end: datetime,
    ) -> List[ScheduleException]:
        """Exceptions lying fully inside ``[range_start, range_end)``"""
        return (
            db.query(ScheduleException)
            .filter(
                ScheduleException.employee_id == employee_id,
                ScheduleException.salon_id == salon_id,
                ScheduleException.start_at >= range_start,
                ScheduleException.end_at <= range_end,
            )
            .order_by(ScheduleException.start_at)
            .all()
        )

    @staticmethod
    def get(db: Session, exception_id: UUID, employee_id: UUID, salon_id: UUID) -> Optional[ScheduleException]:
        return (
            db.query(ScheduleException)
            .filter(
                ScheduleException.id == exception_id,
                ScheduleException.employee_id == employee_id,
                ScheduleException.salon_id == salon_id,
            )
            .first()
        )

    @staticmethod
    def create(db: Session, **data) -> ScheduleException:
        exception = ScheduleException(**data)
        db.add(exception)
        db.flush()
        return exception

    @staticmethod
    def delete(db: Session, exception: ScheduleException) -> None:
        db.delete(exception)
        db.flush()
