"""Appointment database operations"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from ..models import Appointment, AppointmentStatus


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def get_in_salon(
            db: Session,
            appointment_id: UUID,
            salon_id: UUID,
            for_update: bool = False,
    ) -> Optional[Appointment]:
        query = db.query(Appointment).filter(
            Appointment.id == appointment_id,
            Appointment.salon_id == salon_id,
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    @staticmethod
    def find_overlapping(
            db: Session,
            employee_id: UUID,
            start_at: datetime,
            end_at: datetime,
            statuses: Iterable[AppointmentStatus],
            exclude_id: Optional[UUID] = None,
    ) -> List[Appointment]:
        """Appointments of the employee in ``statuses`` sharing any instant with ``[start_at, end_at)``"""
        query = db.query(Appointment).filter(
            Appointment.employee_id == employee_id,
            Appointment.status.in_(list(statuses)),
            Appointment.start_at < end_at,
            Appointment.end_at > start_at,
        )
        if exclude_id is not None:
            query = query.filter(Appointment.id != exclude_id)
        return query.order_by(Appointment.start_at.asc()).all()

    @staticmethod
    def find_ended_before(
            db: Session,
            statuses: Iterable[AppointmentStatus],
            before: datetime,
    ) -> List[Appointment]:
        return (
            db.query(Appointment)
            .filter(
                Appointment.status.in_(list(statuses)),
                Appointment.end_at < before,
            )
            .order_by(Appointment.end_at.asc())
            .all()
        )

    @staticmethod
    def list_starting_between(
            db: Session,
            salon_id: UUID,
            range_start: datetime,
            range_end: datetime,
            employee_id: Optional[UUID] = None,
    ) -> List[Appointment]:
        query = db.query(Appointment).filter(
            Appointment.salon_id == salon_id,
            Appointment.start_at >= range_start,
            Appointment.start_at < range_end,
        )
        if employee_id is not None:
            query = query.filter(Appointment.employee_id == employee_id)
        return query.order_by(Appointment.start_at.asc()).all()

    @staticmethod
    def add(db: Session, appointment: Appointment) -> Appointment:
        db.add(appointment)
        db.flush()
        return appointment

    @staticmethod
    def complete_if_status(
            db: Session,
            appointment_id: UUID,
            expected_status: AppointmentStatus,
            commission_value: Optional[Decimal] = None,
    ) -> bool:
        """
        System-initiated completion, bypassing the state machine.

        The update only applies while the row still has ``expected_status``;
        returns False when another writer changed it first.
        """
        values = {Appointment.status: AppointmentStatus.COMPLETED}
        if commission_value is not None:
            values[Appointment.commission_value] = commission_value

        updated = (
            db.query(Appointment)
            .filter(
                Appointment.id == appointment_id,
                Appointment.status == expected_status,
            )
            .update(values, synchronize_session=False)
        )
        return updated == 1
