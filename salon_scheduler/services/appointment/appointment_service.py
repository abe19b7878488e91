# ============================================================================
# salon_scheduler/services/appointment/appointment_service.py
# ============================================================================
"""Service for booking, transitioning and rescheduling appointments"""
import logging
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from salon_scheduler.core.exceptions import (
    AppointmentNotFoundError,
    CancellationWindowExpiredError,
    IllegalStateError,
    InvalidVariantError,
    SlotConflictError,
    StaffNotFoundError,
    StaffUnavailableError,
    VariantNotFoundError,
)
from salon_scheduler.domain.pricing import commission_for
from salon_scheduler.domain.status_machine import INITIAL_STATUS, validate_transition
from salon_scheduler.domain.time_slot import TimeSlot
from salon_scheduler.models import (
    Appointment,
    AppointmentSource,
    AppointmentStatus,
    BLOCKING_STATUSES,
    RESCHEDULABLE_STATUSES,
    Salon,
    ServiceVariant,
)
from salon_scheduler.models.base import utcnow
from salon_scheduler.repositories import AppointmentRepository, EmployeeRepository, ServiceVariantRepository
from salon_scheduler.services.appointment.auto_completion import AutoCompletionJob
from salon_scheduler.services.appointment.conflict_detector import ConflictDetector
from salon_scheduler.services.availability.availability_service import AvailabilityService

logger = logging.getLogger(__name__)

# Name of the PostgreSQL exclusion constraint created by the initial migration
OVERLAP_CONSTRAINT = "ex_appointments_employee_no_overlap"


class AppointmentService:
    """
    Appointment lifecycle: create, status transitions, reschedule, auto-completion.

    Every operation takes the salon explicitly; nothing is read from ambient
    request state. Each public method is one transaction: it commits on
    success and rolls back on any error before re-raising.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.clock = clock
        self.availability = AvailabilityService(db, clock=clock)
        self.conflicts = ConflictDetector(db)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(
            self,
            salon_id: UUID,
            client_id: UUID,
            employee_id: UUID,
            variant_id: UUID,
            start_at: datetime,
            source: AppointmentSource = AppointmentSource.DIRECT,
            notes: Optional[str] = None
    ) -> Appointment:
        """Book a new appointment in SCHEDULED status"""
        with self._transaction():
            variant = self._get_variant(salon_id, variant_id)

            end_at = start_at + timedelta(minutes=variant.duration_minutes)
            salon = self.availability.get_salon(salon_id)

            self._lock_bookable_employee(salon, employee_id, start_at)

            with self._overlap_as_conflict(employee_id, start_at):
                self._check_slot(salon, employee_id, start_at, end_at)

                appointment = Appointment(
                    salon_id=salon_id,
                    client_id=client_id,
                    employee_id=employee_id,
                    variant_id=variant_id,
                    start_at=start_at,
                    end_at=end_at,
                    status=INITIAL_STATUS,
                    source=source,
                    final_price=variant.price,
                    commission_value=commission_for(source, variant.price),
                    notes=notes,
                )
                AppointmentRepository.add(self.db, appointment)

        self.db.refresh(appointment)
        logger.info(
            f"Created appointment {appointment.id} for salon {salon_id} "
            f"employee {employee_id} at {start_at.isoformat()} ({source.value})"
        )
        return appointment

    # ------------------------------------------------------------------
    # Status transitions
    # ------------------------------------------------------------------

    def update_status(
            self,
            salon_id: UUID,
            appointment_id: UUID,
            new_status: AppointmentStatus,
            reason: Optional[str] = None
    ) -> Appointment:
        """User-driven status change, validated by the state machine"""
        with self._transaction():
            appointment = self._get_for_update(salon_id, appointment_id)
            previous = appointment.status

            validate_transition(previous, new_status)

            if new_status == AppointmentStatus.CANCELLED and appointment.source == AppointmentSource.MARKETPLACE:
                salon = self.availability.get_salon(salon_id)
                deadline = self.clock() + timedelta(hours=salon.cancellation_window_hours)
                if appointment.start_at < deadline:
                    raise CancellationWindowExpiredError(appointment_id, salon.cancellation_window_hours)

            appointment.status = new_status

            if new_status == AppointmentStatus.CANCELLED:
                appointment.cancellation_reason = reason

            if new_status == AppointmentStatus.COMPLETED and appointment.commission_value is None:
                appointment.commission_value = commission_for(appointment.source, appointment.final_price)

        self.db.refresh(appointment)
        logger.info(f"User transition for appointment {appointment_id}: {previous.value} -> {new_status.value}")
        return appointment

    # ------------------------------------------------------------------
    # Reschedule
    # ------------------------------------------------------------------

    def reschedule(self, salon_id: UUID, appointment_id: UUID, new_start_at: datetime) -> Appointment:
        """Move an appointment; only start and end change"""
        with self._transaction():
            appointment = self._get_for_update(salon_id, appointment_id)
            if appointment.status not in RESCHEDULABLE_STATUSES:
                raise IllegalStateError(
                    f"Can only reschedule SCHEDULED or CONFIRMED appointments "
                    f"(appointment {appointment_id} is {appointment.status.value})"
                )

            employee_id = appointment.employee_id
            salon = self.availability.get_salon(salon_id)
            self._lock_bookable_employee(salon, employee_id, new_start_at)

            variant = self._get_variant(salon_id, appointment.variant_id)
            new_end_at = new_start_at + timedelta(minutes=variant.duration_minutes)

            with self._overlap_as_conflict(employee_id, new_start_at):
                self._check_slot(salon, employee_id, new_start_at, new_end_at, exclude_id=appointment.id)

                appointment.start_at = new_start_at
                appointment.end_at = new_end_at
                self.db.flush()

        self.db.refresh(appointment)
        logger.info(f"Rescheduled appointment {appointment_id} to {new_start_at.isoformat()}")
        return appointment

    # ------------------------------------------------------------------
    # Auto-completion
    # ------------------------------------------------------------------

    def auto_complete(self, as_of: datetime) -> int:
        """Complete every blocking appointment that ended before ``as_of``; returns how many"""
        summary = AutoCompletionJob(self.db).run(as_of)
        return summary["completed"]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_for_update(self, salon_id: UUID, appointment_id: UUID) -> Appointment:
        appointment = AppointmentRepository.get_in_salon(self.db, appointment_id, salon_id, for_update=True)
        if not appointment:
            raise AppointmentNotFoundError(appointment_id)
        return appointment

    def _get_variant(self, salon_id: UUID, variant_id: UUID) -> ServiceVariant:
        variant = ServiceVariantRepository.get_in_salon(self.db, variant_id, salon_id)
        if not variant:
            raise VariantNotFoundError(variant_id)
        if not variant.duration_minutes or variant.duration_minutes <= 0:
            raise InvalidVariantError(variant_id, variant.duration_minutes)
        return variant

    def _lock_bookable_employee(self, salon: Salon, employee_id: UUID, start_at: datetime) -> None:
        employee = EmployeeRepository.lock_for_booking(self.db, employee_id)
        if not employee:
            raise StaffNotFoundError(employee_id)
        if employee.salon_id != salon.id:
            raise StaffUnavailableError(employee_id, start_at, "employee does not belong to this salon")
        if not employee.is_bookable:
            raise StaffUnavailableError(employee_id, start_at, f"employee is {employee.status.value}")

    def _check_slot(
            self,
            salon: Salon,
            employee_id: UUID,
            start_at: datetime,
            end_at: datetime,
            exclude_id: Optional[UUID] = None
    ) -> None:
        self.availability.ensure_available(salon, employee_id, start_at, end_at)
        self.conflicts.ensure_no_conflict(
            employee_id,
            TimeSlot(start_at, end_at),
            BLOCKING_STATUSES,
            exclude_appointment_id=exclude_id,
        )

    @contextmanager
    def _transaction(self):
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    @contextmanager
    def _overlap_as_conflict(self, employee_id: UUID, start_at: datetime):
        """Surface overlap-constraint violations raised at flush as SlotConflictError"""
        try:
            yield
        except IntegrityError as exc:
            if OVERLAP_CONSTRAINT not in str(exc.orig):
                raise
            logger.warning(f"Overlap constraint rejected booking for employee {employee_id} at {start_at.isoformat()}")
            raise SlotConflictError(employee_id, start_at) from exc
        except SlotConflictError:
            logger.warning(f"Appointment conflict for employee {employee_id} at {start_at.isoformat()}")
            raise
