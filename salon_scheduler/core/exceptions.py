# salon_scheduler/core/exceptions.py
"""Booking engine errors - expected, caller-recoverable conditions"""
from datetime import datetime
from typing import Iterable, Optional
from uuid import UUID


class BookingError(Exception):
    """Base class for every error the engine hands back to its caller"""

    error_code = "booking_error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ============================================================================
# Not found
# ============================================================================

class NotFoundError(BookingError):
    error_code = "not_found"
    status_code = 404


class AppointmentNotFoundError(NotFoundError):
    def __init__(self, appointment_id: UUID):
        super().__init__(f"Appointment {appointment_id} not found")
        self.appointment_id = appointment_id


class StaffNotFoundError(NotFoundError):
    def __init__(self, employee_id: UUID):
        super().__init__(f"Employee {employee_id} not found")
        self.employee_id = employee_id


class VariantNotFoundError(NotFoundError):
    def __init__(self, variant_id: UUID):
        super().__init__(f"Service variant {variant_id} not found")
        self.variant_id = variant_id


class SalonNotFoundError(NotFoundError):
    def __init__(self, salon_id: UUID):
        super().__init__(f"Salon {salon_id} not found")
        self.salon_id = salon_id


class ScheduleExceptionNotFoundError(NotFoundError):
    def __init__(self, exception_id: UUID):
        super().__init__(f"Schedule exception {exception_id} not found")
        self.exception_id = exception_id


# ============================================================================
# Booking rules
# ============================================================================

class StaffUnavailableError(BookingError):
    error_code = "staff_unavailable"
    status_code = 409

    def __init__(self, employee_id: UUID, slot_start: datetime, reason: Optional[str] = None):
        message = f"Employee {employee_id} is not available at {slot_start.isoformat()}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.employee_id = employee_id
        self.slot_start = slot_start
        self.reason = reason


class SlotConflictError(BookingError):
    error_code = "slot_conflict"
    status_code = 409

    def __init__(self, employee_id: UUID, slot_start: datetime, conflicting_ids: Iterable[UUID] = ()):
        super().__init__(f"Employee {employee_id} already has a booking at {slot_start.isoformat()}")
        self.employee_id = employee_id
        self.slot_start = slot_start
        self.conflicting_ids = list(conflicting_ids)


class InvalidTransitionError(BookingError):
    error_code = "invalid_transition"
    status_code = 422

    def __init__(self, current, requested):
        super().__init__(f"Invalid status transition: {current.value} -> {requested.value}")
        self.current = current
        self.requested = requested


class CancellationWindowExpiredError(BookingError):
    error_code = "cancellation_window_expired"
    status_code = 422

    def __init__(self, appointment_id: UUID, window_hours: int):
        super().__init__(
            f"Cancellation window of {window_hours}h has expired for appointment {appointment_id}"
        )
        self.appointment_id = appointment_id
        self.window_hours = window_hours


class IllegalStateError(BookingError):
    error_code = "illegal_state"
    status_code = 422


class InvalidVariantError(BookingError):
    """The catalog variant cannot produce a valid appointment interval"""
    error_code = "invalid_variant"
    status_code = 422

    def __init__(self, variant_id: UUID, duration_minutes):
        super().__init__(f"Service variant {variant_id} has a non-positive duration ({duration_minutes} min)")
        self.variant_id = variant_id
        self.duration_minutes = duration_minutes


# ============================================================================
# Schedule management
# ============================================================================

class InvalidScheduleError(BookingError):
    error_code = "invalid_schedule"
    status_code = 422


class ScheduleExceptionOverlapError(BookingError):
    error_code = "schedule_exception_overlap"
    status_code = 409

    def __init__(self, employee_id: UUID, start_at: datetime, end_at: datetime):
        super().__init__(
            f"Schedule exception overlaps existing for employee {employee_id}: "
            f"{start_at.isoformat()} - {end_at.isoformat()}"
        )
        self.employee_id = employee_id
