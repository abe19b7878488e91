# salon_scheduler/models/__init__.py
from .base import Base, UTCDateTime
from .salon import Salon
from .employee import Employee, EmployeeStatus
from .service import ServiceVariant
from .availability import WeeklySchedule, ScheduleException, ScheduleExceptionType
from .appointment import (
    Appointment,
    AppointmentStatus,
    AppointmentSource,
    BLOCKING_STATUSES,
    RESCHEDULABLE_STATUSES,
)

__all__ = [
    "Base",
    "UTCDateTime",
    "Salon",
    "Employee",
    "EmployeeStatus",
    "ServiceVariant",
    "WeeklySchedule",
    "ScheduleException",
    "ScheduleExceptionType",
    "Appointment",
    "AppointmentStatus",
    "AppointmentSource",
    "BLOCKING_STATUSES",
    "RESCHEDULABLE_STATUSES",
]
