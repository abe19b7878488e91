# salon_scheduler/schemas/__init__.py
from .appointment import (
    AppointmentCreate,
    AppointmentStatusUpdate,
    AppointmentReschedule,
    AppointmentResponse,
    WeekAppointmentsResponse,
    AvailableSlotResponse,
)

from .schedule import (
    DayScheduleSchema,
    WeeklyScheduleUpdate,
    WeeklyScheduleResponse,
    ScheduleExceptionCreate,
    ScheduleExceptionResponse,
)

__all__ = [
    "AppointmentCreate",
    "AppointmentStatusUpdate",
    "AppointmentReschedule",
    "AppointmentResponse",
    "WeekAppointmentsResponse",
    "AvailableSlotResponse",
    "DayScheduleSchema",
    "WeeklyScheduleUpdate",
    "WeeklyScheduleResponse",
    "ScheduleExceptionCreate",
    "ScheduleExceptionResponse",
]
