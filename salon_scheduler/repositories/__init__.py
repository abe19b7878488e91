from .appointment_repository import AppointmentRepository
from .directory_repository import EmployeeRepository, SalonRepository, ServiceVariantRepository
from .schedule_repository import ScheduleExceptionRepository, WeeklyScheduleRepository

__all__ = [
    "AppointmentRepository",
    "EmployeeRepository",
    "SalonRepository",
    "ServiceVariantRepository",
    "ScheduleExceptionRepository",
    "WeeklyScheduleRepository",
]
