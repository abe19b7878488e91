# salon_scheduler/models/appointment.py
from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey, Uuid, Index, CheckConstraint, Enum as SQLEnum
from sqlalchemy.sql import func
from salon_scheduler.models.base import Base, UTCDateTime
import uuid
import enum


class AppointmentStatus(str, enum.Enum):
    SCHEDULED = "SCHEDULED"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


class AppointmentSource(str, enum.Enum):
    DIRECT = "DIRECT"
    MARKETPLACE = "MARKETPLACE"


# Statuses that occupy the employee's time
BLOCKING_STATUSES = frozenset({
    AppointmentStatus.SCHEDULED,
    AppointmentStatus.CONFIRMED,
    AppointmentStatus.IN_PROGRESS,
})

RESCHEDULABLE_STATUSES = frozenset({
    AppointmentStatus.SCHEDULED,
    AppointmentStatus.CONFIRMED,
})


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        CheckConstraint("end_at > start_at", name="ck_appointment_interval"),
        Index("ix_appointments_employee_start", "employee_id", "start_at"),
        Index("ix_appointments_status_end", "status", "end_at"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # References
    salon_id = Column(Uuid, ForeignKey("salons.id"), nullable=False, index=True)
    client_id = Column(Uuid, nullable=False)  # owned by the client registry
    employee_id = Column(Uuid, ForeignKey("employees.id"), nullable=False)
    variant_id = Column(Uuid, ForeignKey("service_variants.id"), nullable=False)

    # Appointment details
    start_at = Column(UTCDateTime, nullable=False)
    end_at = Column(UTCDateTime, nullable=False)
    notes = Column(String(500), nullable=True)

    # Status tracking
    status = Column(
        SQLEnum(AppointmentStatus, name="appointment_status"),
        nullable=False,
        default=AppointmentStatus.SCHEDULED,
    )
    source = Column(
        SQLEnum(AppointmentSource, name="appointment_source"),
        nullable=False,
        default=AppointmentSource.DIRECT,
    )

    # Money snapshot taken at booking time
    final_price = Column(Numeric(10, 2), nullable=True)
    commission_value = Column(Numeric(10, 2), nullable=True)

    cancellation_reason = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def is_blocking(self) -> bool:
        return self.status in BLOCKING_STATUSES

    def __repr__(self):
        return f"<Appointment(id={self.id}, employee_id={self.employee_id}, status={self.status})>"
