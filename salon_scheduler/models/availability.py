# salon_scheduler/models/availability.py
from sqlalchemy import Column, String, Integer, Boolean, Time, ForeignKey, Uuid, UniqueConstraint, CheckConstraint, Enum as SQLEnum
from salon_scheduler.models.base import Base, UTCDateTime
import uuid
import enum


class ScheduleExceptionType(str, enum.Enum):
    VACATION = "VACATION"
    SICK_LEAVE = "SICK_LEAVE"
    BLOCKED = "BLOCKED"
    PERSONAL = "PERSONAL"


class WeeklySchedule(Base):
    """Recurring working hours of an employee for one day of the week"""
    __tablename__ = "weekly_schedules"
    __table_args__ = (
        UniqueConstraint("employee_id", "day_of_week", name="uq_weekly_schedule_employee_day"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    salon_id = Column(Uuid, ForeignKey("salons.id"), nullable=False)
    employee_id = Column(Uuid, ForeignKey("employees.id"), nullable=False, index=True)

    day_of_week = Column(Integer, nullable=False)  # 0=Monday, 6=Sunday
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    is_working_day = Column(Boolean, nullable=False, default=True)


class ScheduleException(Base):
    """Ad-hoc blocked interval (vacation, sick leave, one-off block)"""
    __tablename__ = "schedule_exceptions"
    __table_args__ = (
        CheckConstraint("end_at > start_at", name="ck_schedule_exception_interval"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    salon_id = Column(Uuid, ForeignKey("salons.id"), nullable=False)
    employee_id = Column(Uuid, ForeignKey("employees.id"), nullable=False, index=True)

    start_at = Column(UTCDateTime, nullable=False)
    end_at = Column(UTCDateTime, nullable=False)
    reason = Column(String, nullable=True)  # "Holiday", "Vacation", etc.
    type = Column(SQLEnum(ScheduleExceptionType, name="schedule_exception_type"), nullable=False)
