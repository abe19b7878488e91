import os

# Must be set before salon_scheduler settings are first loaded
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"

from datetime import datetime, time, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest
from sqlalchemy.orm import sessionmaker

from salon_scheduler.config.database import build_engine, create_tables
from salon_scheduler.models import (
    Employee,
    EmployeeStatus,
    Salon,
    ScheduleException,
    ScheduleExceptionType,
    ServiceVariant,
    WeeklySchedule,
)

# 2030-01-07 is a Monday
MONDAY = datetime(2030, 1, 7, tzinfo=timezone.utc)
# Sunday noon, a day before the seeded working week starts
NOW = datetime(2030, 1, 6, 12, 0, tzinfo=timezone.utc)


def at(hour, minute=0, day=MONDAY):
    return day.replace(hour=hour, minute=minute)


class FrozenClock:
    """Injectable clock that only moves when told to"""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def set(self, now):
        self.now = now


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'salon.db'}")
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FrozenClock(NOW)


def make_salon(db, name="Studio", tz="UTC", cancellation_window_hours=24):
    salon = Salon(name=name, timezone=tz, cancellation_window_hours=cancellation_window_hours)
    db.add(salon)
    db.flush()
    return salon


def make_employee(db, salon, name="Anna", status=EmployeeStatus.ACTIVE):
    employee = Employee(salon_id=salon.id, display_name=name, status=status)
    db.add(employee)
    db.flush()
    return employee


def make_variant(db, salon, name="Haircut", duration_minutes=60, price="100.00"):
    variant = ServiceVariant(
        salon_id=salon.id,
        name=name,
        duration_minutes=duration_minutes,
        price=Decimal(price),
    )
    db.add(variant)
    db.flush()
    return variant


def add_working_week(db, employee, start=time(9, 0), end=time(17, 0), days=range(5)):
    for day_of_week in days:
        db.add(WeeklySchedule(
            salon_id=employee.salon_id,
            employee_id=employee.id,
            day_of_week=day_of_week,
            start_time=start,
            end_time=end,
            is_working_day=True,
        ))
    db.flush()


def add_exception(db, employee, start_at, end_at, exception_type=ScheduleExceptionType.BLOCKED):
    exception = ScheduleException(
        salon_id=employee.salon_id,
        employee_id=employee.id,
        start_at=start_at,
        end_at=end_at,
        type=exception_type,
    )
    db.add(exception)
    db.flush()
    return exception


@pytest.fixture
def seed(db):
    """One UTC salon with an employee working Mon-Fri 09:00-17:00 and two services"""
    salon = make_salon(db)
    employee = make_employee(db, salon)
    haircut = make_variant(db, salon, "Haircut", 60, "100.00")
    trim = make_variant(db, salon, "Beard trim", 30, "40.00")
    add_working_week(db, employee)

    # Read ids before commit; touching expired rows afterwards would reopen a write transaction
    ids = SimpleNamespace(
        salon_id=salon.id,
        employee_id=employee.id,
        variant_id=haircut.id,
        short_variant_id=trim.id,
    )
    db.commit()
    return ids
