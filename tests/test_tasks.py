"""Celery wiring for the auto-completion sweep."""

from uuid import uuid4

import pytest

from conftest import at
from salon_scheduler.config.celery_config import celery_app
from salon_scheduler.models import Appointment, AppointmentStatus
from salon_scheduler.services.appointment.appointment_service import AppointmentService
from salon_scheduler.tasks import appointment_tasks


@pytest.fixture
def task_db(db, monkeypatch):
    def fake_get_db():
        yield db

    monkeypatch.setattr(appointment_tasks, "get_db", fake_get_db)
    return db


def test_sweep_completes_past_appointments(task_db, clock, seed):
    appointment = AppointmentService(task_db, clock=clock).create(
        seed.salon_id, uuid4(), seed.employee_id, seed.variant_id, at(10)
    )

    result = appointment_tasks.auto_complete_appointments.apply(kwargs={"as_of": at(18).isoformat()}).get()

    assert result == {
        "status": "success",
        "as_of": at(18).isoformat(),
        "completed": 1,
        "skipped": 0,
        "failed": 0,
    }
    task_db.expire_all()
    assert task_db.get(Appointment, appointment.id).status == AppointmentStatus.COMPLETED


def test_naive_cutoff_is_read_as_utc(task_db, seed):
    result = appointment_tasks.auto_complete_appointments.apply(kwargs={"as_of": "2030-01-07T18:00:00"}).get()

    assert result["as_of"] == at(18).isoformat()
    assert result["completed"] == 0


def test_beat_schedule_and_routing():
    schedule = celery_app.conf.beat_schedule["auto-complete-appointments"]

    assert schedule["task"] == "salon_scheduler.tasks.appointment_tasks.auto_complete_appointments"
    assert celery_app.conf.task_routes["salon_scheduler.tasks.appointment_tasks.*"]["queue"] == "appointments"


def test_worker_uses_the_shared_app():
    from salon_scheduler import worker

    assert worker.celery_app is celery_app
    assert "salon_scheduler.tasks.appointment_tasks.auto_complete_appointments" in celery_app.tasks
