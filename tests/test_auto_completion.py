"""System-driven completion of past appointments."""

from datetime import timedelta
from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from conftest import at
from salon_scheduler.models import Appointment, AppointmentSource, AppointmentStatus
from salon_scheduler.repositories import AppointmentRepository
from salon_scheduler.services.appointment.appointment_service import AppointmentService
from salon_scheduler.services.appointment.auto_completion import AutoCompletionJob

CLIENT_ID = uuid4()


@pytest.fixture
def service(db, clock):
    return AppointmentService(db, clock=clock)


def book(service, seed, hour, source=AppointmentSource.DIRECT):
    return service.create(seed.salon_id, CLIENT_ID, seed.employee_id, seed.variant_id, at(hour), source=source)


def status_of(db, appointment_id):
    db.expire_all()
    return db.get(Appointment, appointment_id).status


def test_completes_every_blocking_status(db, service, seed):
    scheduled = book(service, seed, 9)
    confirmed = book(service, seed, 10)
    in_progress = book(service, seed, 11)
    service.update_status(seed.salon_id, confirmed.id, AppointmentStatus.CONFIRMED)
    service.update_status(seed.salon_id, in_progress.id, AppointmentStatus.IN_PROGRESS)

    assert service.auto_complete(at(18)) == 3

    for appointment in (scheduled, confirmed, in_progress):
        assert status_of(db, appointment.id) == AppointmentStatus.COMPLETED


def test_is_idempotent(service, seed):
    book(service, seed, 9)
    book(service, seed, 10)

    assert service.auto_complete(at(18)) == 2
    assert service.auto_complete(at(18)) == 0


def test_terminal_appointments_are_untouched(db, service, seed):
    cancelled = book(service, seed, 9)
    no_show = book(service, seed, 10)
    service.update_status(seed.salon_id, cancelled.id, AppointmentStatus.CANCELLED)
    service.update_status(seed.salon_id, no_show.id, AppointmentStatus.NO_SHOW)

    assert service.auto_complete(at(18)) == 0
    assert status_of(db, cancelled.id) == AppointmentStatus.CANCELLED
    assert status_of(db, no_show.id) == AppointmentStatus.NO_SHOW


def test_only_appointments_ended_strictly_before_cutoff(db, service, seed):
    ended = book(service, seed, 9)
    ends_at_cutoff = book(service, seed, 10)
    running = book(service, seed, 11)

    assert service.auto_complete(at(11)) == 1
    assert status_of(db, ended.id) == AppointmentStatus.COMPLETED
    assert status_of(db, ends_at_cutoff.id) == AppointmentStatus.SCHEDULED
    assert status_of(db, running.id) == AppointmentStatus.SCHEDULED


def test_backfills_missing_marketplace_commission(db, service, seed):
    appointment = book(service, seed, 9, source=AppointmentSource.MARKETPLACE)
    db.get(Appointment, appointment.id).commission_value = None
    db.commit()

    service.auto_complete(at(18))

    db.expire_all()
    completed = db.get(Appointment, appointment.id)
    assert completed.status == AppointmentStatus.COMPLETED
    assert completed.commission_value == Decimal("15.00")


def test_direct_bookings_stay_without_commission(db, service, seed):
    appointment = book(service, seed, 9)

    service.auto_complete(at(18))

    db.expire_all()
    assert db.get(Appointment, appointment.id).commission_value is None


def test_summary_counts(db, seed, service):
    book(service, seed, 9)

    summary = AutoCompletionJob(db).run(at(18))
    assert summary == {"completed": 1, "skipped": 0, "failed": 0}


def test_row_changed_after_snapshot_is_skipped(db, service, seed, monkeypatch):
    appointment = book(service, seed, 9)
    service.update_status(seed.salon_id, appointment.id, AppointmentStatus.CANCELLED)

    # The sweep still believes the row is SCHEDULED
    stale = SimpleNamespace(
        id=appointment.id,
        status=AppointmentStatus.SCHEDULED,
        source=AppointmentSource.DIRECT,
        final_price=Decimal("100.00"),
        commission_value=None,
    )
    monkeypatch.setattr(AppointmentRepository, "find_ended_before", staticmethod(lambda *args: [stale]))

    summary = AutoCompletionJob(db).run(at(18))

    assert summary == {"completed": 0, "skipped": 1, "failed": 0}
    assert status_of(db, appointment.id) == AppointmentStatus.CANCELLED


def test_one_failure_does_not_stop_the_sweep(db, service, seed, monkeypatch):
    broken = book(service, seed, 9)
    healthy = book(service, seed, 10)
    original = AppointmentRepository.complete_if_status

    def flaky(session, appointment_id, expected_status, commission_value=None):
        if appointment_id == broken.id:
            raise OperationalError("UPDATE appointments", {}, Exception("database is locked"))
        return original(session, appointment_id, expected_status, commission_value=commission_value)

    monkeypatch.setattr(AppointmentRepository, "complete_if_status", staticmethod(flaky))

    summary = AutoCompletionJob(db).run(at(18))

    assert summary == {"completed": 1, "skipped": 0, "failed": 1}
    assert status_of(db, healthy.id) == AppointmentStatus.COMPLETED
    assert status_of(db, broken.id) == AppointmentStatus.SCHEDULED


def test_conditional_update_refuses_unexpected_status(db, service, seed):
    appointment = book(service, seed, 9)
    service.update_status(seed.salon_id, appointment.id, AppointmentStatus.NO_SHOW)

    assert not AppointmentRepository.complete_if_status(db, appointment.id, AppointmentStatus.SCHEDULED)
    db.commit()
    assert status_of(db, appointment.id) == AppointmentStatus.NO_SHOW


def test_nothing_due(db, seed):
    assert AutoCompletionJob(db).run(at(8) - timedelta(days=1)) == {"completed": 0, "skipped": 0, "failed": 0}
