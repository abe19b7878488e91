"""Concurrent bookings of one slot: exactly one wins."""

import threading
from uuid import uuid4

from conftest import at
from salon_scheduler.core.exceptions import SlotConflictError
from salon_scheduler.models import Appointment, AppointmentStatus
from salon_scheduler.services.appointment.appointment_service import AppointmentService

WORKERS = 8


def race(session_factory, clock, attempt):
    """Run ``attempt(service)`` from WORKERS threads released at the same instant"""
    barrier = threading.Barrier(WORKERS)
    outcomes = []
    lock = threading.Lock()

    def worker():
        session = session_factory()
        try:
            barrier.wait()
            result = attempt(AppointmentService(session, clock=clock))
            outcome = ("ok", result.id)
        except SlotConflictError as exc:
            outcome = ("conflict", exc)
        except Exception as exc:
            outcome = ("error", exc)
        finally:
            session.close()
        with lock:
            outcomes.append(outcome)

    threads = [threading.Thread(target=worker) for _ in range(WORKERS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)

    return outcomes


def test_same_slot_is_booked_once(session_factory, seed, clock, db):
    outcomes = race(
        session_factory,
        clock,
        lambda service: service.create(seed.salon_id, uuid4(), seed.employee_id, seed.variant_id, at(10)),
    )

    kinds = [kind for kind, _ in outcomes]
    assert len(outcomes) == WORKERS
    assert kinds.count("ok") == 1
    assert kinds.count("conflict") == WORKERS - 1
    assert db.query(Appointment).filter(Appointment.status == AppointmentStatus.SCHEDULED).count() == 1


def test_overlapping_slots_are_booked_once(session_factory, seed, clock, db):
    # Every candidate covers 10:00-10:15, so any two of them clash
    starts = [at(9, 15), at(9, 20), at(9, 30), at(9, 40), at(9, 45), at(9, 50), at(9, 55), at(10)]

    def attempt_factory():
        queue = list(starts)
        queue_lock = threading.Lock()

        def attempt(service):
            with queue_lock:
                start_at = queue.pop()
            return service.create(seed.salon_id, uuid4(), seed.employee_id, seed.variant_id, start_at)

        return attempt

    outcomes = race(session_factory, clock, attempt_factory())

    kinds = [kind for kind, _ in outcomes]
    assert kinds.count("ok") == 1
    assert kinds.count("conflict") == WORKERS - 1
    assert db.query(Appointment).count() == 1
