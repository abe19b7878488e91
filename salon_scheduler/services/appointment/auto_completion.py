# salon_scheduler/services/appointment/auto_completion.py
import logging
from datetime import datetime
from typing import Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salon_scheduler.domain.pricing import commission_for
from salon_scheduler.models import BLOCKING_STATUSES
from salon_scheduler.repositories import AppointmentRepository

logger = logging.getLogger(__name__)


class AutoCompletionJob:
    """
    Marks past appointments COMPLETED.

    Runs outside the state machine: SCHEDULED -> COMPLETED is not a legal
    user transition but is how the system closes out bookings nobody
    touched. Each row is completed in its own transaction with a
    conditional update, so a concurrent user cancel wins and the job simply
    skips that row. Re-running with the same cutoff completes nothing new.
    """

    def __init__(self, db: Session):
        self.db = db

    def run(self, as_of: datetime) -> Dict[str, int]:
        due = [
            (appt.id, appt.status, appt.source, appt.final_price, appt.commission_value)
            for appt in AppointmentRepository.find_ended_before(self.db, BLOCKING_STATUSES, as_of)
        ]
        # Snapshot taken; release the read transaction before per-row writes
        self.db.rollback()

        summary = {"completed": 0, "skipped": 0, "failed": 0}
        if not due:
            logger.debug(f"No appointments to auto-complete before {as_of.isoformat()}")
            return summary

        for appointment_id, status, source, final_price, commission_value in due:
            commission = None
            if commission_value is None:
                commission = commission_for(source, final_price)

            try:
                updated = AppointmentRepository.complete_if_status(
                    self.db, appointment_id, status, commission_value=commission
                )
                self.db.commit()
            except SQLAlchemyError as exc:
                self.db.rollback()
                summary["failed"] += 1
                logger.error(f"Auto-complete failed for appointment {appointment_id}: {exc}")
                continue

            if updated:
                summary["completed"] += 1
                logger.info(f"System transition for appointment {appointment_id}: {status.value} -> COMPLETED")
            else:
                summary["skipped"] += 1
                logger.info(f"Appointment {appointment_id} changed concurrently, auto-complete skipped")

        logger.info(
            f"Auto-completion before {as_of.isoformat()}: "
            f"{summary['completed']} completed, {summary['skipped']} skipped, {summary['failed']} failed"
        )
        return summary
