"""Double-booking detection against existing appointments"""
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from salon_scheduler.core.exceptions import SlotConflictError
from salon_scheduler.domain.time_slot import TimeSlot
from salon_scheduler.models import Appointment, AppointmentStatus, BLOCKING_STATUSES
from salon_scheduler.repositories import AppointmentRepository


class ConflictDetector:
    """Finds appointments that would collide with a candidate interval"""

    def __init__(self, db: Session):
        self.db = db

    def find_conflicts(
            self,
            employee_id: UUID,
            candidate: TimeSlot,
            blocking_statuses: Iterable[AppointmentStatus] = BLOCKING_STATUSES,
            exclude_appointment_id: Optional[UUID] = None
    ) -> List[Appointment]:
        statuses = frozenset(blocking_statuses)
        rows = AppointmentRepository.find_overlapping(
            self.db,
            employee_id,
            candidate.start,
            candidate.end,
            statuses,
            exclude_id=exclude_appointment_id,
        )
        # The query narrows; the half-open predicate decides
        return [
            appt for appt in rows
            if appt.id != exclude_appointment_id
            and appt.status in statuses
            and TimeSlot(appt.start_at, appt.end_at).overlaps(candidate)
        ]

    def ensure_no_conflict(
            self,
            employee_id: UUID,
            candidate: TimeSlot,
            blocking_statuses: Iterable[AppointmentStatus] = BLOCKING_STATUSES,
            exclude_appointment_id: Optional[UUID] = None
    ) -> None:
        conflicts = self.find_conflicts(employee_id, candidate, blocking_statuses, exclude_appointment_id)
        if conflicts:
            raise SlotConflictError(employee_id, candidate.start, [appt.id for appt in conflicts])
