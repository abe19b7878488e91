"""
Appointment status state machine.

SCHEDULED is the only initial state. COMPLETED, CANCELLED and NO_SHOW are
terminal. Transitions are directed; anything not listed is illegal,
self-transitions included.
"""

from typing import Dict, FrozenSet

from salon_scheduler.core.exceptions import InvalidTransitionError
from salon_scheduler.models.appointment import AppointmentStatus

ALLOWED_TRANSITIONS: Dict[AppointmentStatus, FrozenSet[AppointmentStatus]] = {
    AppointmentStatus.SCHEDULED: frozenset({
        AppointmentStatus.CONFIRMED,
        AppointmentStatus.CANCELLED,
        AppointmentStatus.NO_SHOW,
        AppointmentStatus.IN_PROGRESS,
    }),
    AppointmentStatus.CONFIRMED: frozenset({
        AppointmentStatus.IN_PROGRESS,
        AppointmentStatus.CANCELLED,
        AppointmentStatus.NO_SHOW,
    }),
    AppointmentStatus.IN_PROGRESS: frozenset({
        AppointmentStatus.COMPLETED,
        AppointmentStatus.CANCELLED,
    }),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
    AppointmentStatus.NO_SHOW: frozenset(),
}

INITIAL_STATUS = AppointmentStatus.SCHEDULED


def is_transition_allowed(current: AppointmentStatus, requested: AppointmentStatus) -> bool:
    return requested in ALLOWED_TRANSITIONS.get(current, frozenset())


def validate_transition(current: AppointmentStatus, requested: AppointmentStatus) -> None:
    """Raise InvalidTransitionError unless ``current -> requested`` is legal."""
    if not is_transition_allowed(current, requested):
        raise InvalidTransitionError(current, requested)


def is_terminal(status: AppointmentStatus) -> bool:
    return not ALLOWED_TRANSITIONS.get(status)
