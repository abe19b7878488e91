"""Validation of weekly schedules and schedule exceptions."""

from datetime import datetime, time, timedelta
from typing import Iterable

from salon_scheduler.core.exceptions import InvalidScheduleError, ScheduleExceptionOverlapError
from salon_scheduler.domain.time_slot import TimeSlot

MIN_SHIFT = timedelta(minutes=30)
MAX_SHIFT = timedelta(hours=12)
MIN_EXCEPTION = timedelta(hours=1)


def _minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def validate_working_day(start_time: time, end_time: time) -> None:
    if end_time <= start_time:
        raise InvalidScheduleError("End time must be after start time")

    shift = timedelta(minutes=_minutes(end_time) - _minutes(start_time))
    if shift < MIN_SHIFT:
        raise InvalidScheduleError("Minimum shift duration is 30 minutes")
    if shift > MAX_SHIFT:
        raise InvalidScheduleError("Maximum shift duration is 12 hours (720 minutes)")


def validate_schedule_exception(
        employee_id,
        start_at: datetime,
        end_at: datetime,
        now: datetime,
        existing: Iterable[TimeSlot],
) -> None:
    if end_at <= start_at:
        raise InvalidScheduleError("End time must be after start time")
    if end_at - start_at < MIN_EXCEPTION:
        raise InvalidScheduleError("Minimum exception duration is 1 hour")
    if start_at < now:
        raise InvalidScheduleError("Schedule exception cannot start in the past")

    candidate = TimeSlot(start_at, end_at)
    if any(candidate.overlaps(other) for other in existing):
        raise ScheduleExceptionOverlapError(employee_id, start_at, end_at)
