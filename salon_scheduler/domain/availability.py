"""
Availability rules: working windows, whole-day blocks and slot generation.

Everything here works on plain values so the same rules serve both slot
enumeration and the single-candidate check done at booking time.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Optional, Sequence
from zoneinfo import ZoneInfo

from salon_scheduler.domain.time_slot import TimeSlot

# Candidate starts are laid on a fixed grid, independent of the variant duration
SLOT_STEP = timedelta(minutes=15)

# Slots starting sooner than this are never offered
BOOKING_LEAD_TIME = timedelta(hours=1)


@dataclass(frozen=True)
class AvailableSlot:
    start: datetime
    end: datetime
    duration_minutes: int


def working_window(
        day: date,
        start_time: time,
        end_time: time,
        tz: ZoneInfo,
) -> Optional[TimeSlot]:
    """Return the UTC working window for ``day`` in the salon's wall clock."""
    if end_time <= start_time:
        return None
    start = datetime.combine(day, start_time, tzinfo=tz).astimezone(timezone.utc)
    end = datetime.combine(day, end_time, tzinfo=tz).astimezone(timezone.utc)
    if end <= start:
        # Wall-clock window collapsed by a DST jump
        return None
    return TimeSlot(start, end)


def blocks_whole_window(window: TimeSlot, blocked: Iterable[TimeSlot]) -> bool:
    return any(block.contains(window) for block in blocked)


def generate_slots(
        window: TimeSlot,
        duration_minutes: int,
        busy: Sequence[TimeSlot],
        blocked: Sequence[TimeSlot],
        now: datetime,
        tz: ZoneInfo,
) -> List[AvailableSlot]:
    """
    Walk the 15-minute grid across ``window`` and keep every candidate that
    starts after the lead time and touches neither a booking nor a block.

    A trailing remainder shorter than the duration yields no slot.
    """
    if duration_minutes <= 0:
        raise ValueError("duration_minutes must be positive")

    duration = timedelta(minutes=duration_minutes)
    earliest_start = now + BOOKING_LEAD_TIME
    slots = []

    current = window.start
    while current + duration <= window.end:
        candidate = TimeSlot(current, current + duration)

        is_in_future = candidate.start > earliest_start
        no_booking = not any(candidate.overlaps(b) for b in busy)
        no_block = not any(candidate.overlaps(b) for b in blocked)

        if is_in_future and no_booking and no_block:
            slots.append(AvailableSlot(
                start=candidate.start.astimezone(tz),
                end=candidate.end.astimezone(tz),
                duration_minutes=duration_minutes,
            ))

        current += SLOT_STEP

    return slots


def candidate_rejection_reason(
        window: Optional[TimeSlot],
        candidate: TimeSlot,
        blocked: Sequence[TimeSlot],
) -> Optional[str]:
    """Why ``candidate`` cannot be booked against the schedule, or None if it can."""
    if window is None:
        return "not a working day"
    if not window.contains(candidate):
        return "outside working hours"
    if any(candidate.overlaps(b) for b in blocked):
        return "blocked by a schedule exception"
    return None


def local_day_bounds(day: date, tz: ZoneInfo) -> TimeSlot:
    """UTC span from local midnight of ``day`` to local midnight of the next day."""
    start = datetime.combine(day, time.min, tzinfo=tz).astimezone(timezone.utc)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz).astimezone(timezone.utc)
    return TimeSlot(start, end)
