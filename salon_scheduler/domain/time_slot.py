"""Half-open time interval primitive used by every overlap check."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TimeSlot:
    """Immutable ``[start, end)`` interval."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise ValueError("Slot bounds must be timezone-aware")
        if self.end <= self.start:
            raise ValueError("Slot end must be after slot start")

    def overlaps(self, other: "TimeSlot") -> bool:
        """True when the intervals share any instant; touching endpoints do not overlap."""
        return self.start < other.end and other.start < self.end

    def contains(self, other: "TimeSlot") -> bool:
        return self.start <= other.start and other.end <= self.end

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)
