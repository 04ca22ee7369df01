"""Time windows and the overlap rule used for conflict detection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum


class OverlapPolicy(Enum):
    """How two windows that only touch at a boundary are treated."""

    STRICT = "strict"  # [09:00, 10:00) and [10:00, 11:00) do not conflict
    INCLUSIVE = "inclusive"  # touching boundaries conflict


@dataclass(frozen=True)
class TimeWindow:
    """Half-open interval [start, end) within a single day.

    Attributes:
        start: Time of day the window opens
        end: Time of day the window closes (exclusive)
    """

    start: time
    end: time

    @classmethod
    def starting_at(cls, start: time, minutes: int) -> "TimeWindow":
        """Build a window of ``minutes`` length beginning at ``start``.

        Windows never wrap past midnight; the end is clamped to 23:59:59.
        """
        anchor = datetime.combine(date.min, start)
        end_dt = anchor + timedelta(minutes=minutes)
        if end_dt.date() != date.min:
            return cls(start, time.max)
        return cls(start, end_dt.time())

    @property
    def minutes(self) -> int:
        return minutes_of(self.end) - minutes_of(self.start)

    def overlaps(self, other: "TimeWindow", policy: OverlapPolicy = OverlapPolicy.STRICT) -> bool:
        """Check whether two windows collide under the given policy.

        Args:
            other: Window to compare against
            policy: Boundary rule for back-to-back windows

        Returns:
            True if the windows conflict
        """
        if policy is OverlapPolicy.INCLUSIVE:
            return self.start <= other.end and other.start <= self.end
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"{self.start:%H:%M}-{self.end:%H:%M}"


def minutes_of(t: time) -> int:
    """Minutes elapsed since midnight (seconds are ignored)."""
    return t.hour * 60 + t.minute


def add_minutes(t: time, minutes: int) -> time:
    """Shift a time of day forward. Caller guarantees no midnight wrap."""
    return (datetime.combine(date.min, t) + timedelta(minutes=minutes)).time()
