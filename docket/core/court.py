"""Courtroom resource definition.

This module defines the Court class which represents a physical courtroom
with its operating window and the slot grid hearings are booked against.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from enum import Enum
from typing import List

from docket.core.errors import ValidationError
from docket.core.window import TimeWindow, add_minutes, minutes_of
from docket.data.config import (
    DEFAULT_CAPACITY,
    DEFAULT_CLOSES_AT,
    DEFAULT_OPENS_AT,
    DEFAULT_SLOT_MINUTES,
)


class CourtType(Enum):
    """Tier of the court."""
    DISTRICT = "District"
    HIGH = "High"
    SUPREME = "Supreme"


@dataclass(frozen=True)
class Court:
    """Represents a courtroom resource.

    Attributes:
        court_id: Unique identifier
        name: Display name (e.g., 'Courtroom 3')
        location: Building or address
        court_type: Tier of the court
        capacity: Seating capacity (informational)
        opens_at: First moment a hearing may start
        closes_at: Moment every hearing must have finished by
        slot_minutes: Duration of one bookable slot
    """
    court_id: str
    name: str = ""
    location: str = ""
    court_type: CourtType = CourtType.DISTRICT
    capacity: int = DEFAULT_CAPACITY
    opens_at: time = DEFAULT_OPENS_AT
    closes_at: time = DEFAULT_CLOSES_AT
    slot_minutes: int = DEFAULT_SLOT_MINUTES

    def __post_init__(self) -> None:
        if not self.court_id:
            raise ValidationError("Court id is required")
        if self.slot_minutes <= 0:
            raise ValidationError(
                f"Slot duration must be positive, got {self.slot_minutes} for court {self.court_id}"
            )
        if self.capacity < 0:
            raise ValidationError(f"Capacity cannot be negative for court {self.court_id}")
        if self.opens_at.tzinfo is not None or self.closes_at.tzinfo is not None:
            raise ValidationError(f"Operating hours of court {self.court_id} must be local times")
        if self.opens_at >= self.closes_at:
            raise ValidationError(
                f"Court {self.court_id} opens at {self.opens_at:%H:%M} "
                f"but closes at {self.closes_at:%H:%M}"
            )

    def slot_grid(self) -> List[time]:
        """Enumerate every slot start within the operating window.

        A slot is included only when its full duration fits before closing.

        Returns:
            Slot start times in ascending order
        """
        slots = []
        start = minutes_of(self.opens_at)
        close = minutes_of(self.closes_at)
        while start + self.slot_minutes <= close:
            slots.append(add_minutes(time(0, 0), start))
            start += self.slot_minutes
        return slots

    def fits_window(self, start: time) -> bool:
        """Check if a slot starting at ``start`` lies inside operating hours."""
        if start < self.opens_at:
            return False
        return minutes_of(start) + self.slot_minutes <= minutes_of(self.closes_at)

    def is_on_grid(self, start: time) -> bool:
        """Check if ``start`` is aligned to the slot grid."""
        if start.second or start.microsecond:
            return False
        offset = minutes_of(start) - minutes_of(self.opens_at)
        return offset >= 0 and offset % self.slot_minutes == 0

    def window_at(self, start: time) -> TimeWindow:
        """Get the booking window for a slot starting at ``start``."""
        return TimeWindow.starting_at(start, self.slot_minutes)

    def __repr__(self) -> str:
        return (f"Court(id={self.court_id}, name={self.name!r}, "
                f"hours={self.opens_at:%H:%M}-{self.closes_at:%H:%M}, slot={self.slot_minutes}m)")

    def to_dict(self) -> dict:
        """Convert court to dictionary for serialization."""
        return {
            "court_id": self.court_id,
            "name": self.name,
            "location": self.location,
            "court_type": self.court_type.value,
            "capacity": self.capacity,
            "opens_at": self.opens_at.strftime("%H:%M"),
            "closes_at": self.closes_at.strftime("%H:%M"),
            "slot_minutes": self.slot_minutes,
            "total_slots": len(self.slot_grid()),
        }
