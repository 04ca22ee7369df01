"""Hearing entity.

This module defines the Hearing class which represents one booked court
session tying a case to a courtroom at a specific date and time.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import Optional

from docket.core.window import OverlapPolicy, TimeWindow


def new_hearing_id() -> str:
    return f"HRG-{uuid.uuid4().hex[:12].upper()}"


@dataclass(frozen=True)
class Hearing:
    """Represents a scheduled court hearing.

    Hearings are immutable values; an edit produces a new Hearing carrying the
    same hearing_id.

    Attributes:
        hearing_id: Unique identifier
        case_id: Owning case
        court_id: Courtroom the hearing is booked in
        hearing_date: Calendar day of the hearing
        start_time: Time of day the hearing starts
        duration_minutes: Length of the booked window
        notes: Optional notes
        judge_id: Presiding judge, if known
        created_at: When the hearing was first booked
        updated_at: When the hearing was last edited
    """
    case_id: str
    court_id: str
    hearing_date: date
    start_time: time
    duration_minutes: int
    notes: Optional[str] = None
    judge_id: Optional[str] = None
    hearing_id: str = field(default_factory=new_hearing_id)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None

    @property
    def window(self) -> TimeWindow:
        return TimeWindow.starting_at(self.start_time, self.duration_minutes)

    def overlaps(self, other: "Hearing", policy: OverlapPolicy = OverlapPolicy.STRICT) -> bool:
        """Check if two hearings collide in the same court on the same day."""
        if self.court_id != other.court_id or self.hearing_date != other.hearing_date:
            return False
        return self.window.overlaps(other.window, policy)

    def moved(self, court_id: str, hearing_date: date, start_time: time,
              duration_minutes: int, notes: Optional[str]) -> "Hearing":
        """Get a copy of this hearing at a new court/date/time."""
        return replace(
            self,
            court_id=court_id,
            hearing_date=hearing_date,
            start_time=start_time,
            duration_minutes=duration_minutes,
            notes=notes,
            updated_at=datetime.now(),
        )

    def __repr__(self) -> str:
        return (f"Hearing(id={self.hearing_id}, case={self.case_id}, court={self.court_id}, "
                f"date={self.hearing_date}, window={self.window})")

    def to_dict(self) -> dict:
        """Convert hearing to dictionary for serialization."""
        window = self.window
        return {
            "hearing_id": self.hearing_id,
            "case_id": self.case_id,
            "court_id": self.court_id,
            "date": self.hearing_date.isoformat(),
            "time": self.start_time.strftime("%H:%M"),
            "end_time": window.end.strftime("%H:%M"),
            "duration_minutes": self.duration_minutes,
            "notes": self.notes,
            "judge_id": self.judge_id,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
