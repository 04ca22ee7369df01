"""Availability calculation for a courtroom on a given day.

Enumerates the court's slot grid and removes every slot whose window
overlaps a committed hearing. Reads only committed state and takes no lock,
so a slot reported free may be taken before the caller books it; the
booking path reports that as a conflict.
"""

from dataclasses import dataclass, field
from datetime import date, time
from typing import List

from docket.core.court import Court
from docket.core.hearing import Hearing
from docket.store.court_directory import CourtDirectory
from docket.store.hearing_store import HearingStore


@dataclass
class DayAvailability:
    """Free and booked slots for one court on one date.

    Attributes:
        court: Court the availability was computed for
        hearing_date: Day computed
        available: Free slot start times, ascending
        booked: Hearings committed that day, ordered by start time
        total_slots: Size of the full slot grid
    """
    court: Court
    hearing_date: date
    available: List[time] = field(default_factory=list)
    booked: List[Hearing] = field(default_factory=list)
    total_slots: int = 0

    @property
    def available_count(self) -> int:
        return len(self.available)

    @property
    def booked_count(self) -> int:
        return len(self.booked)

    @property
    def is_fully_booked(self) -> bool:
        return not self.available

    def to_dict(self) -> dict:
        """Convert to the response shape served by the slot endpoint."""
        return {
            "court": {
                "id": self.court.court_id,
                "name": self.court.name,
                "location": self.court.location,
            },
            "date": self.hearing_date.isoformat(),
            "available_slots": [t.strftime("%H:%M") for t in self.available],
            "booked_slots": [
                {
                    "time": h.start_time.strftime("%H:%M"),
                    "end_time": h.window.end.strftime("%H:%M"),
                    "hearing_id": h.hearing_id,
                    "case_id": h.case_id,
                    "judge_id": h.judge_id,
                }
                for h in self.booked
            ],
            "total_slots": self.total_slots,
            "available_count": self.available_count,
            "booked_count": self.booked_count,
        }


class AvailabilityCalculator:
    """Derives free slots from the court directory and the hearing store."""

    def __init__(self, courts: CourtDirectory, hearings: HearingStore):
        self.courts = courts
        self.hearings = hearings

    def get_available_slots(self, court_id: str, hearing_date: date) -> List[time]:
        """Get the free slot start times for a court on a date.

        Args:
            court_id: Court to query
            hearing_date: Day to query

        Returns:
            Free slot start times in ascending order (empty when fully booked)

        Raises:
            NotFoundError: If the court is unknown
        """
        return self.describe_day(court_id, hearing_date).available

    def describe_day(self, court_id: str, hearing_date: date) -> DayAvailability:
        """Get free slots together with the hearings occupying the rest."""
        court = self.courts.get_court(court_id)
        booked = self.hearings.hearings_on(court_id, hearing_date)
        grid = court.slot_grid()
        policy = self.hearings.policy

        available = [
            slot for slot in grid
            if not any(court.window_at(slot).overlaps(h.window, policy) for h in booked)
        ]

        return DayAvailability(
            court=court,
            hearing_date=hearing_date,
            available=available,
            booked=list(booked),
            total_slots=len(grid),
        )
