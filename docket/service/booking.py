"""Booking service: the write path for hearings.

Create, edit and delete all follow the same fail-fast order:

1. The owning case must be mutable (case state gate)
2. The court must exist
3. The requested time must fit the court's operating window and slot grid
4. Conflict check and commit happen atomically inside the hearing store

Failures are raised to the caller unchanged; nothing is retried and no
alternative slot is chosen on the caller's behalf.
"""

from __future__ import annotations

from datetime import date, time
from typing import List, Optional

from docket.control.gate import CaseStateGate
from docket.core.court import Court
from docket.core.errors import ConflictError, ValidationError
from docket.core.hearing import Hearing
from docket.data.config import EVENT_DELETED, EVENT_SCHEDULED, EVENT_UPDATED
from docket.service.events import EventListener, HearingEvent
from docket.store.case_store import CaseStore
from docket.store.court_directory import CourtDirectory
from docket.store.hearing_store import HearingStore
from docket.utils.logging import setup_logger

logger = setup_logger(__name__)


class BookingService:
    """Validates and commits hearing bookings.

    Attributes:
        courts: Court directory
        cases: Case store (for the judge on the owning case)
        gate: Case state gate consulted before every mutation
        hearings: Authoritative hearing store
        listeners: Callables receiving a HearingEvent after each commit
    """

    def __init__(
        self,
        courts: CourtDirectory,
        cases: CaseStore,
        gate: CaseStateGate,
        hearings: HearingStore,
        listeners: Optional[List[EventListener]] = None,
    ):
        self.courts = courts
        self.cases = cases
        self.gate = gate
        self.hearings = hearings
        self.listeners: List[EventListener] = list(listeners or [])

    def add_listener(self, listener: EventListener) -> None:
        self.listeners.append(listener)

    # Reads

    def get_hearing(self, hearing_id: str) -> Hearing:
        return self.hearings.get(hearing_id)

    def hearings_for_case(self, case_id: str) -> List[Hearing]:
        """Get all hearings of a case ordered by date and time."""
        self.cases.get_case(case_id)
        return [h for h in self.hearings.all_hearings() if h.case_id == case_id]

    def hearings_for_court(self, court_id: str, hearing_date: date) -> List[Hearing]:
        self.courts.get_court(court_id)
        return list(self.hearings.hearings_on(court_id, hearing_date))

    def hearings_for_judge(self, judge_id: str) -> List[Hearing]:
        """Get all hearings presided by a judge ordered by date and time.

        Judges are not registered, so an unknown judge simply has no hearings.
        """
        presided = [h for h in self.hearings.all_hearings() if h.judge_id == judge_id]
        return sorted(presided, key=lambda h: (h.hearing_date, h.start_time))

    # Writes

    def schedule_hearing(
        self,
        case_id: str,
        court_id: str,
        hearing_date: date,
        start_time: time,
        notes: Optional[str] = None,
        judge_id: Optional[str] = None,
    ) -> Hearing:
        """Book a new hearing.

        Args:
            case_id: Owning case
            court_id: Courtroom to book
            hearing_date: Day of the hearing
            start_time: Requested slot start
            notes: Optional notes
            judge_id: Presiding judge (defaults to the case's assigned judge)

        Returns:
            The committed hearing, including its generated id

        Raises:
            CaseClosedError: Case is closed
            NotFoundError: Unknown case or court
            ValidationError: Time outside operating hours or off the slot grid
            ConflictError: Window overlaps a committed hearing
        """
        self.gate.require_mutable(case_id, action="schedule hearings")
        court = self.courts.get_court(court_id)
        self._validate_slot(court, hearing_date, start_time)

        hearing = Hearing(
            case_id=case_id,
            court_id=court.court_id,
            hearing_date=hearing_date,
            start_time=start_time,
            duration_minutes=court.slot_minutes,
            notes=notes,
            judge_id=judge_id or self.cases.get_case(case_id).judge_id,
        )
        try:
            committed = self.hearings.reserve(
                hearing,
                precondition=lambda: self.gate.require_mutable(case_id, action="schedule hearings"),
            )
        except ConflictError as e:
            self._log_conflict(hearing, e)
            raise

        logger.info("hearing scheduled", extra=_log_fields(committed))
        self._emit(HearingEvent(EVENT_SCHEDULED, committed))
        return committed

    def update_hearing(
        self,
        hearing_id: str,
        court_id: Optional[str] = None,
        hearing_date: Optional[date] = None,
        start_time: Optional[time] = None,
        notes: Optional[str] = None,
    ) -> Hearing:
        """Move a hearing and/or change its notes.

        Fields left as None keep their current value. The hearing's own
        reservation never counts as a conflict, so re-submitting its current
        slot succeeds. Omitted fields are resolved under the store's write
        lock, so a concurrent edit of the same hearing is never reverted.

        Raises:
            NotFoundError: Unknown hearing or court
            CaseClosedError: Owning case is closed
            ValidationError: Time outside operating hours or off the slot grid
            ConflictError: New window overlaps a different hearing
        """
        with self.hearings.writer():
            current = self.hearings.get(hearing_id)
            self.gate.require_mutable(current.case_id, action="update hearings")

            court = self.courts.get_court(court_id if court_id is not None else current.court_id)
            new_date = hearing_date if hearing_date is not None else current.hearing_date
            new_time = start_time if start_time is not None else current.start_time
            self._validate_slot(court, new_date, new_time)

            updated = current.moved(
                court_id=court.court_id,
                hearing_date=new_date,
                start_time=new_time,
                duration_minutes=court.slot_minutes,
                notes=notes if notes is not None else current.notes,
            )
            try:
                committed = self.hearings.replace(updated)
            except ConflictError as e:
                self._log_conflict(updated, e)
                raise

        logger.info("hearing updated", extra=_log_fields(committed))
        self._emit(HearingEvent(EVENT_UPDATED, committed, previous=current))
        return committed

    def delete_hearing(self, hearing_id: str) -> None:
        """Cancel a hearing and free its window.

        Raises:
            NotFoundError: Unknown hearing
            CaseClosedError: Owning case is closed
        """
        current = self.hearings.get(hearing_id)
        case_id = current.case_id
        self.gate.require_mutable(case_id, action="delete hearings")

        removed = self.hearings.remove(
            hearing_id,
            precondition=lambda: self.gate.require_mutable(case_id, action="delete hearings"),
        )
        logger.info("hearing deleted", extra=_log_fields(removed))
        self._emit(HearingEvent(EVENT_DELETED, removed))

    def _validate_slot(self, court: Court, hearing_date: date, start_time: time) -> None:
        if hearing_date is None or start_time is None:
            raise ValidationError("Hearing date and time are required")
        if start_time.tzinfo is not None:
            raise ValidationError(
                f"Time {start_time.isoformat()} carries a UTC offset",
                detail=f"Give the start as a local time of court {court.court_id} (HH:MM).",
            )
        if not court.fits_window(start_time):
            raise ValidationError(
                f"Time {start_time:%H:%M} is outside operating hours of court {court.court_id}",
                detail=f"Hearings must start at or after {court.opens_at:%H:%M} and finish "
                f"by {court.closes_at:%H:%M} ({court.slot_minutes}-minute slots).",
            )
        if not court.is_on_grid(start_time):
            raise ValidationError(
                f"Time {start_time:%H:%M} is not aligned to the slot grid of court {court.court_id}",
                detail=f"Slots start every {court.slot_minutes} minutes from {court.opens_at:%H:%M}.",
            )

    def _log_conflict(self, requested: Hearing, error: ConflictError) -> None:
        fields = _log_fields(requested)
        fields["conflicting_hearing_id"] = error.conflicting.hearing_id
        logger.warning("hearing rejected: conflict", extra=fields)

    def _emit(self, event: HearingEvent) -> None:
        for listener in self.listeners:
            try:
                listener(event)
            except Exception:
                # Notification delivery never fails a committed booking
                logger.exception(
                    "hearing event listener failed",
                    extra={"event_type": event.type, "hearing_id": event.hearing.hearing_id},
                )


def _log_fields(hearing: Hearing) -> dict:
    return {
        "hearing_id": hearing.hearing_id,
        "case_id": hearing.case_id,
        "court_id": hearing.court_id,
        "hearing_date": hearing.hearing_date.isoformat(),
        "start_time": hearing.start_time.strftime("%H:%M"),
    }
