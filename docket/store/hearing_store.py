"""Hearing store: authoritative record of booked hearings.

Writers are serialized by one lock and run their conflict check and commit
inside it, so two overlapping requests can never both be admitted. Each
(court, date) day is held as an immutable tuple that writers replace
copy-on-write; readers take no lock and always see a committed snapshot.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import date
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from docket.core.errors import ConflictError, NotFoundError
from docket.core.hearing import Hearing
from docket.core.window import OverlapPolicy
from docket.data.config import DEFAULT_OVERLAP_POLICY

DayKey = Tuple[str, date]
Precondition = Callable[[], None]


class HearingStore:
    """In-memory hearing store with atomic check-and-commit.

    Attributes:
        policy: Overlap rule applied to every conflict check
    """

    def __init__(self, policy: OverlapPolicy = DEFAULT_OVERLAP_POLICY):
        self.policy = policy
        self._days: Dict[DayKey, Tuple[Hearing, ...]] = {}
        self._by_id: Dict[str, Hearing] = {}
        self._lock = threading.RLock()

    # Reads (lock-free)

    def get(self, hearing_id: str) -> Hearing:
        """Look up a hearing.

        Raises:
            NotFoundError: If no such hearing exists
        """
        hearing = self._by_id.get(hearing_id)
        if hearing is None:
            raise NotFoundError("Hearing", hearing_id)
        return hearing

    def hearings_on(self, court_id: str, hearing_date: date) -> Tuple[Hearing, ...]:
        """Get the committed hearings for a court on a day, ordered by start time."""
        return self._days.get((court_id, hearing_date), ())

    def all_hearings(self) -> List[Hearing]:
        return sorted(
            list(self._by_id.values()),
            key=lambda h: (h.hearing_date, h.court_id, h.start_time),
        )

    def find_conflict(self, candidate: Hearing, exclude_id: Optional[str] = None) -> Optional[Hearing]:
        """Find a committed hearing whose window collides with ``candidate``.

        Args:
            candidate: Hearing to test
            exclude_id: Hearing to ignore (the one being edited)

        Returns:
            The first colliding hearing, or None
        """
        for existing in self.hearings_on(candidate.court_id, candidate.hearing_date):
            if existing.hearing_id == exclude_id:
                continue
            if existing.overlaps(candidate, self.policy):
                return existing
        return None

    def __len__(self) -> int:
        return len(self._by_id)

    # Writes (serialized)

    @contextmanager
    def writer(self) -> Iterator[None]:
        """Hold the write lock; used to order case closure against bookings."""
        with self._lock:
            yield

    def reserve(self, hearing: Hearing, precondition: Optional[Precondition] = None) -> Hearing:
        """Atomically check for conflicts and insert a new hearing.

        Args:
            hearing: Hearing to commit
            precondition: Callable run under the write lock before the
                conflict check; raising aborts the reservation

        Returns:
            The committed hearing

        Raises:
            ConflictError: If an overlapping hearing is already committed
        """
        with self._lock:
            if precondition is not None:
                precondition()
            conflict = self.find_conflict(hearing)
            if conflict is not None:
                raise ConflictError(conflict)
            self._insert(hearing)
            return hearing

    def replace(self, updated: Hearing) -> Hearing:
        """Atomically move an existing hearing to a new window.

        The hearing never conflicts with its own previous reservation. Callers
        that derive ``updated`` from the stored hearing hold ``writer()`` across
        the read and this call.

        Raises:
            NotFoundError: If the hearing is no longer stored
            ConflictError: If the new window collides with another hearing
        """
        with self._lock:
            current = self.get(updated.hearing_id)
            conflict = self.find_conflict(updated, exclude_id=updated.hearing_id)
            if conflict is not None:
                raise ConflictError(conflict)
            self._drop_from_day(current)
            self._add_to_day(updated)
            self._by_id[updated.hearing_id] = updated
            return updated

    def remove(self, hearing_id: str, precondition: Optional[Precondition] = None) -> Hearing:
        """Delete a hearing, freeing its window.

        Raises:
            NotFoundError: If the hearing does not exist
        """
        with self._lock:
            if precondition is not None:
                precondition()
            current = self.get(hearing_id)
            self._discard(current)
            return current

    def _insert(self, hearing: Hearing) -> None:
        self._add_to_day(hearing)
        self._by_id[hearing.hearing_id] = hearing

    def _discard(self, hearing: Hearing) -> None:
        self._drop_from_day(hearing)
        del self._by_id[hearing.hearing_id]

    def _add_to_day(self, hearing: Hearing) -> None:
        key = (hearing.court_id, hearing.hearing_date)
        day = self._days.get(key, ()) + (hearing,)
        self._days[key] = tuple(sorted(day, key=lambda h: h.start_time))

    def _drop_from_day(self, hearing: Hearing) -> None:
        key = (hearing.court_id, hearing.hearing_date)
        day = tuple(h for h in self._days.get(key, ()) if h.hearing_id != hearing.hearing_id)
        if day:
            self._days[key] = day
        else:
            self._days.pop(key, None)
