"""Court directory: read-only lookup of courtrooms for the scheduler."""

from typing import Dict, Iterable, List, Optional

from docket.core.court import Court
from docket.core.errors import NotFoundError, ValidationError


class CourtDirectory:
    """Registry of courts keyed by court_id.

    Courts are registered once at start-up (from configuration) and never
    mutated by the scheduling core afterwards.
    """

    def __init__(self, courts: Optional[Iterable[Court]] = None):
        self._courts: Dict[str, Court] = {}
        for court in courts or ():
            self.add_court(court)

    def add_court(self, court: Court) -> None:
        """Register a court.

        Raises:
            ValidationError: If a court with the same id is already registered
        """
        if court.court_id in self._courts:
            raise ValidationError(f"Duplicate court id: {court.court_id}")
        self._courts[court.court_id] = court

    def get_court(self, court_id: str) -> Court:
        """Look up a court.

        Raises:
            NotFoundError: If no such court exists
        """
        court = self._courts.get(court_id)
        if court is None:
            raise NotFoundError("Court", court_id)
        return court

    def list_courts(self) -> List[Court]:
        return [self._courts[k] for k in sorted(self._courts)]

    def __contains__(self, court_id: str) -> bool:
        return court_id in self._courts

    def __len__(self) -> int:
        return len(self._courts)
