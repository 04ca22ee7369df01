"""Scheduling error taxonomy.

Every failure raised by the scheduling core derives from SchedulingError and
is scoped to a single request. Each class carries the HTTP status code and a
short label the API layer reports, so callers can self-correct without
parsing messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from docket.core.hearing import Hearing


class SchedulingError(Exception):
    """Base class for all scheduling failures."""

    status_code: int = 400
    error: str = "SchedulingError"

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a response payload."""
        return {
            "error": self.error,
            "message": self.message,
            "detail": self.detail,
        }


class NotFoundError(SchedulingError):
    """Unknown court, case or hearing id."""

    status_code = 404
    error = "NotFound"

    def __init__(self, kind: str, identifier: str):
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class ValidationError(SchedulingError):
    """Missing or out-of-range field, e.g. a time outside operating hours."""

    status_code = 400
    error = "ValidationError"


class CaseClosedError(SchedulingError):
    """Mutation attempted against a case in the terminal Closed state."""

    status_code = 400
    error = "CaseClosed"

    def __init__(self, case_id: str, action: str = "modify hearings"):
        super().__init__(
            f"Case {case_id} is closed",
            detail=f"Cannot {action} for closed case {case_id}. "
            "Only open or in-progress cases accept changes.",
        )
        self.case_id = case_id


class ConflictError(SchedulingError):
    """Requested window overlaps an already committed hearing.

    Attributes:
        conflicting: The committed hearing that holds the overlapping window
    """

    status_code = 409
    error = "Conflict"

    def __init__(self, conflicting: "Hearing"):
        window = conflicting.window
        super().__init__(
            "Scheduling conflict detected",
            detail=(
                f"Court {conflicting.court_id} is already booked "
                f"{window.start:%H:%M}-{window.end:%H:%M} on "
                f"{conflicting.hearing_date.isoformat()} for case "
                f"{conflicting.case_id}. Please choose a different time or courtroom."
            ),
        )
        self.conflicting = conflicting

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["conflicting_hearing"] = self.conflicting.to_dict()
        return payload
