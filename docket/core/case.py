"""Case entity and lifecycle states.

Only the parts of a case the scheduler consumes live here: identity, status
and the assigned judge. Filing, documents and parties belong to the case
store outside this package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from docket.core.errors import CaseClosedError, ValidationError


class CaseStatus(Enum):
    """Status of a case in the system."""

    OPEN = "Open"  # Filed, no judge assigned yet
    IN_PROGRESS = "In Progress"  # Judge assigned
    CLOSED = "Closed"  # Terminal

    @property
    def is_terminal(self) -> bool:
        return self is CaseStatus.CLOSED

    @classmethod
    def parse(cls, value: str) -> "CaseStatus":
        """Parse a status by value or name ('In Progress', 'IN_PROGRESS', 'InProgress')."""
        normalized = value.strip().replace(" ", "").replace("_", "").lower()
        for status in cls:
            if status.name.replace("_", "").lower() == normalized:
                return status
        raise ValidationError(
            f"Invalid status value: {value!r}",
            detail=f"Expected one of: {', '.join(s.value for s in cls)}",
        )


@dataclass
class Case:
    """Represents a court case as seen by the scheduler.

    Attributes:
        case_id: Unique identifier
        title: Case title used in notifications
        status: Current lifecycle status
        judge_id: Assigned judge, None until assignment
        history: Status transitions as dicts with 'at', 'from', 'to'
    """

    case_id: str
    title: str = ""
    status: CaseStatus = CaseStatus.OPEN
    judge_id: Optional[str] = None
    history: List[dict] = field(default_factory=list)

    @property
    def is_closed(self) -> bool:
        return self.status.is_terminal

    def assign_judge(self, judge_id: str, at: Optional[datetime] = None) -> None:
        """Assign a judge; an open case moves to In Progress.

        Args:
            judge_id: Judge identifier
            at: Timestamp of the assignment (defaults to now)

        Raises:
            CaseClosedError: If the case is closed
        """
        if self.is_closed:
            raise CaseClosedError(self.case_id, action="assign a judge")
        self.judge_id = judge_id
        if self.status is CaseStatus.OPEN:
            self._transition(CaseStatus.IN_PROGRESS, at)

    def change_status(self, new_status: CaseStatus, at: Optional[datetime] = None) -> None:
        """Move the case to ``new_status``.

        Closed is terminal: no transition leaves it, including Closed -> Closed.

        Raises:
            CaseClosedError: If the case is already closed
        """
        if self.is_closed:
            raise CaseClosedError(self.case_id, action="change status")
        if new_status is not self.status:
            self._transition(new_status, at)

    def _transition(self, new_status: CaseStatus, at: Optional[datetime]) -> None:
        self.history.append({
            "at": at or datetime.now(),
            "from": self.status.value,
            "to": new_status.value,
        })
        self.status = new_status

    def __repr__(self) -> str:
        return f"Case(id={self.case_id}, status={self.status.value}, judge={self.judge_id})"

    def to_dict(self) -> dict:
        """Convert case to dictionary for serialization."""
        return {
            "case_id": self.case_id,
            "title": self.title,
            "status": self.status.value,
            "judge_id": self.judge_id,
        }
