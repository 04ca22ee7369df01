"""Case state gate.

The single authorization check every hearing mutation and judge assignment
goes through: a case in the terminal Closed state accepts no further changes.
"""

import functools
from typing import Callable, TypeVar

from docket.core.errors import CaseClosedError
from docket.store.case_store import CaseStore

F = TypeVar("F", bound=Callable)


class CaseStateGate:
    """Read-only predicate over case status."""

    def __init__(self, cases: CaseStore):
        self.cases = cases

    def can_mutate_hearings(self, case_id: str) -> bool:
        """Check if hearings of a case may be created, edited or deleted.

        Raises:
            NotFoundError: If the case is unknown
        """
        return not self.cases.get_case_status(case_id).is_terminal

    def require_mutable(self, case_id: str, action: str = "modify hearings") -> None:
        """Fail unless the case is open or in progress.

        Args:
            case_id: Case to check
            action: Description of the attempted change, used in the error

        Raises:
            CaseClosedError: If the case is closed
            NotFoundError: If the case is unknown
        """
        if not self.can_mutate_hearings(case_id):
            raise CaseClosedError(case_id, action=action)


def requires_mutable_case(action: str) -> Callable[[F], F]:
    """Decorate a method taking ``case_id`` first so it is gated.

    The decorated object must expose the gate as ``self.gate``.
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(self, case_id: str, *args, **kwargs):
            self.gate.require_mutable(case_id, action=action)
            return func(self, case_id, *args, **kwargs)
        return wrapper  # type: ignore[return-value]
    return decorator
