"""Case store: the scheduler's view of case status and judge assignment."""

import threading
from typing import Dict, Iterable, List, Optional

from docket.core.case import Case, CaseStatus
from docket.core.errors import NotFoundError, ValidationError


class CaseStore:
    """Thread-safe in-memory registry of cases."""

    def __init__(self, cases: Optional[Iterable[Case]] = None):
        self._cases: Dict[str, Case] = {}
        self._lock = threading.Lock()
        for case in cases or ():
            self.add_case(case)

    def add_case(self, case: Case) -> None:
        """Register a case.

        Raises:
            ValidationError: If the case id is already taken
        """
        with self._lock:
            if case.case_id in self._cases:
                raise ValidationError(f"Duplicate case id: {case.case_id}")
            self._cases[case.case_id] = case

    def get_case(self, case_id: str) -> Case:
        """Look up a case.

        Raises:
            NotFoundError: If no such case exists
        """
        case = self._cases.get(case_id)
        if case is None:
            raise NotFoundError("Case", case_id)
        return case

    def get_case_status(self, case_id: str) -> CaseStatus:
        return self.get_case(case_id).status

    def list_cases(self) -> List[Case]:
        return [self._cases[k] for k in sorted(self._cases)]

    def locked(self) -> threading.Lock:
        """Lock guarding case mutations (status changes, assignment)."""
        return self._lock
