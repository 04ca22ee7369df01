"""Case administration entry points that touch hearing mutability.

Judge assignment and status changes live outside the scheduling core but
consult the same gate as the booking path. Closing a case takes the hearing
store's write lock so that no booking for the case can commit after it.
"""

from datetime import datetime
from typing import Optional

from docket.control.gate import CaseStateGate, requires_mutable_case
from docket.core.case import Case, CaseStatus
from docket.store.case_store import CaseStore
from docket.store.hearing_store import HearingStore
from docket.utils.logging import setup_logger

logger = setup_logger(__name__)


class CaseAdmin:
    """Gated case mutations: judge assignment and status change."""

    def __init__(self, cases: CaseStore, gate: CaseStateGate, hearings: HearingStore):
        self.cases = cases
        self.gate = gate
        self.hearings = hearings

    @requires_mutable_case("assign a judge")
    def assign_judge(self, case_id: str, judge_id: str, at: Optional[datetime] = None) -> Case:
        """Assign a judge to an open or in-progress case.

        Args:
            case_id: Case identifier
            judge_id: Judge identifier
            at: Timestamp of the assignment

        Returns:
            The updated case
        """
        case = self.cases.get_case(case_id)
        with self.cases.locked():
            case.assign_judge(judge_id, at)
        logger.info("judge assigned", extra={"case_id": case_id, "judge_id": judge_id})
        return case

    @requires_mutable_case("change status")
    def change_status(self, case_id: str, status: CaseStatus, at: Optional[datetime] = None) -> Case:
        """Change a case's status; Closed is terminal.

        Returns:
            The updated case
        """
        case = self.cases.get_case(case_id)
        with self.hearings.writer(), self.cases.locked():
            case.change_status(status, at)
        logger.info("case status changed", extra={"case_id": case_id, "status": status.value})
        return case
