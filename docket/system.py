"""Wiring of the scheduling components for one process."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from docket.control.case_admin import CaseAdmin
from docket.control.gate import CaseStateGate
from docket.core.case import Case
from docket.core.court import Court
from docket.core.window import OverlapPolicy
from docket.data.config import DEFAULT_OVERLAP_POLICY
from docket.service.availability import AvailabilityCalculator
from docket.service.booking import BookingService
from docket.service.events import EventListener
from docket.store.case_store import CaseStore
from docket.store.court_directory import CourtDirectory
from docket.store.hearing_store import HearingStore


@dataclass
class Docket:
    """All scheduling components sharing one set of stores."""
    courts: CourtDirectory
    cases: CaseStore
    gate: CaseStateGate
    hearings: HearingStore
    availability: AvailabilityCalculator
    booking: BookingService
    case_admin: CaseAdmin

    @classmethod
    def create(
        cls,
        courts: Iterable[Court] = (),
        cases: Iterable[Case] = (),
        policy: OverlapPolicy = DEFAULT_OVERLAP_POLICY,
        listeners: Optional[List[EventListener]] = None,
    ) -> "Docket":
        """Build a docket over fresh in-memory stores.

        Args:
            courts: Courts to register in the directory
            cases: Cases to register in the case store
            policy: Overlap rule for conflict detection
            listeners: Hearing event listeners

        Returns:
            Wired Docket
        """
        directory = CourtDirectory(courts)
        case_store = CaseStore(cases)
        hearing_store = HearingStore(policy=policy)
        gate = CaseStateGate(case_store)
        return cls(
            courts=directory,
            cases=case_store,
            gate=gate,
            hearings=hearing_store,
            availability=AvailabilityCalculator(directory, hearing_store),
            booking=BookingService(directory, case_store, gate, hearing_store, listeners),
            case_admin=CaseAdmin(case_store, gate, hearing_store),
        )
