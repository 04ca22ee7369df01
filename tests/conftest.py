"""Pytest configuration and shared fixtures for hearing scheduler tests.

Provides common fixtures for:
- Courts with various operating windows
- Cases in each lifecycle status
- A wired docket with an event recorder
- Configuration files on disk
"""

from datetime import date, time

import pytest

from docket.core.case import Case, CaseStatus
from docket.core.court import Court
from docket.core.window import OverlapPolicy
from docket.service.events import EventRecorder
from docket.system import Docket

HEARING_DAY = date(2025, 3, 3)


# Test markers
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line(
        "markers", "integration: Integration tests for multi-component workflows"
    )
    config.addinivalue_line(
        "markers", "edge_case: Edge case and boundary condition tests"
    )
    config.addinivalue_line("markers", "failure: Failure scenario tests")
    config.addinivalue_line("markers", "concurrency: Tests racing multiple threads")


@pytest.fixture
def hearing_day() -> date:
    return HEARING_DAY


@pytest.fixture
def morning_court() -> Court:
    """Court C1: 09:00-12:00 with 60-minute slots (three slots)."""
    return Court(
        court_id="C1",
        name="Courtroom 1",
        location="Block A",
        opens_at=time(9, 0),
        closes_at=time(12, 0),
        slot_minutes=60,
    )


@pytest.fixture
def standard_court() -> Court:
    """Court C2 with the default 09:00-17:30 day in 30-minute slots."""
    return Court(court_id="C2", name="Courtroom 2", location="East Wing")


@pytest.fixture
def cases() -> list:
    """One case per status.

    Returns:
        Open case A, in-progress case B (judge J001), closed case Z
    """
    return [
        Case(case_id="CASE-A", title="Smith v. Jones"),
        Case(case_id="CASE-B", title="State v. Brown",
             status=CaseStatus.IN_PROGRESS, judge_id="J001"),
        Case(case_id="CASE-Z", title="Estate of Green", status=CaseStatus.CLOSED),
    ]


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def docket(morning_court, standard_court, cases, recorder) -> Docket:
    """Docket with courts C1/C2, cases A/B/Z and the strict overlap policy."""
    return Docket.create(
        courts=[morning_court, standard_court],
        cases=cases,
        listeners=[recorder],
    )


@pytest.fixture
def inclusive_docket(morning_court, standard_court, cases) -> Docket:
    """Same as ``docket`` but back-to-back hearings conflict."""
    return Docket.create(
        courts=[morning_court, standard_court],
        cases=cases,
        policy=OverlapPolicy.INCLUSIVE,
    )


@pytest.fixture
def config_file(tmp_path):
    """TOML configuration with two courts, three cases and two seeded hearings."""
    path = tmp_path / "docket.toml"
    path.write_text(
        """
overlap_policy = "strict"

[[courts]]
court_id = "C1"
name = "Courtroom 1"
opens_at = "09:00"
closes_at = "12:00"
slot_minutes = 60

[[courts]]
court_id = "C2"
name = "Courtroom 2"

[[cases]]
case_id = "CASE-001"
title = "Smith v. Jones"
status = "In Progress"
judge_id = "J001"

[[cases]]
case_id = "CASE-002"
status = "Open"

[[cases]]
case_id = "CASE-003"
status = "Closed"

[[hearings]]
case_id = "CASE-001"
court_id = "C1"
date = 2025-03-03
time = "10:00"

[[hearings]]
case_id = "CASE-003"
court_id = "C2"
date = 2025-03-03
time = 14:30:00
""",
        encoding="utf-8",
    )
    return path
