"""Configuration models and loaders for CLI commands."""

from __future__ import annotations

import datetime as dt
import json
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from docket.core.case import Case, CaseStatus
from docket.core.court import Court, CourtType
from docket.core.window import OverlapPolicy
from docket.data.config import (
    DEFAULT_CAPACITY,
    DEFAULT_CLOSES_AT,
    DEFAULT_HOST,
    DEFAULT_OPENS_AT,
    DEFAULT_PORT,
    DEFAULT_SLOT_MINUTES,
)
from docket.service.events import CsvEventWriter
from docket.system import Docket

# Configuration Models

def _local_time(value: dt.time) -> dt.time:
    if value.tzinfo is not None:
        raise ValueError(f"{value.isoformat()} must be a local time without a UTC offset")
    return value


class CourtConfig(BaseModel):
    """A courtroom and its operating parameters."""
    court_id: str = Field(..., min_length=1)
    name: str = ""
    location: str = ""
    court_type: str = Field("District", pattern=r"^(District|High|Supreme)$")
    capacity: int = Field(DEFAULT_CAPACITY, ge=0)
    opens_at: dt.time = DEFAULT_OPENS_AT
    closes_at: dt.time = DEFAULT_CLOSES_AT
    slot_minutes: int = Field(DEFAULT_SLOT_MINUTES, ge=1)

    @field_validator("opens_at", "closes_at")
    @classmethod
    def _local_hours(cls, value: dt.time) -> dt.time:
        return _local_time(value)

    @model_validator(mode="after")
    def _check_window(self):
        if self.opens_at >= self.closes_at:
            raise ValueError(f"court {self.court_id}: opens_at must be before closes_at")
        return self

    def to_court(self) -> Court:
        return Court(
            court_id=self.court_id,
            name=self.name or self.court_id,
            location=self.location,
            court_type=CourtType(self.court_type),
            capacity=self.capacity,
            opens_at=self.opens_at,
            closes_at=self.closes_at,
            slot_minutes=self.slot_minutes,
        )


class CaseConfig(BaseModel):
    """A case known to the scheduler."""
    case_id: str = Field(..., min_length=1)
    title: str = ""
    status: str = Field("Open", pattern=r"^(Open|In Progress|InProgress|Closed)$")
    judge_id: Optional[str] = None


class HearingConfig(BaseModel):
    """A hearing booked at start-up."""
    case_id: str
    court_id: str
    date: dt.date
    time: dt.time
    notes: Optional[str] = None

    @field_validator("time")
    @classmethod
    def _local_start(cls, value: dt.time) -> dt.time:
        return _local_time(value)


class ServerConfig(BaseModel):
    """Configuration for the HTTP server."""
    host: str = DEFAULT_HOST
    port: int = Field(DEFAULT_PORT, ge=1, le=65535)


class DocketConfig(BaseModel):
    """Configuration for a scheduler instance."""
    overlap_policy: str = Field("strict", pattern=r"^(strict|inclusive)$")
    events_csv: Optional[Path] = None
    server: ServerConfig = Field(default_factory=ServerConfig)
    courts: List[CourtConfig] = Field(default_factory=list)
    cases: List[CaseConfig] = Field(default_factory=list)
    hearings: List[HearingConfig] = Field(default_factory=list)


# Configuration Loaders

def _read_config(path: Path) -> Dict[str, Any]:
    """Read configuration from .toml or .json file."""
    suf = path.suffix.lower()
    if suf == ".json":
        return json.loads(path.read_text(encoding="utf-8"))
    if suf == ".toml":
        return tomllib.loads(path.read_text(encoding="utf-8"))
    raise ValueError(f"Unsupported config format: {path.suffix}. Use .toml or .json")


def load_docket_config(path: Path) -> DocketConfig:
    data = _read_config(path)
    return DocketConfig(**data)


def build_docket(cfg: DocketConfig) -> Docket:
    """Wire a docket from configuration and book the seeded hearings.

    Seeded hearings go through the booking service, so they are held to the
    same rules as live requests. Cases configured as Closed are closed only
    after their hearings are booked: those hearings predate the closure.

    Raises:
        SchedulingError: If a seeded hearing is rejected
    """
    listeners = []
    if cfg.events_csv:
        listeners.append(CsvEventWriter(cfg.events_csv))

    cases = []
    closed = []
    for c in cfg.cases:
        status = CaseStatus.parse(c.status)
        if status is CaseStatus.CLOSED:
            closed.append(c.case_id)
            status = CaseStatus.IN_PROGRESS if c.judge_id else CaseStatus.OPEN
        cases.append(Case(case_id=c.case_id, title=c.title, status=status, judge_id=c.judge_id))

    docket = Docket.create(
        courts=[c.to_court() for c in cfg.courts],
        cases=cases,
        policy=OverlapPolicy(cfg.overlap_policy),
        listeners=listeners,
    )
    for h in cfg.hearings:
        docket.booking.schedule_hearing(h.case_id, h.court_id, h.date, h.time, notes=h.notes)
    for case_id in closed:
        docket.case_admin.change_status(case_id, CaseStatus.CLOSED)
    return docket
