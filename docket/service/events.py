"""Hearing event schema and sinks for the notification dispatcher.

Each successful mutation emits one HearingEvent with a 'type' field:
- scheduled: a new hearing was booked
- updated: an existing hearing was moved or its notes changed
- deleted: a hearing was cancelled and its slot freed
"""
from __future__ import annotations

import csv
import threading
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from docket.core.hearing import Hearing
from docket.data.config import EVENT_TYPES

EventListener = Callable[["HearingEvent"], None]


@dataclass(frozen=True)
class HearingEvent:
    type: str
    hearing: Hearing
    previous: Optional[Hearing] = None
    occurred_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        if self.type not in EVENT_TYPES:
            raise ValueError(f"Unknown event type: {self.type}")

    def to_row(self) -> List[str]:
        h = self.hearing
        prev = self.previous
        return [
            self.occurred_at.isoformat(timespec="seconds"),
            self.type,
            h.hearing_id,
            h.case_id,
            h.court_id,
            h.hearing_date.isoformat(),
            h.start_time.strftime("%H:%M"),
            f"{prev.court_id} {prev.hearing_date.isoformat()} {prev.start_time:%H:%M}" if prev else "",
            h.notes or "",
        ]


class EventRecorder:
    """Keeps emitted events in memory (tests, CLI summaries)."""

    def __init__(self) -> None:
        self.events: List[HearingEvent] = []

    def __call__(self, event: HearingEvent) -> None:
        self.events.append(event)

    def of_type(self, type_: str) -> List[HearingEvent]:
        return [e for e in self.events if e.type == type_]


@dataclass
class CsvEventWriter:
    """Appends events to a CSV audit trail, flushing every ``flush_every`` rows."""
    path: Path
    flush_every: int = 1

    def __post_init__(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._buffer: List[List[str]] = []
        self._lock = threading.Lock()
        if not self.path.exists():
            with self.path.open("w", newline="", encoding="utf-8") as f:
                w = csv.writer(f)
                w.writerow([
                    "occurred_at", "type", "hearing_id", "case_id", "court_id",
                    "date", "time", "previous", "notes",
                ])

    def __call__(self, event: HearingEvent) -> None:
        with self._lock:
            self._buffer.append(event.to_row())
            if len(self._buffer) >= self.flush_every:
                self._flush_locked()

    def flush(self) -> None:
        with self._lock:
            self._flush_locked()

    def _flush_locked(self) -> None:
        if not self._buffer:
            return
        with self.path.open("a", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerows(self._buffer)
        self._buffer.clear()
