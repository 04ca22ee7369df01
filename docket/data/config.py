"""Configuration constants for the hearing scheduler.

Defaults reproduce the standard court day used by the case-management
server: half-hour slots starting 09:00 with the last hearing at 17:00.
"""

from datetime import time

from docket.core.window import OverlapPolicy

DEFAULT_OPENS_AT = time(9, 0)
DEFAULT_CLOSES_AT = time(17, 30)
DEFAULT_SLOT_MINUTES = 30
DEFAULT_CAPACITY = 50

DEFAULT_OVERLAP_POLICY = OverlapPolicy.STRICT

# Event types emitted to the notification dispatcher
EVENT_SCHEDULED = "scheduled"
EVENT_UPDATED = "updated"
EVENT_DELETED = "deleted"
EVENT_TYPES = (EVENT_SCHEDULED, EVENT_UPDATED, EVENT_DELETED)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
