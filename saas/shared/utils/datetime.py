"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system are timezone-aware UTC. Use these helpers
instead of datetime.now() or datetime.utcnow().
"""

import time
from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    SQLite drops tzinfo on the way back, so repositories normalize here.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def elapsed_ms(started: float) -> int:
    """Whole milliseconds since a time.monotonic() reading (never negative)."""
    return max(0, int((time.monotonic() - started) * 1000))
