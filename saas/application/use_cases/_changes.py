"""Change tracking shared by the resource services."""

import json
from datetime import datetime
from enum import Enum
from typing import Any

from saas.shared.utils.datetime import ensure_utc


def event_value(value: Any) -> Any:
    """Flatten enums and datetimes into JSON-friendly primitives.

    Datetimes become UTC ISO strings, so the same instant written with another
    offset compares equal.
    """
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return ensure_utc(value).isoformat()
    return value


def diff_changes(current: Any, changes: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """{field: {"old", "new"}} for patch fields whose value actually differs."""
    diff: dict[str, dict[str, Any]] = {}
    for field, new in changes.items():
        old = getattr(current, field)
        if event_value(old) != event_value(new):
            diff[field] = {"old": event_value(old), "new": event_value(new)}
    return diff


def encode_changes(diff: dict[str, dict[str, Any]]) -> str:
    """Event payload values are primitives, so the diff travels as a JSON string."""
    return json.dumps(diff, sort_keys=True)
