"""DTOs for event logs. Rows are append-only; there is no update DTO."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from saas.domain.enums import ExecutionStatus

# Stack traces stored on a log row are cut to this many characters.
MAX_STACK_TRACE_LENGTH = 2000
TRUNCATION_MARKER = "... (truncated)"


@dataclass(frozen=True)
class EventLogCreate:
    tenant_id: str
    event_type: str
    status: ExecutionStatus
    resource_id: str | None = None
    resource_type: str | None = None
    event_payload: dict[str, Any] | None = None
    automation_rule_id: str | None = None
    action_type: str | None = None
    action_result: dict[str, Any] | None = None
    execution_duration_ms: int | None = None
    error_message: str | None = None
    error_stack_trace: str | None = None


@dataclass(frozen=True)
class EventLogResult:
    id: str
    tenant_id: str
    automation_rule_id: str | None
    event_type: str
    action_type: str | None
    resource_id: str | None
    resource_type: str | None
    event_payload: dict[str, Any] | None
    action_result: dict[str, Any] | None
    status: ExecutionStatus
    execution_duration_ms: int | None
    error_message: str | None
    error_stack_trace: str | None
    created_at: datetime | None


def truncate_stack_trace(trace: str | None) -> str | None:
    """Cap a formatted traceback at MAX_STACK_TRACE_LENGTH plus a marker."""
    if trace is None or len(trace) <= MAX_STACK_TRACE_LENGTH:
        return trace
    return trace[:MAX_STACK_TRACE_LENGTH] + "\n\t" + TRUNCATION_MARKER
