"""Event log API schemas (read-only)."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from saas.domain.enums import ExecutionStatus


class EventLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


class EventLogStatsResponse(BaseModel):
    """Counts per status plus mean execution duration."""

    counts: dict[ExecutionStatus, int]
    average_execution_duration_ms: float
