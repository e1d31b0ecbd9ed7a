"""Automation rule API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Dot-namespaced, e.g. "task.status.changed"
EVENT_TYPE_PATTERN = r"^[a-z0-9_]+(\.[a-z0-9_]+)+$"


class AutomationRuleCreateRequest(BaseModel):
    """Request body for creating an automation rule."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    event_type: str = Field(..., max_length=100, pattern=EVENT_TYPE_PATTERN)
    action_type: str = Field(..., min_length=1, max_length=100)
    conditions: dict[str, Any] = Field(
        default_factory=dict,
        description="Payload keys that must equal these values for the rule to match.",
    )
    action_config: dict[str, Any] = Field(default_factory=dict)
    is_active: bool | None = Field(default=None, description="Defaults to true.")
    execution_count: int | None = Field(default=None, ge=0, description="Defaults to 0.")
    created_by: str | None = Field(default=None, max_length=255)


class AutomationRuleUpdateRequest(BaseModel):
    """Request body for PUT (partial: omitted or null fields are left unchanged)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    event_type: str | None = Field(default=None, max_length=100, pattern=EVENT_TYPE_PATTERN)
    action_type: str | None = Field(default=None, min_length=1, max_length=100)
    conditions: dict[str, Any] | None = None
    action_config: dict[str, Any] | None = None
    is_active: bool | None = None


class AutomationRuleToggleRequest(BaseModel):
    is_active: bool


class AutomationRuleResponse(BaseModel):
    """Automation rule response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    name: str
    description: str | None
    event_type: str
    action_type: str
    conditions: dict[str, Any]
    action_config: dict[str, Any]
    is_active: bool
    execution_count: int
    last_executed_at: datetime | None
    created_by: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CountResponse(BaseModel):
    count: int
