"""DTOs for automation rules."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AutomationRuleCreate:
    """Input for creating a rule. None for is_active/execution_count means default."""

    name: str
    event_type: str
    action_type: str
    description: str | None = None
    conditions: dict[str, Any] = field(default_factory=dict)
    action_config: dict[str, Any] = field(default_factory=dict)
    is_active: bool | None = None
    execution_count: int | None = None
    created_by: str | None = None


@dataclass(frozen=True)
class AutomationRuleUpdate:
    """Partial update; None leaves the field unchanged. Mappings are replaced wholesale."""

    name: str | None = None
    description: str | None = None
    event_type: str | None = None
    action_type: str | None = None
    conditions: dict[str, Any] | None = None
    action_config: dict[str, Any] | None = None
    is_active: bool | None = None

    def changes(self) -> dict[str, Any]:
        """Fields to overwrite (those that are not None)."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


@dataclass(frozen=True)
class AutomationRuleResult:
    """Read-model for a single automation rule."""

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
