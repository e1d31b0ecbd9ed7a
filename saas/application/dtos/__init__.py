"""Application DTOs (no ORM dependency)."""

from saas.application.dtos.automation import (
    AutomationRuleCreate,
    AutomationRuleResult,
    AutomationRuleUpdate,
)
from saas.application.dtos.event_log import EventLogCreate, EventLogResult
from saas.application.dtos.project import ProjectCreate, ProjectResult, ProjectUpdate
from saas.application.dtos.task import TaskCreate, TaskResult, TaskUpdate
from saas.application.dtos.tenant import TenantCreate, TenantResult, TenantUsage

__all__ = [
    "AutomationRuleCreate",
    "AutomationRuleResult",
    "AutomationRuleUpdate",
    "EventLogCreate",
    "EventLogResult",
    "ProjectCreate",
    "ProjectResult",
    "ProjectUpdate",
    "TaskCreate",
    "TaskResult",
    "TaskUpdate",
    "TenantCreate",
    "TenantResult",
    "TenantUsage",
]
