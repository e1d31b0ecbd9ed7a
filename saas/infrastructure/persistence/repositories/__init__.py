"""SQLAlchemy repositories. Each returns application DTOs, never ORM objects."""

from saas.infrastructure.persistence.repositories.automation_rule_repo import (
    AutomationRuleRepository,
)
from saas.infrastructure.persistence.repositories.event_log_repo import EventLogRepository
from saas.infrastructure.persistence.repositories.project_repo import ProjectRepository
from saas.infrastructure.persistence.repositories.task_repo import TaskRepository
from saas.infrastructure.persistence.repositories.tenant_repo import TenantRepository

__all__ = [
    "AutomationRuleRepository",
    "EventLogRepository",
    "ProjectRepository",
    "TaskRepository",
    "TenantRepository",
]
