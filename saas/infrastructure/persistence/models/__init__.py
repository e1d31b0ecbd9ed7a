"""ORM models. Importing this package registers every table on Base.metadata."""

from saas.infrastructure.persistence.models.automation_rule import AutomationRule
from saas.infrastructure.persistence.models.event_log import EventLog
from saas.infrastructure.persistence.models.project import Project
from saas.infrastructure.persistence.models.task import Task
from saas.infrastructure.persistence.models.tenant import Tenant

__all__ = ["Tenant", "Project", "Task", "AutomationRule", "EventLog"]
