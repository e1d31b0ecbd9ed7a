"""Use cases for tenant-owned resources (projects, tasks)."""

from saas.application.use_cases.projects import ProjectService
from saas.application.use_cases.tasks import TaskService

__all__ = ["ProjectService", "TaskService"]
