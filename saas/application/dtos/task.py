"""DTOs for tasks."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from saas.domain.enums import Priority, TaskStatus


@dataclass(frozen=True)
class TaskCreate:
    project_id: str
    name: str
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: Priority = Priority.MEDIUM
    due_date: datetime | None = None
    progress_percentage: int = 0


@dataclass(frozen=True)
class TaskUpdate:
    """Partial update; None leaves the field unchanged. project_id cannot change."""

    name: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: Priority | None = None
    due_date: datetime | None = None
    progress_percentage: int | None = None

    def changes(self) -> dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if v is not None}


@dataclass(frozen=True)
class TaskResult:
    id: str
    tenant_id: str
    project_id: str
    name: str
    description: str | None
    status: TaskStatus
    priority: Priority
    due_date: datetime | None
    progress_percentage: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
