"""DTOs for projects."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from saas.domain.enums import Priority, ProjectStatus


@dataclass(frozen=True)
class ProjectCreate:
    name: str
    description: str | None = None
    status: ProjectStatus = ProjectStatus.PLANNING
    priority: Priority = Priority.MEDIUM
    due_date: datetime | None = None
    owner_id: str | None = None
    progress_percentage: int = 0


@dataclass(frozen=True)
class ProjectUpdate:
    """Partial update; None leaves the field unchanged."""

    name: str | None = None
    description: str | None = None
    status: ProjectStatus | None = None
    priority: Priority | None = None
    due_date: datetime | None = None
    owner_id: str | None = None
    progress_percentage: int | None = None

    def changes(self) -> dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if v is not None}


@dataclass(frozen=True)
class ProjectResult:
    id: str
    tenant_id: str
    name: str
    description: str | None
    status: ProjectStatus
    priority: Priority
    due_date: datetime | None
    owner_id: str | None
    progress_percentage: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
