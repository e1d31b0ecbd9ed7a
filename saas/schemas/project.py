"""Project API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from saas.domain.enums import Priority, ProjectStatus


class ProjectCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    status: ProjectStatus = ProjectStatus.PLANNING
    priority: Priority = Priority.MEDIUM
    due_date: datetime | None = None
    owner_id: str | None = None
    progress_percentage: int = Field(default=0, ge=0, le=100)


class ProjectUpdateRequest(BaseModel):
    """Request body for PATCH (null or omitted fields are left unchanged)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    status: ProjectStatus | None = None
    priority: Priority | None = None
    due_date: datetime | None = None
    owner_id: str | None = None
    progress_percentage: int | None = Field(default=None, ge=0, le=100)


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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
