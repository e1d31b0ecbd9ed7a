"""Task API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from saas.domain.enums import Priority, TaskStatus


class TaskCreateRequest(BaseModel):
    project_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    status: TaskStatus = TaskStatus.TODO
    priority: Priority = Priority.MEDIUM
    due_date: datetime | None = None
    progress_percentage: int = Field(default=0, ge=0, le=100)


class TaskUpdateRequest(BaseModel):
    """Request body for PATCH (null or omitted fields are left unchanged)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    status: TaskStatus | None = None
    priority: Priority | None = None
    due_date: datetime | None = None
    progress_percentage: int | None = Field(default=None, ge=0, le=100)


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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
