"""Task ORM model. Every task belongs to a project of the same tenant."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from saas.domain.enums import Priority, TaskStatus
from saas.infrastructure.persistence.database import Base
from saas.infrastructure.persistence.models.mixins import MultiTenantModel


class Task(MultiTenantModel, Base):
    """Tenant-owned task. Table: task."""

    __tablename__ = "task"

    project_id: Mapped[str] = mapped_column(
        String, ForeignKey("project.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=TaskStatus.TODO.value
    )
    priority: Mapped[str] = mapped_column(
        String(32), nullable=False, default=Priority.MEDIUM.value
    )
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    progress_percentage: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )

    __table_args__ = (Index("ix_task_tenant_project", "tenant_id", "project_id"),)
