"""Project ORM model."""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from saas.domain.enums import Priority, ProjectStatus
from saas.infrastructure.persistence.database import Base
from saas.infrastructure.persistence.models.mixins import MultiTenantModel


class Project(MultiTenantModel, Base):
    """Tenant-owned project. Table: project."""

    __tablename__ = "project"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=ProjectStatus.PLANNING.value
    )
    priority: Mapped[str] = mapped_column(
        String(32), nullable=False, default=Priority.MEDIUM.value
    )
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    owner_id: Mapped[str | None] = mapped_column(String, nullable=True)
    progress_percentage: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )

    __table_args__ = (Index("ix_project_tenant_status", "tenant_id", "status"),)
