"""Project repository. Every query is scoped by tenant_id."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from saas.application.dtos.project import ProjectCreate, ProjectResult
from saas.domain.enums import Priority, ProjectStatus
from saas.infrastructure.persistence.models.project import Project
from saas.infrastructure.persistence.repositories.base import BaseRepository, column_values
from saas.shared.utils.datetime import ensure_utc


def _to_result(p: Project) -> ProjectResult:
    """Map Project ORM to ProjectResult DTO."""
    return ProjectResult(
        id=p.id,
        tenant_id=p.tenant_id,
        name=p.name,
        description=p.description,
        status=ProjectStatus(p.status),
        priority=Priority(p.priority),
        due_date=ensure_utc(p.due_date),
        owner_id=p.owner_id,
        progress_percentage=p.progress_percentage,
        created_at=ensure_utc(p.created_at),
        updated_at=ensure_utc(p.updated_at),
    )


class ProjectRepository(BaseRepository[Project]):
    """Project repository. Implements IProjectRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Project)

    async def create_project(self, tenant_id: str, data: ProjectCreate) -> ProjectResult:
        project = Project(
            tenant_id=tenant_id,
            name=data.name,
            description=data.description,
            status=data.status.value,
            priority=data.priority.value,
            due_date=ensure_utc(data.due_date),
            owner_id=data.owner_id,
            progress_percentage=data.progress_percentage,
        )
        return _to_result(await self._add(project))

    async def get_by_id_and_tenant(
        self, project_id: str, tenant_id: str
    ) -> ProjectResult | None:
        project = await self._get_for_tenant(project_id, tenant_id)
        return _to_result(project) if project else None

    async def get_by_tenant(
        self, tenant_id: str, skip: int = 0, limit: int = 100, status: str | None = None
    ) -> list[ProjectResult]:
        stmt = select(Project).where(Project.tenant_id == tenant_id)
        if status:
            stmt = stmt.where(Project.status == status)
        stmt = stmt.order_by(Project.created_at.desc()).offset(skip).limit(limit)
        result = await self.db.execute(stmt)
        return [_to_result(p) for p in result.scalars().all()]

    async def update_project(
        self, project_id: str, tenant_id: str, changes: dict[str, Any]
    ) -> ProjectResult | None:
        project = await self._get_for_tenant(project_id, tenant_id)
        if project is None:
            return None
        return _to_result(await self._apply(project, column_values(changes)))

    async def delete_project(self, project_id: str, tenant_id: str) -> bool:
        return await self._delete_where(
            Project.id == project_id, Project.tenant_id == tenant_id
        )

    async def count_by_tenant(self, tenant_id: str) -> int:
        return await self._count_where(Project.tenant_id == tenant_id)
