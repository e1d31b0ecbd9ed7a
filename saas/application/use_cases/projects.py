"""Project operations: quota-checked create, read, patch, delete. Each mutation publishes an event."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from saas.application.use_cases._changes import diff_changes, encode_changes, event_value
from saas.domain.enums import EventType
from saas.domain.exceptions import (
    ResourceNotFoundException,
    TenantContextNotSetException,
    ValidationException,
)

if TYPE_CHECKING:
    from saas.application.dtos.project import ProjectCreate, ProjectResult, ProjectUpdate
    from saas.application.interfaces.repositories import IProjectRepository
    from saas.application.interfaces.services import IEventPublisher, IQuotaEnforcer
    from saas.core.tenant_context import TenantContextProvider

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "project"


def _check_progress(value: int | None) -> None:
    if value is not None and not 0 <= value <= 100:
        raise ValidationException(
            "progress_percentage must be between 0 and 100", field="progress_percentage"
        )


class ProjectService:
    """Create and manage projects for the tenant in context."""

    def __init__(
        self,
        project_repo: IProjectRepository,
        quota_enforcer: IQuotaEnforcer,
        event_publisher: IEventPublisher,
        tenant_context: TenantContextProvider,
    ) -> None:
        self.project_repo = project_repo
        self.quota_enforcer = quota_enforcer
        self.event_publisher = event_publisher
        self.tenant_context = tenant_context

    def _require_tenant(self) -> str:
        tenant_id = self.tenant_context.get_tenant_id()
        if not tenant_id:
            raise TenantContextNotSetException()
        return tenant_id

    async def create_project(self, data: ProjectCreate) -> ProjectResult:
        """Enforce quota, persist, publish project.created."""
        tenant_id = self._require_tenant()
        _check_progress(data.progress_percentage)
        await self.quota_enforcer.enforce(tenant_id)
        project = await self.project_repo.create_project(tenant_id, data)
        logger.info("Created project %s for tenant %s", project.id, tenant_id)
        await self.event_publisher.publish(
            tenant_id,
            EventType.PROJECT_CREATED.value,
            project.id,
            RESOURCE_TYPE,
            {
                "projectId": project.id,
                "name": project.name,
                "status": project.status.value,
                "priority": project.priority.value,
                "ownerId": project.owner_id,
            },
        )
        return project

    async def get_project(self, project_id: str) -> ProjectResult:
        project = await self.project_repo.get_by_id_and_tenant(
            project_id, self._require_tenant()
        )
        if project is None:
            raise ResourceNotFoundException(RESOURCE_TYPE, project_id)
        return project

    async def list_projects(
        self, skip: int = 0, limit: int = 100, status: str | None = None
    ) -> list[ProjectResult]:
        return await self.project_repo.get_by_tenant(
            self._require_tenant(), skip=skip, limit=limit, status=status
        )

    async def update_project(self, project_id: str, patch: ProjectUpdate) -> ProjectResult:
        """Apply non-None fields; publish project.updated only when something changed."""
        tenant_id = self._require_tenant()
        _check_progress(patch.progress_percentage)
        current = await self.get_project(project_id)
        diff = diff_changes(current, patch.changes())
        if not diff:
            return current
        updated = await self.project_repo.update_project(
            project_id, tenant_id, {k: getattr(patch, k) for k in diff}
        )
        if updated is None:
            raise ResourceNotFoundException(RESOURCE_TYPE, project_id)
        await self.event_publisher.publish(
            tenant_id,
            EventType.PROJECT_UPDATED.value,
            updated.id,
            RESOURCE_TYPE,
            {
                "projectId": updated.id,
                "name": updated.name,
                "status": event_value(updated.status),
                "changedFields": ",".join(sorted(diff)),
                "changes": encode_changes(diff),
            },
        )
        return updated

    async def delete_project(self, project_id: str) -> None:
        tenant_id = self._require_tenant()
        project = await self.get_project(project_id)
        await self.event_publisher.publish(
            tenant_id,
            EventType.PROJECT_DELETED.value,
            project.id,
            RESOURCE_TYPE,
            {
                "projectId": project.id,
                "name": project.name,
                "status": project.status.value,
            },
        )
        await self.project_repo.delete_project(project_id, tenant_id)
        logger.info("Deleted project %s for tenant %s", project_id, tenant_id)
