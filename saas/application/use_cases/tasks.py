"""Task operations. A task counts against the same quota as projects."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from saas.application.use_cases._changes import diff_changes, encode_changes
from saas.domain.enums import EventType
from saas.domain.exceptions import (
    ResourceNotFoundException,
    TenantContextNotSetException,
    ValidationException,
)

if TYPE_CHECKING:
    from saas.application.dtos.task import TaskCreate, TaskResult, TaskUpdate
    from saas.application.interfaces.repositories import IProjectRepository, ITaskRepository
    from saas.application.interfaces.services import IEventPublisher, IQuotaEnforcer
    from saas.core.tenant_context import TenantContextProvider

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "task"


class TaskService:
    """Create and manage tasks for the tenant in context."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        project_repo: IProjectRepository,
        quota_enforcer: IQuotaEnforcer,
        event_publisher: IEventPublisher,
        tenant_context: TenantContextProvider,
    ) -> None:
        self.task_repo = task_repo
        self.project_repo = project_repo
        self.quota_enforcer = quota_enforcer
        self.event_publisher = event_publisher
        self.tenant_context = tenant_context

    def _require_tenant(self) -> str:
        tenant_id = self.tenant_context.get_tenant_id()
        if not tenant_id:
            raise TenantContextNotSetException()
        return tenant_id

    async def create_task(self, data: TaskCreate) -> TaskResult:
        """Check project ownership and quota, persist, publish task.created."""
        tenant_id = self._require_tenant()
        if data.progress_percentage is not None and not 0 <= data.progress_percentage <= 100:
            raise ValidationException(
                "progress_percentage must be between 0 and 100", field="progress_percentage"
            )
        project = await self.project_repo.get_by_id_and_tenant(data.project_id, tenant_id)
        if project is None:
            raise ResourceNotFoundException("project", data.project_id)
        await self.quota_enforcer.enforce(tenant_id)
        task = await self.task_repo.create_task(tenant_id, data)
        logger.info("Created task %s in project %s", task.id, task.project_id)
        await self.event_publisher.publish(
            tenant_id,
            EventType.TASK_CREATED.value,
            task.id,
            RESOURCE_TYPE,
            {
                "taskId": task.id,
                "projectId": task.project_id,
                "name": task.name,
                "status": task.status.value,
                "priority": task.priority.value,
            },
        )
        return task

    async def get_task(self, task_id: str) -> TaskResult:
        task = await self.task_repo.get_by_id_and_tenant(task_id, self._require_tenant())
        if task is None:
            raise ResourceNotFoundException(RESOURCE_TYPE, task_id)
        return task

    async def list_tasks(
        self,
        skip: int = 0,
        limit: int = 100,
        project_id: str | None = None,
        status: str | None = None,
    ) -> list[TaskResult]:
        return await self.task_repo.get_by_tenant(
            self._require_tenant(),
            skip=skip,
            limit=limit,
            project_id=project_id,
            status=status,
        )

    async def update_task(self, task_id: str, patch: TaskUpdate) -> TaskResult:
        """Apply non-None fields; a status change also publishes task.status.changed."""
        tenant_id = self._require_tenant()
        if patch.progress_percentage is not None and not 0 <= patch.progress_percentage <= 100:
            raise ValidationException(
                "progress_percentage must be between 0 and 100", field="progress_percentage"
            )
        current = await self.get_task(task_id)
        diff = diff_changes(current, patch.changes())
        if not diff:
            return current
        updated = await self.task_repo.update_task(
            task_id, tenant_id, {k: getattr(patch, k) for k in diff}
        )
        if updated is None:
            raise ResourceNotFoundException(RESOURCE_TYPE, task_id)
        await self.event_publisher.publish(
            tenant_id,
            EventType.TASK_UPDATED.value,
            updated.id,
            RESOURCE_TYPE,
            {
                "taskId": updated.id,
                "projectId": updated.project_id,
                "name": updated.name,
                "changedFields": ",".join(sorted(diff)),
                "changes": encode_changes(diff),
            },
        )
        if "status" in diff:
            await self.event_publisher.publish(
                tenant_id,
                EventType.TASK_STATUS_CHANGED.value,
                updated.id,
                RESOURCE_TYPE,
                {
                    "taskId": updated.id,
                    "projectId": updated.project_id,
                    "name": updated.name,
                    "oldStatus": diff["status"]["old"],
                    "newStatus": diff["status"]["new"],
                },
            )
        return updated

    async def delete_task(self, task_id: str) -> None:
        tenant_id = self._require_tenant()
        task = await self.get_task(task_id)
        await self.event_publisher.publish(
            tenant_id,
            EventType.TASK_DELETED.value,
            task.id,
            RESOURCE_TYPE,
            {
                "taskId": task.id,
                "projectId": task.project_id,
                "name": task.name,
                "status": task.status.value,
            },
        )
        await self.task_repo.delete_task(task_id, tenant_id)
        logger.info("Deleted task %s for tenant %s", task_id, tenant_id)
