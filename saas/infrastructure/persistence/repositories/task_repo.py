"""Task repository. Every query is scoped by tenant_id."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from saas.application.dtos.task import TaskCreate, TaskResult
from saas.domain.enums import Priority, TaskStatus
from saas.infrastructure.persistence.models.task import Task
from saas.infrastructure.persistence.repositories.base import BaseRepository, column_values
from saas.shared.utils.datetime import ensure_utc


def _to_result(t: Task) -> TaskResult:
    """Map Task ORM to TaskResult DTO."""
    return TaskResult(
        id=t.id,
        tenant_id=t.tenant_id,
        project_id=t.project_id,
        name=t.name,
        description=t.description,
        status=TaskStatus(t.status),
        priority=Priority(t.priority),
        due_date=ensure_utc(t.due_date),
        progress_percentage=t.progress_percentage,
        created_at=ensure_utc(t.created_at),
        updated_at=ensure_utc(t.updated_at),
    )


class TaskRepository(BaseRepository[Task]):
    """Task repository. Implements ITaskRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    async def create_task(self, tenant_id: str, data: TaskCreate) -> TaskResult:
        task = Task(
            tenant_id=tenant_id,
            project_id=data.project_id,
            name=data.name,
            description=data.description,
            status=data.status.value,
            priority=data.priority.value,
            due_date=ensure_utc(data.due_date),
            progress_percentage=data.progress_percentage,
        )
        return _to_result(await self._add(task))

    async def get_by_id_and_tenant(self, task_id: str, tenant_id: str) -> TaskResult | None:
        task = await self._get_for_tenant(task_id, tenant_id)
        return _to_result(task) if task else None

    async def get_by_tenant(
        self,
        tenant_id: str,
        skip: int = 0,
        limit: int = 100,
        project_id: str | None = None,
        status: str | None = None,
    ) -> list[TaskResult]:
        stmt = select(Task).where(Task.tenant_id == tenant_id)
        if project_id:
            stmt = stmt.where(Task.project_id == project_id)
        if status:
            stmt = stmt.where(Task.status == status)
        stmt = stmt.order_by(Task.created_at.desc()).offset(skip).limit(limit)
        result = await self.db.execute(stmt)
        return [_to_result(t) for t in result.scalars().all()]

    async def update_task(
        self, task_id: str, tenant_id: str, changes: dict[str, Any]
    ) -> TaskResult | None:
        task = await self._get_for_tenant(task_id, tenant_id)
        if task is None:
            return None
        return _to_result(await self._apply(task, column_values(changes)))

    async def delete_task(self, task_id: str, tenant_id: str) -> bool:
        return await self._delete_where(Task.id == task_id, Task.tenant_id == tenant_id)

    async def count_by_tenant(self, tenant_id: str) -> int:
        return await self._count_where(Task.tenant_id == tenant_id)
