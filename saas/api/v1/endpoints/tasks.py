"""Task API: thin routes delegating to TaskService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from saas.api.v1.dependencies import get_task_service, get_task_service_for_write
from saas.application.dtos.task import TaskCreate, TaskUpdate
from saas.application.use_cases.tasks import TaskService
from saas.core.limiter import limit_writes
from saas.domain.enums import TaskStatus
from saas.schemas.task import TaskCreateRequest, TaskResponse, TaskUpdateRequest

router = APIRouter()


@router.post("", response_model=TaskResponse, status_code=201)
@limit_writes
async def create_task(
    request: Request,
    body: TaskCreateRequest,
    service: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    """Create a task in one of the tenant's projects. Counts against the quota."""
    task = await service.create_task(TaskCreate(**body.model_dump()))
    return TaskResponse.model_validate(task)


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    service: Annotated[TaskService, Depends(get_task_service)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    project_id: str | None = Query(None),
    status: TaskStatus | None = Query(None),
):
    tasks = await service.list_tasks(
        skip=skip,
        limit=limit,
        project_id=project_id,
        status=status.value if status else None,
    )
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    service: Annotated[TaskService, Depends(get_task_service)],
):
    return TaskResponse.model_validate(await service.get_task(task_id))


@router.patch("/{task_id}", response_model=TaskResponse)
@limit_writes
async def update_task(
    request: Request,
    task_id: str,
    body: TaskUpdateRequest,
    service: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    """Partial update. A status change also emits task.status.changed."""
    task = await service.update_task(task_id, TaskUpdate(**body.model_dump()))
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", status_code=204)
@limit_writes
async def delete_task(
    request: Request,
    task_id: str,
    service: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    await service.delete_task(task_id)
    return Response(status_code=204)
