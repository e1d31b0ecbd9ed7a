"""Project API: thin routes delegating to ProjectService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from saas.api.v1.dependencies import get_project_service, get_project_service_for_write
from saas.application.dtos.project import ProjectCreate, ProjectUpdate
from saas.application.use_cases.projects import ProjectService
from saas.core.limiter import limit_writes
from saas.domain.enums import ProjectStatus
from saas.schemas.project import ProjectCreateRequest, ProjectResponse, ProjectUpdateRequest

router = APIRouter()


@router.post("", response_model=ProjectResponse, status_code=201)
@limit_writes
async def create_project(
    request: Request,
    body: ProjectCreateRequest,
    service: Annotated[ProjectService, Depends(get_project_service_for_write)],
):
    """Create a project. 402 when the tenant's quota is used up."""
    project = await service.create_project(ProjectCreate(**body.model_dump()))
    return ProjectResponse.model_validate(project)


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    service: Annotated[ProjectService, Depends(get_project_service)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    status: ProjectStatus | None = Query(None),
):
    projects = await service.list_projects(
        skip=skip, limit=limit, status=status.value if status else None
    )
    return [ProjectResponse.model_validate(p) for p in projects]


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    service: Annotated[ProjectService, Depends(get_project_service)],
):
    return ProjectResponse.model_validate(await service.get_project(project_id))


@router.patch("/{project_id}", response_model=ProjectResponse)
@limit_writes
async def update_project(
    request: Request,
    project_id: str,
    body: ProjectUpdateRequest,
    service: Annotated[ProjectService, Depends(get_project_service_for_write)],
):
    project = await service.update_project(project_id, ProjectUpdate(**body.model_dump()))
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", status_code=204)
@limit_writes
async def delete_project(
    request: Request,
    project_id: str,
    service: Annotated[ProjectService, Depends(get_project_service_for_write)],
):
    await service.delete_project(project_id)
    return Response(status_code=204)
