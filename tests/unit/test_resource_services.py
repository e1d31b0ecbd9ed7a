"""Tests for ProjectService and TaskService (quota, events, tenant scoping)."""

import json
from datetime import UTC, datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from saas.application.dtos.project import ProjectCreate, ProjectResult, ProjectUpdate
from saas.application.dtos.task import TaskCreate, TaskResult, TaskUpdate
from saas.application.use_cases.projects import ProjectService
from saas.application.use_cases.tasks import TaskService
from saas.core.tenant_context import FixedTenantContext
from saas.domain.enums import Priority, ProjectStatus, TaskStatus
from saas.domain.exceptions import (
    QuotaExceededException,
    ResourceNotFoundException,
    TenantContextNotSetException,
    ValidationException,
)


def make_project(**overrides) -> ProjectResult:
    values = {
        "id": "proj-1",
        "tenant_id": "tenant-a",
        "name": "Alpha",
        "description": None,
        "status": ProjectStatus.PLANNING,
        "priority": Priority.MEDIUM,
        "due_date": None,
        "owner_id": "user-1",
        "progress_percentage": 0,
    }
    values.update(overrides)
    return ProjectResult(**values)


def make_task(**overrides) -> TaskResult:
    values = {
        "id": "task-1",
        "tenant_id": "tenant-a",
        "project_id": "proj-1",
        "name": "Write docs",
        "description": None,
        "status": TaskStatus.TODO,
        "priority": Priority.MEDIUM,
        "due_date": None,
        "progress_percentage": 0,
    }
    values.update(overrides)
    return TaskResult(**values)


def published(publisher: AsyncMock) -> list[tuple]:
    return [c.args for c in publisher.publish.await_args_list]


@pytest.fixture
def project_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id_and_tenant.return_value = make_project()
    return repo


@pytest.fixture
def task_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id_and_tenant.return_value = make_task()
    return repo


@pytest.fixture
def quota() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def publisher() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def context() -> FixedTenantContext:
    return FixedTenantContext("tenant-a", "acme")


@pytest.fixture
def projects(project_repo, quota, publisher, context) -> ProjectService:
    return ProjectService(project_repo, quota, publisher, context)


@pytest.fixture
def tasks(task_repo, project_repo, quota, publisher, context) -> TaskService:
    return TaskService(task_repo, project_repo, quota, publisher, context)


# ---- Projects ----


async def test_create_project_checks_quota_then_publishes(
    projects: ProjectService, project_repo: AsyncMock, quota: AsyncMock, publisher: AsyncMock
) -> None:
    project_repo.create_project.return_value = make_project()
    project = await projects.create_project(ProjectCreate(name="Alpha", owner_id="user-1"))

    assert project.id == "proj-1"
    quota.enforce.assert_awaited_once_with("tenant-a")
    [(tenant_id, event_type, resource_id, resource_type, payload)] = published(publisher)
    assert (tenant_id, event_type, resource_id, resource_type) == (
        "tenant-a",
        "project.created",
        "proj-1",
        "project",
    )
    assert payload == {
        "projectId": "proj-1",
        "name": "Alpha",
        "status": "PLANNING",
        "priority": "MEDIUM",
        "ownerId": "user-1",
    }


async def test_create_project_over_quota_persists_nothing(
    projects: ProjectService, project_repo: AsyncMock, quota: AsyncMock, publisher: AsyncMock
) -> None:
    quota.enforce.side_effect = QuotaExceededException("tenant-a", "projects+tasks", 50, 50)
    with pytest.raises(QuotaExceededException):
        await projects.create_project(ProjectCreate(name="Alpha"))
    project_repo.create_project.assert_not_awaited()
    publisher.publish.assert_not_awaited()


async def test_create_project_rejects_out_of_range_progress(projects: ProjectService) -> None:
    with pytest.raises(ValidationException):
        await projects.create_project(ProjectCreate(name="Alpha", progress_percentage=101))


async def test_project_operations_require_tenant(project_repo, quota, publisher) -> None:
    service = ProjectService(project_repo, quota, publisher, FixedTenantContext())
    with pytest.raises(TenantContextNotSetException):
        await service.list_projects()


async def test_get_missing_project_raises(
    projects: ProjectService, project_repo: AsyncMock
) -> None:
    project_repo.get_by_id_and_tenant.return_value = None
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await projects.get_project("nope")
    assert exc_info.value.details == {"resource_type": "project", "resource_id": "nope"}


async def test_update_project_publishes_changed_fields(
    projects: ProjectService, project_repo: AsyncMock, publisher: AsyncMock
) -> None:
    project_repo.update_project.return_value = make_project(
        status=ProjectStatus.ACTIVE, progress_percentage=10
    )
    await projects.update_project(
        "proj-1",
        ProjectUpdate(name="Alpha", status=ProjectStatus.ACTIVE, progress_percentage=10),
    )

    project_repo.update_project.assert_awaited_once_with(
        "proj-1", "tenant-a", {"status": ProjectStatus.ACTIVE, "progress_percentage": 10}
    )
    [(_, event_type, _, _, payload)] = published(publisher)
    assert event_type == "project.updated"
    assert payload["changedFields"] == "progress_percentage,status"
    assert json.loads(payload["changes"]) == {
        "progress_percentage": {"old": 0, "new": 10},
        "status": {"old": "PLANNING", "new": "ACTIVE"},
    }


async def test_update_project_without_changes_publishes_nothing(
    projects: ProjectService, project_repo: AsyncMock, publisher: AsyncMock
) -> None:
    result = await projects.update_project("proj-1", ProjectUpdate(name="Alpha"))
    assert result == make_project()
    project_repo.update_project.assert_not_awaited()
    publisher.publish.assert_not_awaited()


async def test_delete_project_publishes_then_deletes(
    projects: ProjectService, project_repo: AsyncMock, publisher: AsyncMock
) -> None:
    await projects.delete_project("proj-1")
    [(_, event_type, resource_id, _, _)] = published(publisher)
    assert (event_type, resource_id) == ("project.deleted", "proj-1")
    project_repo.delete_project.assert_awaited_once_with("proj-1", "tenant-a")


# ---- Tasks ----


async def test_create_task_requires_owned_project(
    tasks: TaskService, project_repo: AsyncMock, quota: AsyncMock, task_repo: AsyncMock
) -> None:
    project_repo.get_by_id_and_tenant.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await tasks.create_task(TaskCreate(project_id="proj-other", name="x"))
    quota.enforce.assert_not_awaited()
    task_repo.create_task.assert_not_awaited()


async def test_create_task_counts_against_quota(
    tasks: TaskService, task_repo: AsyncMock, quota: AsyncMock, publisher: AsyncMock
) -> None:
    task_repo.create_task.return_value = make_task()
    await tasks.create_task(TaskCreate(project_id="proj-1", name="Write docs"))
    quota.enforce.assert_awaited_once_with("tenant-a")
    [(_, event_type, _, resource_type, payload)] = published(publisher)
    assert (event_type, resource_type) == ("task.created", "task")
    assert payload["projectId"] == "proj-1"


async def test_status_change_publishes_two_events(
    tasks: TaskService, task_repo: AsyncMock, publisher: AsyncMock
) -> None:
    task_repo.update_task.return_value = make_task(status=TaskStatus.COMPLETED)
    await tasks.update_task("task-1", TaskUpdate(status=TaskStatus.COMPLETED))

    events = published(publisher)
    assert [e[1] for e in events] == ["task.updated", "task.status.changed"]
    status_payload = events[1][4]
    assert status_payload["oldStatus"] == "TODO"
    assert status_payload["newStatus"] == "COMPLETED"


async def test_non_status_update_publishes_one_event(
    tasks: TaskService, task_repo: AsyncMock, publisher: AsyncMock
) -> None:
    task_repo.update_task.return_value = make_task(priority=Priority.HIGH)
    await tasks.update_task("task-1", TaskUpdate(priority=Priority.HIGH))
    assert [e[1] for e in published(publisher)] == ["task.updated"]


async def test_delete_task(tasks: TaskService, task_repo: AsyncMock, publisher: AsyncMock) -> None:
    await tasks.delete_task("task-1")
    assert [e[1] for e in published(publisher)] == ["task.deleted"]
    task_repo.delete_task.assert_awaited_once_with("task-1", "tenant-a")


async def test_same_instant_due_date_is_not_a_change(
    tasks: TaskService, task_repo: AsyncMock, publisher: AsyncMock
) -> None:
    """02:00+02:00 is midnight UTC, so nothing is written or published."""
    current = make_task(due_date=datetime(2026, 1, 1, tzinfo=UTC))
    task_repo.get_by_id_and_tenant.return_value = current
    plus_two = timezone(timedelta(hours=2))

    result = await tasks.update_task(
        "task-1", TaskUpdate(due_date=datetime(2026, 1, 1, 2, 0, tzinfo=plus_two))
    )
    assert result == current
    task_repo.update_task.assert_not_awaited()
    publisher.publish.assert_not_awaited()
