"""Repository integration tests on in-memory SQLite; the session is rolled back after each test."""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from saas.application.dtos.automation import AutomationRuleCreate
from saas.application.dtos.event_log import EventLogCreate
from saas.application.dtos.project import ProjectCreate
from saas.application.dtos.task import TaskCreate
from saas.application.dtos.tenant import TenantCreate
from saas.domain.enums import ExecutionStatus, Priority, ProjectStatus, SubscriptionTier, TaskStatus
from saas.infrastructure.persistence.repositories import (
    AutomationRuleRepository,
    EventLogRepository,
    ProjectRepository,
    TaskRepository,
    TenantRepository,
)
from saas.shared.utils.datetime import utc_now


async def _tenant(db_session, subdomain: str = "acme"):
    return await TenantRepository(db_session).create_tenant(
        TenantCreate(
            subdomain=subdomain,
            name=subdomain.title(),
            subscription_tier=SubscriptionTier.PRO,
            quota_limit=1000,
        )
    )


def _rule(name: str = "Notify", event_type: str = "task.created", **kwargs) -> AutomationRuleCreate:
    values = {"is_active": True, "execution_count": 0}
    values.update(kwargs)
    return AutomationRuleCreate(
        name=name, event_type=event_type, action_type="send_email", **values
    )


async def test_create_tenant_and_get_by_subdomain(db_session) -> None:
    repo = TenantRepository(db_session)
    created = await _tenant(db_session)
    assert created.id
    assert created.subscription_tier == SubscriptionTier.PRO
    assert created.created_at is not None and created.created_at.tzinfo is not None

    found = await repo.get_by_subdomain(" ACME ")
    assert found is not None and found.id == created.id
    assert await repo.get_by_id_for_update(created.id) == found
    assert await repo.get_by_subdomain("ghost") is None


async def test_set_active(db_session) -> None:
    repo = TenantRepository(db_session)
    created = await _tenant(db_session)
    updated = await repo.set_active(created.id, False)
    assert updated is not None and updated.is_active is False
    assert await repo.set_active("missing", True) is None


async def test_project_queries_are_tenant_scoped(db_session) -> None:
    acme = await _tenant(db_session, "acme")
    globex = await _tenant(db_session, "globex")
    repo = ProjectRepository(db_session)
    project = await repo.create_project(
        acme.id, ProjectCreate(name="Alpha", status=ProjectStatus.ACTIVE, priority=Priority.HIGH)
    )
    await repo.create_project(globex.id, ProjectCreate(name="Beta"))

    assert project.status == ProjectStatus.ACTIVE
    assert await repo.get_by_id_and_tenant(project.id, globex.id) is None
    assert [p.name for p in await repo.get_by_tenant(acme.id)] == ["Alpha"]
    assert await repo.get_by_tenant(acme.id, status="PLANNING") == []
    assert await repo.count_by_tenant(acme.id) == 1

    assert await repo.update_project(project.id, globex.id, {"name": "Hijacked"}) is None
    assert await repo.delete_project(project.id, globex.id) is False

    updated = await repo.update_project(
        project.id, acme.id, {"status": ProjectStatus.COMPLETED, "progress_percentage": 100}
    )
    assert updated.status == ProjectStatus.COMPLETED
    assert updated.progress_percentage == 100
    assert await repo.delete_project(project.id, acme.id) is True
    assert await repo.count_by_tenant(acme.id) == 0


async def test_task_queries(db_session) -> None:
    acme = await _tenant(db_session)
    project = await ProjectRepository(db_session).create_project(
        acme.id, ProjectCreate(name="Alpha")
    )
    repo = TaskRepository(db_session)
    task = await repo.create_task(acme.id, TaskCreate(project_id=project.id, name="Docs"))
    await repo.create_task(
        acme.id, TaskCreate(project_id=project.id, name="Ship", status=TaskStatus.BLOCKED)
    )

    assert task.status == TaskStatus.TODO
    assert await repo.count_by_tenant(acme.id) == 2
    blocked = await repo.get_by_tenant(acme.id, project_id=project.id, status="BLOCKED")
    assert [t.name for t in blocked] == ["Ship"]

    updated = await repo.update_task(task.id, acme.id, {"status": TaskStatus.IN_PROGRESS})
    assert updated.status == TaskStatus.IN_PROGRESS
    assert await repo.delete_task(task.id, acme.id) is True
    assert await repo.get_by_id_and_tenant(task.id, acme.id) is None


async def test_automation_rule_queries(db_session) -> None:
    acme = await _tenant(db_session, "acme")
    globex = await _tenant(db_session, "globex")
    repo = AutomationRuleRepository(db_session)
    busy = await repo.create_rule(
        acme.id, _rule("Busy", conditions={"status": "DONE"}, execution_count=9)
    )
    idle = await repo.create_rule(acme.id, _rule("Idle", execution_count=1))
    off = await repo.create_rule(acme.id, _rule("Off", is_active=False, execution_count=5))
    await repo.create_rule(globex.id, _rule("Other"))

    assert busy.conditions == {"status": "DONE"}
    assert await repo.count_by_tenant(acme.id) == 3
    assert {r.id for r in await repo.get_active_by_tenant(acme.id)} == {busy.id, idle.id}
    by_type = await repo.get_active_by_event_type(acme.id, "task.created")
    assert off.id not in {r.id for r in by_type}
    top = await repo.get_top_executed(acme.id, 2)
    assert [r.name for r in top] == ["Busy", "Off"]

    updated = await repo.update_rule(idle.id, {"name": "Renamed"})
    assert updated.name == "Renamed"
    assert updated.event_type == "task.created"

    executed = await repo.record_execution(idle.id, utc_now())
    assert executed.execution_count == 2
    assert executed.last_executed_at is not None

    assert await repo.delete_rule(off.id) is True
    assert await repo.get_by_id(off.id) is None


async def test_event_log_queries(db_session) -> None:
    acme = await _tenant(db_session)
    rule = await AutomationRuleRepository(db_session).create_rule(acme.id, _rule())
    repo = EventLogRepository(db_session)
    before = utc_now() - timedelta(seconds=1)

    await repo.create_log(
        EventLogCreate(
            tenant_id=acme.id,
            event_type="task.created",
            status=ExecutionStatus.SUCCESS,
            automation_rule_id=rule.id,
            event_payload={"name": "Docs"},
            execution_duration_ms=10,
        )
    )
    failed = await repo.create_log(
        EventLogCreate(
            tenant_id=acme.id,
            event_type="task.created",
            status=ExecutionStatus.FAILED,
            execution_duration_ms=30,
            error_message="Bus unavailable",
        )
    )
    await repo.create_log(
        EventLogCreate(
            tenant_id=acme.id, event_type="project.created", status=ExecutionStatus.NO_RULES_MATCHED
        )
    )
    after = utc_now() + timedelta(seconds=1)

    assert failed.status == ExecutionStatus.FAILED
    assert len(await repo.get_recent(acme.id, 2)) == 2
    assert [e.event_payload for e in await repo.get_by_rule(acme.id, rule.id)] == [
        {"name": "Docs"}
    ]
    assert [e.id for e in await repo.get_by_status(acme.id, ExecutionStatus.FAILED)] == [
        failed.id
    ]
    assert await repo.count_by_status(acme.id, ExecutionStatus.SUCCESS) == 1
    assert await repo.average_duration(acme.id) == 20.0
    assert len(await repo.get_by_date_range(acme.id, before, after)) == 3
    assert await repo.get_by_date_range(acme.id, before - timedelta(days=2), before) == []


async def test_average_duration_without_logs(db_session) -> None:
    acme = await _tenant(db_session)
    assert await EventLogRepository(db_session).average_duration(acme.id) is None


async def test_failed_log_insert_keeps_business_writes(db_session) -> None:
    """A rejected event log row rolls back to its savepoint only."""
    acme = await _tenant(db_session)
    projects = ProjectRepository(db_session)
    await projects.create_project(acme.id, ProjectCreate(name="Alpha"))

    with pytest.raises(IntegrityError):
        await EventLogRepository(db_session).create_log(
            EventLogCreate(
                tenant_id=acme.id,
                event_type="project.created",
                status=ExecutionStatus.SUCCESS,
                execution_duration_ms=-1,
            )
        )
    assert await projects.count_by_tenant(acme.id) == 1


async def test_due_date_offset_is_preserved_as_utc_instant(db_session) -> None:
    """Offsets are normalized on write, so SQLite (which drops them) returns the same instant."""
    acme = await _tenant(db_session)
    plus_two = timezone(timedelta(hours=2))
    project = await ProjectRepository(db_session).create_project(
        acme.id, ProjectCreate(name="Alpha", due_date=datetime(2026, 1, 1, 2, 0, tzinfo=plus_two))
    )
    assert project.due_date == datetime(2026, 1, 1, 0, 0, tzinfo=UTC)
    assert project.due_date.utcoffset() == timedelta(0)

    repo = TaskRepository(db_session)
    task = await repo.create_task(acme.id, TaskCreate(project_id=project.id, name="Docs"))
    updated = await repo.update_task(
        task.id, acme.id, {"due_date": datetime(2026, 3, 1, 12, 0, tzinfo=plus_two)}
    )
    assert updated.due_date == datetime(2026, 3, 1, 10, 0, tzinfo=UTC)
    fetched = await repo.get_by_id_and_tenant(task.id, acme.id)
    assert fetched.due_date == datetime(2026, 3, 1, 10, 0, tzinfo=UTC)
