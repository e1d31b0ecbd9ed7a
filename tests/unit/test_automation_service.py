"""Tests for AutomationService (tenant isolation, partial updates, log queries)."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from saas.application.dtos.automation import (
    AutomationRuleCreate,
    AutomationRuleResult,
    AutomationRuleUpdate,
)
from saas.application.services.automation_service import AutomationService, conditions_match
from saas.core.tenant_context import FixedTenantContext
from saas.domain.enums import ExecutionStatus
from saas.domain.exceptions import (
    AutomationRuleNotFoundException,
    TenantContextNotSetException,
    ValidationException,
)


def make_rule(
    rule_id: str = "rule-1",
    tenant_id: str = "tenant-a",
    *,
    is_active: bool = True,
    conditions: dict | None = None,
    **overrides,
) -> AutomationRuleResult:
    values = {
        "id": rule_id,
        "tenant_id": tenant_id,
        "name": "Notify on done",
        "description": None,
        "event_type": "task.status.changed",
        "action_type": "send_email",
        "conditions": conditions or {},
        "action_config": {"to": "ops@example.com"},
        "is_active": is_active,
        "execution_count": 0,
        "last_executed_at": None,
        "created_by": None,
    }
    values.update(overrides)
    return AutomationRuleResult(**values)


@pytest.fixture
def rule_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def log_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def context() -> FixedTenantContext:
    return FixedTenantContext("tenant-a", "acme")


@pytest.fixture
def service(
    rule_repo: AsyncMock, log_repo: AsyncMock, context: FixedTenantContext
) -> AutomationService:
    return AutomationService(rule_repo, log_repo, context)


async def test_create_rule_applies_defaults(
    service: AutomationService, rule_repo: AsyncMock
) -> None:
    rule_repo.create_rule.return_value = make_rule()
    await service.create_rule(
        AutomationRuleCreate(name="r", event_type="task.created", action_type="webhook")
    )
    tenant_id, data = rule_repo.create_rule.await_args.args
    assert tenant_id == "tenant-a"
    assert data.is_active is True
    assert data.execution_count == 0


async def test_create_rule_keeps_explicit_values(
    service: AutomationService, rule_repo: AsyncMock
) -> None:
    await service.create_rule(
        AutomationRuleCreate(
            name="r",
            event_type="task.created",
            action_type="webhook",
            is_active=False,
            execution_count=7,
        )
    )
    _, data = rule_repo.create_rule.await_args.args
    assert data.is_active is False
    assert data.execution_count == 7


async def test_operations_require_tenant_context(
    rule_repo: AsyncMock, log_repo: AsyncMock
) -> None:
    service = AutomationService(rule_repo, log_repo, FixedTenantContext())
    with pytest.raises(TenantContextNotSetException):
        await service.get_all_rules()
    with pytest.raises(TenantContextNotSetException):
        await service.create_rule(
            AutomationRuleCreate(name="r", event_type="task.created", action_type="x")
        )
    rule_repo.create_rule.assert_not_awaited()


async def test_foreign_rule_looks_like_missing_rule(
    service: AutomationService, rule_repo: AsyncMock
) -> None:
    rule_repo.get_by_id.return_value = make_rule(tenant_id="tenant-b")
    with pytest.raises(AutomationRuleNotFoundException) as foreign:
        await service.get_rule("rule-1")

    rule_repo.get_by_id.return_value = None
    with pytest.raises(AutomationRuleNotFoundException) as missing:
        await service.get_rule("rule-1")

    assert foreign.value.to_dict() == missing.value.to_dict()


@pytest.mark.parametrize(
    "operation",
    [
        lambda s: s.update_rule("rule-1", AutomationRuleUpdate(name="x")),
        lambda s: s.delete_rule("rule-1"),
        lambda s: s.toggle_rule_status("rule-1", False),
        lambda s: s.get_logs_for_rule("rule-1"),
        lambda s: s.record_execution("rule-1", "task.created", ExecutionStatus.SUCCESS, 5),
    ],
)
async def test_foreign_rule_is_never_modified(
    service: AutomationService, rule_repo: AsyncMock, log_repo: AsyncMock, operation
) -> None:
    rule_repo.get_by_id.return_value = make_rule(tenant_id="tenant-b")
    with pytest.raises(AutomationRuleNotFoundException):
        await operation(service)
    rule_repo.update_rule.assert_not_awaited()
    rule_repo.delete_rule.assert_not_awaited()
    rule_repo.record_execution.assert_not_awaited()
    log_repo.create_log.assert_not_awaited()
    log_repo.get_by_rule.assert_not_awaited()


async def test_update_rule_sends_only_non_null_fields(
    service: AutomationService, rule_repo: AsyncMock
) -> None:
    rule_repo.get_by_id.return_value = make_rule()
    rule_repo.update_rule.return_value = make_rule(is_active=False)
    await service.update_rule("rule-1", AutomationRuleUpdate(is_active=False))
    rule_repo.update_rule.assert_awaited_once_with("rule-1", {"is_active": False})


async def test_update_rule_with_empty_patch_returns_current(
    service: AutomationService, rule_repo: AsyncMock
) -> None:
    current = make_rule()
    rule_repo.get_by_id.return_value = current
    assert await service.update_rule("rule-1", AutomationRuleUpdate()) == current
    rule_repo.update_rule.assert_not_awaited()


async def test_toggle_rule_status_round_trip(
    service: AutomationService, rule_repo: AsyncMock
) -> None:
    rule_repo.get_by_id.return_value = make_rule()
    rule_repo.update_rule.side_effect = [make_rule(is_active=False), make_rule(is_active=True)]
    assert (await service.toggle_rule_status("rule-1", False)).is_active is False
    assert (await service.toggle_rule_status("rule-1", True)).is_active is True
    assert [c.args for c in rule_repo.update_rule.await_args_list] == [
        ("rule-1", {"is_active": False}),
        ("rule-1", {"is_active": True}),
    ]


async def test_delete_rule(service: AutomationService, rule_repo: AsyncMock) -> None:
    rule_repo.get_by_id.return_value = make_rule()
    await service.delete_rule("rule-1")
    rule_repo.delete_rule.assert_awaited_once_with("rule-1")


async def test_rules_by_event_type_reads_active_rules(
    service: AutomationService, rule_repo: AsyncMock
) -> None:
    rule_repo.get_active_by_event_type.return_value = [make_rule()]
    rules = await service.get_rules_by_event_type("task.status.changed")
    assert len(rules) == 1
    rule_repo.get_active_by_event_type.assert_awaited_once_with(
        "tenant-a", "task.status.changed"
    )


async def test_top_executed_rejects_non_positive_limit(service: AutomationService) -> None:
    with pytest.raises(ValidationException):
        await service.get_top_executed_rules(0)


async def test_average_duration_defaults_to_zero(
    service: AutomationService, log_repo: AsyncMock
) -> None:
    log_repo.average_duration.return_value = None
    assert await service.get_average_execution_duration() == 0.0
    log_repo.average_duration.return_value = 12.5
    assert await service.get_average_execution_duration() == 12.5


async def test_failed_logs_filter_by_status(
    service: AutomationService, log_repo: AsyncMock
) -> None:
    await service.get_failed_logs()
    log_repo.get_by_status.assert_awaited_once_with("tenant-a", ExecutionStatus.FAILED)


async def test_date_range_rejects_inverted_bounds(
    service: AutomationService, log_repo: AsyncMock
) -> None:
    now = datetime.now(UTC)
    with pytest.raises(ValidationException):
        await service.get_logs_by_date_range(now, now - timedelta(hours=1))
    log_repo.get_by_date_range.assert_not_awaited()


def test_conditions_match() -> None:
    assert conditions_match({}, {"status": "DONE"})
    assert conditions_match(None, None)
    assert conditions_match({"status": "DONE"}, {"status": "DONE", "name": "x"})
    assert not conditions_match({"status": "DONE"}, {"status": "TODO"})
    assert not conditions_match({"status": "DONE"}, {})
    assert not conditions_match({"priority": None}, {})


async def test_match_rules_filters_by_conditions(
    service: AutomationService, rule_repo: AsyncMock
) -> None:
    done = make_rule("rule-done", conditions={"newStatus": "COMPLETED"})
    anything = make_rule("rule-any")
    rule_repo.get_active_by_event_type.return_value = [done, anything]

    matched = await service.match_rules("task.status.changed", {"newStatus": "BLOCKED"})
    assert [r.id for r in matched] == ["rule-any"]


async def test_record_execution_counts_and_logs(
    service: AutomationService, rule_repo: AsyncMock, log_repo: AsyncMock
) -> None:
    rule_repo.get_by_id.return_value = make_rule()
    await service.record_execution(
        "rule-1",
        "task.status.changed",
        ExecutionStatus.SUCCESS,
        42,
        resource_id="task-1",
        resource_type="task",
        action_result={"sent": True},
    )
    rule_id, executed_at = rule_repo.record_execution.await_args.args
    assert rule_id == "rule-1"
    assert executed_at.tzinfo is not None
    record = log_repo.create_log.await_args.args[0]
    assert record.tenant_id == "tenant-a"
    assert record.automation_rule_id == "rule-1"
    assert record.action_type == "send_email"
    assert record.status == ExecutionStatus.SUCCESS
    assert record.execution_duration_ms == 42


async def test_record_execution_rejects_negative_duration(service: AutomationService) -> None:
    with pytest.raises(ValidationException):
        await service.record_execution(
            "rule-1", "task.created", ExecutionStatus.FAILED, -1
        )
