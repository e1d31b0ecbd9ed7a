"""Tests for QuotaEnforcer (combined projects+tasks quota)."""

from unittest.mock import AsyncMock

import pytest

from saas.application.dtos.tenant import TenantResult
from saas.application.services.quota_enforcer import QUOTA_RESOURCE, QuotaEnforcer
from saas.domain.enums import SubscriptionTier
from saas.domain.exceptions import QuotaExceededException, TenantNotFoundException


def make_tenant(tier: SubscriptionTier, quota_limit: int | None) -> TenantResult:
    return TenantResult(
        id="tenant-1",
        subdomain="acme",
        name="Acme",
        subscription_tier=tier,
        quota_limit=quota_limit,
        is_active=True,
    )


def make_enforcer(
    tenant: TenantResult | None,
    projects: int,
    tasks: int,
    *,
    serialize_creators: bool = True,
) -> tuple[QuotaEnforcer, AsyncMock]:
    tenant_repo = AsyncMock()
    tenant_repo.get_by_id.return_value = tenant
    tenant_repo.get_by_id_for_update.return_value = tenant
    project_repo = AsyncMock()
    project_repo.count_by_tenant.return_value = projects
    task_repo = AsyncMock()
    task_repo.count_by_tenant.return_value = tasks
    enforcer = QuotaEnforcer(
        tenant_repo, project_repo, task_repo, serialize_creators=serialize_creators
    )
    return enforcer, tenant_repo


async def test_enforce_passes_below_limit() -> None:
    enforcer, _ = make_enforcer(make_tenant(SubscriptionTier.FREE, 50), 20, 29)
    await enforcer.enforce("tenant-1")


async def test_enforce_fails_at_limit() -> None:
    enforcer, _ = make_enforcer(make_tenant(SubscriptionTier.FREE, 50), 20, 30)
    with pytest.raises(QuotaExceededException) as exc_info:
        await enforcer.enforce("tenant-1")
    exc = exc_info.value
    assert exc.error_code == "QUOTA_EXCEEDED"
    assert exc.tenant_id == "tenant-1"
    assert exc.resource == QUOTA_RESOURCE
    assert exc.current_usage == 50
    assert exc.limit == 50
    assert "upgrade" in exc.message.lower()


async def test_enforce_unlimited_tier_never_fails() -> None:
    enforcer, _ = make_enforcer(make_tenant(SubscriptionTier.ENTERPRISE, None), 10_000, 10_000)
    await enforcer.enforce("tenant-1")


async def test_enforce_zero_quota_blocks_first_creation() -> None:
    enforcer, _ = make_enforcer(make_tenant(SubscriptionTier.FREE, 0), 0, 0)
    with pytest.raises(QuotaExceededException):
        await enforcer.enforce("tenant-1")


async def test_enforce_locks_tenant_row_when_serializing() -> None:
    enforcer, tenant_repo = make_enforcer(make_tenant(SubscriptionTier.FREE, 50), 0, 0)
    await enforcer.enforce("tenant-1")
    tenant_repo.get_by_id_for_update.assert_awaited_once_with("tenant-1")
    tenant_repo.get_by_id.assert_not_awaited()


async def test_enforce_without_serialization_uses_plain_read() -> None:
    enforcer, tenant_repo = make_enforcer(
        make_tenant(SubscriptionTier.FREE, 50), 0, 0, serialize_creators=False
    )
    await enforcer.enforce("tenant-1")
    tenant_repo.get_by_id.assert_awaited_once_with("tenant-1")
    tenant_repo.get_by_id_for_update.assert_not_awaited()


async def test_enforce_unknown_tenant_raises() -> None:
    enforcer, _ = make_enforcer(None, 0, 0)
    with pytest.raises(TenantNotFoundException):
        await enforcer.enforce("missing")


async def test_get_usage_reports_counts_and_flags() -> None:
    enforcer, _ = make_enforcer(make_tenant(SubscriptionTier.FREE, 50), 15, 26)
    usage = await enforcer.get_usage("tenant-1")
    assert usage.project_count == 15
    assert usage.task_count == 26
    assert usage.total_usage == 41
    assert usage.quota_limit == 50
    assert usage.usage_percentage == 82.0
    assert usage.nearing_quota is True
    assert usage.quota_exceeded is False
    assert usage.subscription_tier == SubscriptionTier.FREE


async def test_get_usage_unlimited() -> None:
    enforcer, _ = make_enforcer(make_tenant(SubscriptionTier.ENTERPRISE, None), 3, 4)
    usage = await enforcer.get_usage("tenant-1")
    assert usage.quota_limit is None
    assert usage.usage_percentage == 0.0
    assert usage.nearing_quota is False
    assert usage.quota_exceeded is False


async def test_get_usage_zero_quota_is_full() -> None:
    enforcer, _ = make_enforcer(make_tenant(SubscriptionTier.FREE, 0), 0, 0)
    usage = await enforcer.get_usage("tenant-1")
    assert usage.usage_percentage == 100.0
    assert usage.quota_exceeded is True
