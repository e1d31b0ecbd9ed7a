"""DTOs for tenants and quota usage (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from saas.domain.enums import SubscriptionTier


@dataclass(frozen=True)
class TenantCreate:
    """Input for creating a tenant. quota_limit None means "use the tier default"."""

    subdomain: str
    name: str
    subscription_tier: SubscriptionTier = SubscriptionTier.FREE
    quota_limit: int | None = None
    is_active: bool = True


@dataclass(frozen=True)
class TenantResult:
    """Tenant read-model."""

    id: str
    subdomain: str
    name: str
    subscription_tier: SubscriptionTier
    quota_limit: int | None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class TenantUsage:
    """Combined projects+tasks usage against the tenant's quota."""

    tenant_id: str
    project_count: int
    task_count: int
    total_usage: int
    quota_limit: int | None
    subscription_tier: SubscriptionTier
    usage_percentage: float
    quota_exceeded: bool
    nearing_quota: bool
