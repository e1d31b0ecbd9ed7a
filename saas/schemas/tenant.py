"""Tenant API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from saas.domain.enums import SubscriptionTier


class TenantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    subdomain: str
    name: str
    subscription_tier: SubscriptionTier
    quota_limit: int | None
    is_active: bool
    created_at: datetime | None = None


class TenantUsageResponse(BaseModel):
    """Quota usage for the current tenant. nearing_quota is true from 80% usage."""

    model_config = ConfigDict(from_attributes=True)

    tenant_id: str
    project_count: int
    task_count: int
    total_usage: int
    quota_limit: int | None
    subscription_tier: SubscriptionTier
    usage_percentage: float
    quota_exceeded: bool
    nearing_quota: bool
