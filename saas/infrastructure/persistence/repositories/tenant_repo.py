"""Tenant repository. Returns application DTOs."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from saas.application.dtos.tenant import TenantCreate, TenantResult
from saas.domain.enums import SubscriptionTier
from saas.infrastructure.persistence.models.tenant import Tenant
from saas.infrastructure.persistence.repositories.base import BaseRepository
from saas.shared.utils.datetime import ensure_utc


def _tenant_to_result(t: Tenant) -> TenantResult:
    """Map ORM Tenant to application TenantResult."""
    return TenantResult(
        id=t.id,
        subdomain=t.subdomain,
        name=t.name,
        subscription_tier=SubscriptionTier(t.subscription_tier),
        quota_limit=t.quota_limit,
        is_active=t.is_active,
        created_at=ensure_utc(t.created_at),
        updated_at=ensure_utc(t.updated_at),
    )


class TenantRepository(BaseRepository[Tenant]):
    """Tenant repository. Implements ITenantRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Tenant)

    async def get_by_id(self, tenant_id: str) -> TenantResult | None:
        tenant = await self._get(tenant_id)
        return _tenant_to_result(tenant) if tenant else None

    async def get_by_id_for_update(self, tenant_id: str) -> TenantResult | None:
        """SELECT ... FOR UPDATE (no-op lock on SQLite)."""
        result = await self.db.execute(
            select(Tenant).where(Tenant.id == tenant_id).with_for_update()
        )
        tenant = result.scalar_one_or_none()
        return _tenant_to_result(tenant) if tenant else None

    async def get_by_subdomain(self, subdomain: str) -> TenantResult | None:
        result = await self.db.execute(
            select(Tenant).where(Tenant.subdomain == subdomain.strip().lower())
        )
        tenant = result.scalar_one_or_none()
        return _tenant_to_result(tenant) if tenant else None

    async def create_tenant(self, data: TenantCreate) -> TenantResult:
        tenant = Tenant(
            subdomain=data.subdomain,
            name=data.name,
            subscription_tier=data.subscription_tier.value,
            quota_limit=data.quota_limit,
            is_active=data.is_active,
        )
        return _tenant_to_result(await self._add(tenant))

    async def set_active(self, tenant_id: str, is_active: bool) -> TenantResult | None:
        tenant = await self._get(tenant_id)
        if tenant is None:
            return None
        return _tenant_to_result(await self._apply(tenant, {"is_active": is_active}))
