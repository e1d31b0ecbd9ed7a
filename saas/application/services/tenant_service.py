"""Tenant provisioning: subdomain rules and tier quota defaults."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from saas.core.tenant_validation import validate_subdomain
from saas.domain.exceptions import InvalidSubdomainException, TenantNotFoundException

if TYPE_CHECKING:
    from saas.application.dtos.tenant import TenantCreate, TenantResult
    from saas.application.interfaces.repositories import ITenantRepository

logger = logging.getLogger(__name__)


class TenantService:
    def __init__(self, tenant_repo: ITenantRepository) -> None:
        self.tenant_repo = tenant_repo

    async def create_tenant(self, data: TenantCreate) -> TenantResult:
        """Validate the subdomain and fill quota_limit from the tier when not given.

        An explicit quota_limit is kept as-is.
        """
        subdomain = validate_subdomain(data.subdomain)
        if await self.tenant_repo.get_by_subdomain(subdomain) is not None:
            raise InvalidSubdomainException(subdomain, "is already taken")
        quota = (
            data.quota_limit
            if data.quota_limit is not None
            else data.subscription_tier.default_quota
        )
        tenant = await self.tenant_repo.create_tenant(
            replace(data, subdomain=subdomain, quota_limit=quota)
        )
        logger.info(
            "Created tenant %s (%s, tier %s)",
            tenant.id,
            subdomain,
            tenant.subscription_tier.value,
        )
        return tenant

    async def get_tenant(self, tenant_id: str) -> TenantResult:
        tenant = await self.tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundException(tenant_id=tenant_id)
        return tenant
