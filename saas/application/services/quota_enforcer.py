"""Combined projects+tasks quota against the tenant's subscription tier."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from saas.application.dtos.tenant import TenantUsage
from saas.domain.exceptions import QuotaExceededException, TenantNotFoundException
from saas.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from saas.application.dtos.tenant import TenantResult
    from saas.application.interfaces.repositories import (
        IProjectRepository,
        ITaskRepository,
        ITenantRepository,
    )

logger = logging.getLogger(__name__)

QUOTA_RESOURCE = "projects+tasks"
NEARING_QUOTA_PERCENT = 80.0


class QuotaEnforcer:
    """Checks usage before creations. Implements IQuotaEnforcer.

    With serialize_creators the tenant row is locked (SELECT ... FOR UPDATE)
    for the rest of the caller's transaction, so two creators for the same
    tenant cannot both pass the check at quota_limit - 1.
    """

    def __init__(
        self,
        tenant_repo: ITenantRepository,
        project_repo: IProjectRepository,
        task_repo: ITaskRepository,
        *,
        serialize_creators: bool = True,
    ) -> None:
        self.tenant_repo = tenant_repo
        self.project_repo = project_repo
        self.task_repo = task_repo
        self.serialize_creators = serialize_creators

    async def _load_tenant(self, tenant_id: str, *, lock: bool) -> TenantResult:
        if lock:
            tenant = await self.tenant_repo.get_by_id_for_update(tenant_id)
        else:
            tenant = await self.tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundException(tenant_id=tenant_id)
        return tenant

    async def _current_usage(self, tenant_id: str) -> tuple[int, int]:
        projects = await self.project_repo.count_by_tenant(tenant_id)
        tasks = await self.task_repo.count_by_tenant(tenant_id)
        return projects, tasks

    @traced("quota.enforce")
    async def enforce(self, tenant_id: str) -> None:
        """Raise QuotaExceededException when usage >= quota_limit. Unlimited tiers never fail."""
        tenant = await self._load_tenant(tenant_id, lock=self.serialize_creators)
        if tenant.quota_limit is None:
            return
        projects, tasks = await self._current_usage(tenant_id)
        usage = projects + tasks
        add_span_attributes(**{"quota.usage": usage, "quota.limit": tenant.quota_limit})
        if usage >= tenant.quota_limit:
            logger.warning(
                "Quota exceeded for tenant %s: %d/%d", tenant_id, usage, tenant.quota_limit
            )
            raise QuotaExceededException(tenant_id, QUOTA_RESOURCE, usage, tenant.quota_limit)

    async def get_usage(self, tenant_id: str) -> TenantUsage:
        tenant = await self._load_tenant(tenant_id, lock=False)
        projects, tasks = await self._current_usage(tenant_id)
        total = projects + tasks
        limit = tenant.quota_limit
        if limit is None:
            percentage = 0.0
        elif limit == 0:
            percentage = 100.0
        else:
            percentage = round(total * 100.0 / limit, 2)
        return TenantUsage(
            tenant_id=tenant.id,
            project_count=projects,
            task_count=tasks,
            total_usage=total,
            quota_limit=limit,
            subscription_tier=tenant.subscription_tier,
            usage_percentage=percentage,
            quota_exceeded=limit is not None and total >= limit,
            nearing_quota=limit is not None and percentage >= NEARING_QUOTA_PERCENT,
        )
