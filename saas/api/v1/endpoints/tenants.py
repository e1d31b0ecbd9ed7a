"""Current-tenant API. The tenant comes from the request context, never from the URL."""

from typing import Annotated

from fastapi import APIRouter, Depends

from saas.api.v1.dependencies import (
    get_current_tenant_id,
    get_quota_enforcer,
    get_tenant_service,
)
from saas.application.services.quota_enforcer import QuotaEnforcer
from saas.application.services.tenant_service import TenantService
from saas.schemas.tenant import TenantResponse, TenantUsageResponse

router = APIRouter()


@router.get("/current", response_model=TenantResponse)
async def get_current_tenant(
    tenant_id: Annotated[str, Depends(get_current_tenant_id)],
    service: Annotated[TenantService, Depends(get_tenant_service)],
):
    return TenantResponse.model_validate(await service.get_tenant(tenant_id))


@router.get("/current/usage", response_model=TenantUsageResponse)
async def get_current_tenant_usage(
    tenant_id: Annotated[str, Depends(get_current_tenant_id)],
    quota: Annotated[QuotaEnforcer, Depends(get_quota_enforcer)],
):
    """Projects+tasks usage against the subscription quota."""
    return TenantUsageResponse.model_validate(await quota.get_usage(tenant_id))
