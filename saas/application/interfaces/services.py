"""Service interfaces (ports) for the application layer."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from saas.application.dtos.tenant import TenantResult, TenantUsage


class IEventBus(Protocol):
    """External event bus (EventBridge in production)."""

    async def put_event(self, detail_type: str, detail: str, time: datetime) -> None:
        """Send one entry. Raises on transport failure or a rejected entry."""


class IEventPublisher(Protocol):
    async def publish(
        self,
        tenant_id: str,
        event_type: str,
        resource_id: str | None,
        resource_type: str | None,
        payload: dict[str, Any] | None,
    ) -> None:
        """Record (and optionally forward) a domain event. Never raises."""


class IQuotaEnforcer(Protocol):
    async def enforce(self, tenant_id: str) -> None:
        """Raise QuotaExceededException when the tenant is at or over its quota."""

    async def get_usage(self, tenant_id: str) -> TenantUsage: ...


class TenantLookup(Protocol):
    """Single by-subdomain lookup used by the request resolver."""

    async def __call__(self, subdomain: str) -> TenantResult | None: ...
