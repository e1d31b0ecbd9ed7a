"""Request-scoped tenant context.

The middleware installs the resolved tenant here for the duration of one
request and clears it in ``finally``. Services receive a
:class:`TenantContextProvider` through their constructor instead of reading
module globals, so tests and scripts can pass a :class:`FixedTenantContext`.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from saas.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TenantIdentity:
    tenant_id: str
    subdomain: str | None = None


# Task-local under asyncio; asyncio.to_thread copies it into worker threads.
_current_tenant: ContextVar[TenantIdentity | None] = ContextVar(
    "current_tenant", default=None
)


@runtime_checkable
class TenantContextProvider(Protocol):
    """Holder of the tenant active for the current unit of work."""

    def set(self, tenant_id: str | None, subdomain: str | None = None) -> None: ...

    def get_tenant_id(self) -> str | None: ...

    def get_subdomain(self) -> str | None: ...

    def is_set(self) -> bool: ...

    def clear(self) -> None: ...


class RequestTenantContext:
    """ContextVar-backed provider; each request task sees only its own tenant."""

    def set(self, tenant_id: str | None, subdomain: str | None = None) -> None:
        if not tenant_id:
            logger.warning("Attempted to set empty tenant id in context; ignored")
            return
        _current_tenant.set(TenantIdentity(tenant_id=tenant_id, subdomain=subdomain))
        logger.debug("Tenant context set: %s (%s)", tenant_id, subdomain)

    def get_tenant_id(self) -> str | None:
        identity = _current_tenant.get()
        return identity.tenant_id if identity else None

    def get_subdomain(self) -> str | None:
        identity = _current_tenant.get()
        return identity.subdomain if identity else None

    def is_set(self) -> bool:
        return _current_tenant.get() is not None

    def clear(self) -> None:
        _current_tenant.set(None)


class FixedTenantContext:
    """Plain in-memory provider for tests, scripts, and background jobs."""

    def __init__(self, tenant_id: str | None = None, subdomain: str | None = None) -> None:
        self._identity: TenantIdentity | None = None
        if tenant_id:
            self._identity = TenantIdentity(tenant_id=tenant_id, subdomain=subdomain)

    def set(self, tenant_id: str | None, subdomain: str | None = None) -> None:
        if not tenant_id:
            logger.warning("Attempted to set empty tenant id in context; ignored")
            return
        self._identity = TenantIdentity(tenant_id=tenant_id, subdomain=subdomain)

    def get_tenant_id(self) -> str | None:
        return self._identity.tenant_id if self._identity else None

    def get_subdomain(self) -> str | None:
        return self._identity.subdomain if self._identity else None

    def is_set(self) -> bool:
        return self._identity is not None

    def clear(self) -> None:
        self._identity = None


request_tenant_context = RequestTenantContext()


@contextmanager
def tenant_scope(
    context: TenantContextProvider, tenant_id: str, subdomain: str | None = None
) -> Iterator[TenantContextProvider]:
    """Run a block with ``tenant_id`` active, clearing the context afterwards."""
    context.set(tenant_id, subdomain)
    try:
        yield context
    finally:
        context.clear()
