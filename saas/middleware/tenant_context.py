"""Tenant context middleware.

Resolves the tenant for each request (X-Tenant-Subdomain header or Host
subdomain), installs it in the request tenant context for the downstream
pipeline, and always clears it afterwards. Resolution failures are rendered
here because exceptions raised in BaseHTTPMiddleware never reach the app's
exception handlers.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from saas.application.services.tenant_resolver import TenantResolver
from saas.core.config import get_settings
from saas.core.exception_handlers import render_saas_exception
from saas.core.tenant_context import TenantContextProvider, request_tenant_context
from saas.domain.exceptions import SaasException

if TYPE_CHECKING:
    from saas.application.dtos.tenant import TenantResult
    from saas.application.interfaces.services import TenantLookup

logger = logging.getLogger(__name__)


async def lookup_tenant_by_subdomain(subdomain: str) -> TenantResult | None:
    """Default lookup: one short-lived read session per request."""
    from saas.infrastructure.persistence.database import get_session_factory
    from saas.infrastructure.persistence.repositories.tenant_repo import TenantRepository

    async with get_session_factory()() as session:
        return await TenantRepository(session).get_by_subdomain(subdomain)


def build_tenant_resolver(lookup: TenantLookup | None = None) -> TenantResolver:
    """Resolver configured from settings."""
    settings = get_settings()
    return TenantResolver(
        lookup or lookup_tenant_by_subdomain,
        header_name=settings.tenant_subdomain_header,
        public_paths=settings.public_paths,
        static_path_prefixes=settings.static_path_prefixes,
        static_extensions=settings.static_extensions,
    )


class TenantContextMiddleware(BaseHTTPMiddleware):
    """Set tenant context before the route runs; clear it when the request ends."""

    def __init__(
        self,
        app: ASGIApp,
        resolver: TenantResolver | None = None,
        tenant_lookup: TenantLookup | None = None,
        context: TenantContextProvider = request_tenant_context,
    ) -> None:
        super().__init__(app)
        self.resolver = resolver or build_tenant_resolver(tenant_lookup)
        self.context = context

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if self.resolver.is_static(path):
            return await call_next(request)

        try:
            tenant = await self.resolver.resolve(path, request.headers)
        except SaasException as exc:
            return render_saas_exception(exc)

        if tenant is None:
            return await call_next(request)

        request.state.tenant = tenant
        self.context.set(tenant.id, tenant.subdomain)
        try:
            return await call_next(request)
        finally:
            self.context.clear()
