"""Resolve the tenant for an inbound request from its headers and path.

Pure decision logic; TenantContextMiddleware installs the result in the
request context. Resolution failures are raised as domain exceptions.
"""

from __future__ import annotations

import ipaddress
import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from saas.core.tenant_validation import normalize_subdomain
from saas.domain.exceptions import (
    TenantInactiveException,
    TenantNotFoundException,
    TenantSubdomainRequiredException,
)

if TYPE_CHECKING:
    from saas.application.dtos.tenant import TenantResult
    from saas.application.interfaces.services import TenantLookup

logger = logging.getLogger(__name__)


def _strip_port(host: str) -> str:
    if host.startswith("["):
        # Bracketed IPv6 literal, with or without port
        return host[1 : host.find("]")] if "]" in host else host[1:]
    if host.count(":") == 1:
        return host.split(":", 1)[0]
    return host


def _is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def subdomain_from_host(host: str | None) -> str | None:
    """First label of a multi-label Host header, or None when the host carries no tenant.

    "acme.platform.com:8080" -> "acme"; localhost, IP literals, and *.local -> None.
    """
    if not host:
        return None
    hostname = _strip_port(host.strip().lower())
    if not hostname or _is_ip_literal(hostname):
        return None
    if hostname == "localhost" or hostname.endswith(".local"):
        return None
    parts = hostname.split(".")
    if len(parts) < 2:
        return None
    return normalize_subdomain(parts[0])


class TenantResolver:
    """Decide, per request, which tenant (if any) the request belongs to."""

    def __init__(
        self,
        lookup: TenantLookup,
        *,
        header_name: str = "X-Tenant-Subdomain",
        public_paths: Iterable[str] = (),
        static_path_prefixes: Iterable[str] = ("/static", "/public"),
        static_extensions: Iterable[str] = (".js", ".css", ".ico"),
    ) -> None:
        self.lookup = lookup
        self.header_name = header_name.lower()
        self.public_paths = tuple(public_paths)
        self.static_path_prefixes = tuple(static_path_prefixes)
        self.static_extensions = tuple(static_extensions)

    def is_static(self, path: str) -> bool:
        return path.startswith(self.static_path_prefixes) or path.endswith(
            self.static_extensions
        )

    def is_public(self, path: str) -> bool:
        """Exact match or a sub-path of a public prefix ("/docs/x", not "/docsx")."""
        return any(path == p or path.startswith(p.rstrip("/") + "/") for p in self.public_paths)

    def extract_subdomain(self, headers: Mapping[str, str]) -> str | None:
        """Explicit header wins; otherwise derive from Host."""
        explicit = normalize_subdomain(headers.get(self.header_name))
        if explicit:
            return explicit
        return subdomain_from_host(headers.get("host"))

    async def resolve(self, path: str, headers: Mapping[str, str]) -> TenantResult | None:
        """Return the active tenant, or None to proceed without tenant context.

        Raises:
            TenantSubdomainRequiredException: no tenant signal on a protected path.
            TenantNotFoundException: unknown subdomain on a protected path.
            TenantInactiveException: tenant exists but is deactivated (any path).
        """
        public = self.is_public(path)
        subdomain = self.extract_subdomain(headers)
        if subdomain is None:
            if public:
                return None
            logger.warning("No tenant subdomain for protected path %s", path)
            raise TenantSubdomainRequiredException()

        tenant = await self.lookup(subdomain)
        if tenant is None:
            if public:
                return None
            logger.warning("Tenant not found for subdomain %s", subdomain)
            raise TenantNotFoundException(subdomain=subdomain)
        if not tenant.is_active:
            logger.warning("Inactive tenant %s attempted access to %s", subdomain, path)
            raise TenantInactiveException(subdomain)
        return tenant
