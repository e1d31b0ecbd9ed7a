"""Subdomain rules shared by tenant creation and the request resolver."""

import re

from saas.domain.exceptions import InvalidSubdomainException

SUBDOMAIN_MIN_LENGTH = 3
SUBDOMAIN_MAX_LENGTH = 63
_SUBDOMAIN_RE = re.compile(r"^[a-z0-9-]{3,63}$")

RESERVED_SUBDOMAINS = frozenset({
    "www", "api", "admin", "app", "platform", "mail", "email", "support",
    "help", "docs", "blog", "status", "cdn", "assets", "static", "ftp",
    "smtp", "pop", "imap", "webmail", "portal", "dashboard",
})


def normalize_subdomain(value: str | None) -> str | None:
    """Lowercase and trim; empty strings become None."""
    if value is None:
        return None
    value = value.strip().lower()
    return value or None


def validate_subdomain(value: str) -> str:
    """Return the normalized subdomain or raise InvalidSubdomainException."""
    subdomain = normalize_subdomain(value) or ""
    if not SUBDOMAIN_MIN_LENGTH <= len(subdomain) <= SUBDOMAIN_MAX_LENGTH:
        raise InvalidSubdomainException(
            value,
            f"must be between {SUBDOMAIN_MIN_LENGTH} and {SUBDOMAIN_MAX_LENGTH} characters",
        )
    if not _SUBDOMAIN_RE.fullmatch(subdomain):
        raise InvalidSubdomainException(
            value, "may contain only lowercase letters, digits, and hyphens"
        )
    if subdomain.startswith("-") or subdomain.endswith("-"):
        raise InvalidSubdomainException(value, "cannot start or end with a hyphen")
    if subdomain in RESERVED_SUBDOMAINS:
        raise InvalidSubdomainException(value, "is reserved")
    return subdomain


def is_valid_subdomain(value: str) -> bool:
    try:
        validate_subdomain(value)
    except InvalidSubdomainException:
        return False
    return True
