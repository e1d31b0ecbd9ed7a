"""Domain exceptions for the SaaS platform.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. The HTTP layer
maps them to responses by ``error_code`` in exception handlers.
"""

from typing import Any


class SaasException(Exception):
    """Base exception for all platform errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Error envelope used by every JSON error response."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(SaasException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidSubdomainException(SaasException):
    """Raised when a subdomain breaks the naming rules or is reserved."""

    def __init__(self, subdomain: str, reason: str) -> None:
        super().__init__(
            f"Invalid subdomain '{subdomain}': {reason}",
            "INVALID_SUBDOMAIN",
            {"subdomain": subdomain, "reason": reason},
        )


class TenantSubdomainRequiredException(SaasException):
    """Raised when a non-public request carries no tenant signal."""

    def __init__(self) -> None:
        super().__init__("Tenant subdomain required", "TENANT_SUBDOMAIN_REQUIRED")


class TenantNotFoundException(SaasException):
    """Raised when no tenant matches the given subdomain or id."""

    def __init__(self, subdomain: str | None = None, tenant_id: str | None = None) -> None:
        details: dict[str, Any] = {}
        if subdomain is not None:
            details["subdomain"] = subdomain
        if tenant_id is not None:
            details["tenant_id"] = tenant_id
        super().__init__("Tenant not found", "TENANT_NOT_FOUND", details)


class TenantInactiveException(SaasException):
    """Raised when the resolved tenant account is deactivated."""

    def __init__(self, subdomain: str) -> None:
        super().__init__(
            "Tenant account is inactive",
            "TENANT_INACTIVE",
            {"subdomain": subdomain},
        )


class TenantContextNotSetException(SaasException):
    """Raised when a tenant-scoped operation runs without a tenant in context.

    This is a wiring error (missing middleware or scope), not a client error.
    """

    def __init__(self) -> None:
        super().__init__("Tenant context not set", "TENANT_CONTEXT_NOT_SET")


class QuotaExceededException(SaasException):
    """Raised when a creation would exceed the tenant's subscription quota."""

    def __init__(
        self, tenant_id: str, resource: str, current_usage: int, limit: int
    ) -> None:
        self.tenant_id = tenant_id
        self.resource = resource
        self.current_usage = current_usage
        self.limit = limit
        super().__init__(
            f"Quota exceeded for {resource}: {current_usage}/{limit}. "
            "Please upgrade your subscription.",
            "QUOTA_EXCEEDED",
            {
                "tenant_id": tenant_id,
                "resource": resource,
                "current_usage": current_usage,
                "limit": limit,
            },
        )


class ResourceNotFoundException(SaasException):
    """Raised when a requested resource is not found (or belongs to another tenant)."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class AutomationRuleNotFoundException(ResourceNotFoundException):
    """Raised for a missing rule; cross-tenant access raises the same error."""

    def __init__(self, rule_id: str) -> None:
        super().__init__("Automation rule", rule_id)
        self.error_code = "AUTOMATION_RULE_NOT_FOUND"


class EventBusPublishError(SaasException):
    """Raised by the event bus client when the bus rejects an entry."""

    def __init__(self, reason: str, error_code: str | None = None) -> None:
        super().__init__(
            f"Failed to publish event: {reason}",
            "EVENT_BUS_PUBLISH_FAILED",
            {"reason": reason, "bus_error_code": error_code},
        )
        self.reason = reason
