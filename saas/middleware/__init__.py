"""HTTP middleware. Applied in saas.main; the last one added runs outermost."""

from saas.middleware.tenant_context import TenantContextMiddleware

__all__ = ["TenantContextMiddleware"]
