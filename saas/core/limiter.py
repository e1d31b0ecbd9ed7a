"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance. Write limits are counted per tenant, falling back to client address
for requests without tenant context.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from saas.core.config import get_settings
from saas.core.tenant_context import request_tenant_context


def tenant_rate_limit_key(request: Request) -> str:
    tenant_id = request_tenant_context.get_tenant_id()
    if tenant_id:
        return f"tenant:{tenant_id}"
    return get_remote_address(request)


def _write_limit() -> str:
    return get_settings().write_rate_limit


limiter = Limiter(key_func=tenant_rate_limit_key)

limit_writes = limiter.limit(_write_limit)
