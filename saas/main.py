"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here. See saas.core.lifespan and saas.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
optionally clear get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from saas.api.v1 import api_router
from saas.application.interfaces.services import TenantLookup
from saas.core.config import get_settings
from saas.core.exception_handlers import register_exception_handlers
from saas.core.lifespan import create_lifespan
from saas.core.limiter import limiter
from saas.middleware import TenantContextMiddleware


def create_app(tenant_lookup: TenantLookup | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        tenant_lookup: Override for the middleware's by-subdomain tenant lookup
            (defaults to a database query).
    """
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.state.event_bus = None
    register_exception_handlers(app)

    # Middleware: first added = innermost. CORS wraps the tenant filter so
    # preflight and error responses carry CORS headers.
    app.add_middleware(TenantContextMiddleware, tenant_lookup=tenant_lookup)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
