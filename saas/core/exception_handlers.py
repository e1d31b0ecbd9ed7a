"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to the JSON error envelope {"error", "message", "details"}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from saas.core.config import get_settings
from saas.domain.exceptions import SaasException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "INVALID_SUBDOMAIN": 400,
    "TENANT_SUBDOMAIN_REQUIRED": 400,
    "QUOTA_EXCEEDED": 402,
    "TENANT_INACTIVE": 403,
    "TENANT_NOT_FOUND": 404,
    "RESOURCE_NOT_FOUND": 404,
    "AUTOMATION_RULE_NOT_FOUND": 404,
    "TENANT_CONTEXT_NOT_SET": 500,
    "EVENT_BUS_PUBLISH_FAILED": 502,
}


def status_for_exception(exc: SaasException) -> int:
    """HTTP status for a domain exception (400 when the code is unmapped)."""
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def render_saas_exception(exc: SaasException) -> JSONResponse:
    """Build the JSON error response for a domain exception.

    Also used by the tenant middleware, whose exceptions never reach the
    app-level handlers.
    """
    status = status_for_exception(exc)
    if status >= 500:
        logger.error("%s: %s", exc.error_code, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _saas_exception_handler(request: Request, exc: SaasException) -> JSONResponse:
    return render_saas_exception(exc)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": {"errors": exc.errors()},
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail, "details": {}},
    )


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={
            "error": "RATE_LIMITED",
            "message": f"Rate limit exceeded: {exc.detail}",
            "details": {},
        },
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail, "details": {}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: SaasException (and
    subclasses), RequestValidationError, RateLimitExceeded,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(SaasException, _saas_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
