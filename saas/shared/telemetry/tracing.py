"""Utility functions and decorators for distributed tracing.

Only opentelemetry-api is used here; spans are no-ops unless the host process
installs an SDK tracer provider.
"""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

# Only these kwarg names become span attributes; payloads never do.
_SAFE_SPAN_ATTR_KEYS = frozenset({
    "tenant_id", "rule_id", "project_id", "task_id", "event_type",
    "resource_id", "resource_type", "status", "limit", "is_active",
})


def _set_safe_span_attrs(span: trace.Span, kwargs: dict) -> None:
    for key, value in kwargs.items():
        if key in _SAFE_SPAN_ATTR_KEYS and value is not None:
            span.set_attribute(f"arg.{key}", str(value))


def traced(
    operation_name: str | None = None,
    attributes: dict | None = None,
) -> Callable:
    """Decorator to run a coroutine function inside a span.

    Args:
        operation_name: Span name (defaults to module.funcname).
        attributes: Optional static attributes for the span.
    """

    def decorator(func: Callable) -> Callable:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"traced() expects a coroutine function, got {func!r}")
        tracer = trace.get_tracer(__name__)
        span_name = operation_name or f"{func.__module__}.{func.__name__}"

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(span_name) as span:
                for key, value in (attributes or {}).items():
                    span.set_attribute(key, value)
                _set_safe_span_attrs(span, kwargs)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span."""
    span = trace.get_current_span()
    if span and span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)


def set_span_error(exception: BaseException) -> None:
    """Mark the current span as error and record the exception."""
    span = trace.get_current_span()
    if span and span.is_recording():
        span.set_status(Status(StatusCode.ERROR, str(exception)))
        span.record_exception(exception)
