"""Shared telemetry: logging setup and tracing helpers."""

from saas.shared.telemetry.logging import get_logger, setup_logging
from saas.shared.telemetry.tracing import add_span_attributes, set_span_error, traced

__all__ = [
    "setup_logging",
    "get_logger",
    "traced",
    "add_span_attributes",
    "set_span_error",
]
