"""Core: config, tenant context, error handling, and application bootstrap."""

from saas.core.config import get_settings

__all__ = ["get_settings"]
