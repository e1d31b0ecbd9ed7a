"""Shared helpers: telemetry and small utilities. No business logic."""

from saas.shared.utils import ensure_utc, generate_cuid, utc_now

__all__ = ["generate_cuid", "utc_now", "ensure_utc"]
