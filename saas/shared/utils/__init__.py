"""Shared utilities: datetime and id generators."""

from saas.shared.utils.datetime import elapsed_ms, ensure_utc, utc_now
from saas.shared.utils.generators import generate_cuid

__all__ = ["generate_cuid", "utc_now", "ensure_utc", "elapsed_ms"]
