"""Logging configuration for the application."""

import logging
import sys

from saas.core.config import get_settings

# botocore is chatty at DEBUG (full request signing); keep it at WARNING.
_NOISY_LOGGERS = ("botocore", "boto3", "urllib3", "aiosqlite")


def setup_logging() -> None:
    """Configure application-wide logging.

    Level comes from settings.log_level, forced to DEBUG when settings.debug
    is True. Output goes to stdout.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else getattr(
        logging, settings.log_level.upper(), logging.INFO
    )
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name (usually __name__)."""
    return logging.getLogger(name)
