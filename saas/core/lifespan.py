"""Application lifespan: startup and shutdown.

No business logic here, only wiring of infrastructure (event bus client,
DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from saas.core.config import get_settings
from saas.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, EventBridge client (when enabled). Shutdown: SQL
    engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    if settings.eventbridge_enabled:
        from saas.infrastructure.messaging.eventbridge import EventBridgeEventBus

        app.state.event_bus = EventBridgeEventBus(
            bus_name=settings.eventbridge_bus_name,
            source=settings.eventbridge_source,
            region=settings.eventbridge_region,
            endpoint_url=settings.eventbridge_endpoint_url,
        )
        logger.info("EventBridge dispatch enabled (bus %s)", settings.eventbridge_bus_name)
    else:
        app.state.event_bus = None
        logger.info("EventBridge dispatch disabled; events are logged locally only")

    yield

    # ---- Shutdown ----
    app.state.event_bus = None

    from saas.infrastructure.persistence import database

    await database.dispose_engine()
