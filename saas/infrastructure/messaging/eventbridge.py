"""AWS EventBridge event bus client.

Uses boto3 (sync) via asyncio.to_thread for the async API. One entry per call;
no retries here, the caller decides what a failure means.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any

import boto3

from saas.domain.exceptions import EventBusPublishError

logger = logging.getLogger(__name__)


class EventBridgeEventBus:
    """Sends domain events to an EventBridge bus. Implements IEventBus."""

    def __init__(
        self,
        bus_name: str,
        source: str = "com.platform.saas",
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        client: Any = None,
    ) -> None:
        """Initialize the bus client.

        Args:
            bus_name: EventBridge bus name or ARN.
            source: Source field stamped on every entry.
            region: AWS region.
            endpoint_url: Custom endpoint (LocalStack).
            client: Prebuilt boto3 "events" client; built from region/endpoint when None.
        """
        self.bus_name = bus_name
        self.source = source
        if client is None:
            extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
            client = boto3.client("events", region_name=region, **extra)
        self._client = client

    def build_entry(self, detail_type: str, detail: str, time: datetime) -> dict[str, Any]:
        return {
            "EventBusName": self.bus_name,
            "Source": self.source,
            "DetailType": detail_type,
            "Detail": detail,
            "Time": time,
        }

    async def put_event(self, detail_type: str, detail: str, time: datetime) -> None:
        """Send one entry; raise EventBusPublishError when the bus rejects it.

        botocore ClientError and connection errors propagate unchanged.
        """
        entry = self.build_entry(detail_type, detail, time)

        def _put() -> dict[str, Any]:
            return self._client.put_events(Entries=[entry])

        response = await asyncio.to_thread(_put)
        if response.get("FailedEntryCount", 0) > 0:
            entries = response.get("Entries") or [{}]
            first = entries[0]
            reason = first.get("ErrorMessage") or "unknown error"
            raise EventBusPublishError(reason, first.get("ErrorCode"))
        logger.debug(
            "Event %s sent to bus %s (%s)",
            detail_type,
            self.bus_name,
            (response.get("Entries") or [{}])[0].get("EventId"),
        )
