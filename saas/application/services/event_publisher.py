"""Domain event publishing: local EventLog plus best-effort external bus dispatch.

publish() never raises. A bus failure downgrades the log row to FAILED; a
failed log insert is followed by one attempt to store a FAILED record
describing that failure.
"""

from __future__ import annotations

import json
import logging
import numbers
import time
import traceback
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from saas.application.dtos.event_log import EventLogCreate, truncate_stack_trace
from saas.domain.enums import ExecutionStatus
from saas.shared.telemetry.tracing import add_span_attributes, set_span_error, traced
from saas.shared.utils.datetime import elapsed_ms, utc_now

if TYPE_CHECKING:
    from saas.application.interfaces.repositories import IEventLogRepository
    from saas.application.interfaces.services import IEventBus

logger = logging.getLogger(__name__)


def encode_payload_value(value: Any) -> str | int | float | bool | None:
    """Primitives keep their JSON type; anything else is sent as str(value).

    Other numeric types (Decimal, Fraction) are sent unquoted: as int when
    integral, float otherwise.
    """
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, numbers.Number):
        try:
            if value == int(value):
                return int(value)
            return float(value)
        except (TypeError, ValueError, OverflowError):
            # complex, NaN/Infinity Decimals
            return str(value)
    return str(value)


def encode_payload(payload: dict[str, Any] | None) -> dict[str, Any]:
    return {str(k): encode_payload_value(v) for k, v in (payload or {}).items()}


def build_event_detail(
    tenant_id: str,
    resource_id: str | None,
    resource_type: str | None,
    payload: dict[str, Any] | None,
) -> str:
    """JSON envelope sent as the bus entry's Detail."""
    return json.dumps(
        {
            "tenantId": tenant_id,
            "resourceId": resource_id,
            "resourceType": resource_type,
            "payload": encode_payload(payload),
        }
    )


def format_stack_trace(exc: BaseException) -> str | None:
    return truncate_stack_trace(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )


def _failure_reason(exc: BaseException) -> str:
    return getattr(exc, "reason", None) or str(exc) or type(exc).__name__


class EventPublisher:
    """Implements IEventPublisher. Holds only injected collaborators; safe to share."""

    def __init__(
        self,
        event_log_repo: IEventLogRepository,
        event_bus: IEventBus | None = None,
    ) -> None:
        """Initialize the publisher.

        Args:
            event_log_repo: Where the local record is appended.
            event_bus: External bus; None disables external dispatch.
        """
        self.event_log_repo = event_log_repo
        self.event_bus = event_bus

    @property
    def dispatch_enabled(self) -> bool:
        return self.event_bus is not None

    async def publish(
        self,
        tenant_id: str,
        event_type: str,
        resource_id: str | None,
        resource_type: str | None,
        payload: dict[str, Any] | None,
    ) -> None:
        try:
            await self._publish(tenant_id, event_type, resource_id, resource_type, payload)
        except Exception:
            logger.exception(
                "Unexpected error publishing %s for tenant %s; event dropped",
                event_type,
                tenant_id,
            )

    async def _publish(
        self,
        tenant_id: str,
        event_type: str,
        resource_id: str | None,
        resource_type: str | None,
        payload: dict[str, Any] | None,
    ) -> None:
        started = time.monotonic()
        draft = EventLogCreate(
            tenant_id=tenant_id,
            event_type=event_type,
            status=ExecutionStatus.NO_RULES_MATCHED,
            resource_id=resource_id,
            resource_type=resource_type,
            event_payload=encode_payload(payload),
        )
        if self.event_bus is not None:
            draft = await self._dispatch(draft, payload)
        draft = replace(draft, execution_duration_ms=elapsed_ms(started))

        try:
            await self.event_log_repo.create_log(draft)
        except Exception as e:
            logger.error(
                "Failed to save event log for %s (tenant %s): %s", event_type, tenant_id, e
            )
            await self._save_failure_record(draft, e)

    @traced("event_bus.dispatch")
    async def _dispatch(
        self, draft: EventLogCreate, payload: dict[str, Any] | None
    ) -> EventLogCreate:
        """Send to the bus; on any failure return the draft downgraded to FAILED."""
        if self.event_bus is None:
            return draft
        add_span_attributes(
            **{"event.type": draft.event_type, "tenant.id": draft.tenant_id}
        )
        detail = build_event_detail(
            draft.tenant_id, draft.resource_id, draft.resource_type, payload
        )
        try:
            await self.event_bus.put_event(draft.event_type, detail, utc_now())
        except Exception as e:
            set_span_error(e)
            logger.error(
                "Failed to publish %s to event bus for tenant %s: %s",
                draft.event_type,
                draft.tenant_id,
                _failure_reason(e),
            )
            return replace(
                draft,
                status=ExecutionStatus.FAILED,
                error_message=_failure_reason(e),
                error_stack_trace=format_stack_trace(e),
            )
        logger.info("Published %s for tenant %s", draft.event_type, draft.tenant_id)
        return draft

    async def _save_failure_record(self, draft: EventLogCreate, error: Exception) -> None:
        record = replace(
            draft,
            status=ExecutionStatus.FAILED,
            error_message=f"Failed to save event log: {_failure_reason(error)}",
            error_stack_trace=format_stack_trace(error),
        )
        try:
            await self.event_log_repo.create_log(record)
        except Exception as e:
            logger.error(
                "Failed to save error record for %s (tenant %s): %s",
                draft.event_type,
                draft.tenant_id,
                e,
            )
