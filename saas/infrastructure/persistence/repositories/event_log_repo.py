"""EventLog repository. Append-only: no update or delete methods."""

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from saas.application.dtos.event_log import EventLogCreate, EventLogResult
from saas.domain.enums import ExecutionStatus
from saas.infrastructure.persistence.models.event_log import EventLog
from saas.infrastructure.persistence.repositories.base import BaseRepository
from saas.shared.utils.datetime import ensure_utc


def _log_to_result(e: EventLog) -> EventLogResult:
    return EventLogResult(
        id=e.id,
        tenant_id=e.tenant_id,
        automation_rule_id=e.automation_rule_id,
        event_type=e.event_type,
        action_type=e.action_type,
        resource_id=e.resource_id,
        resource_type=e.resource_type,
        event_payload=e.event_payload,
        action_result=e.action_result,
        status=ExecutionStatus(e.status),
        execution_duration_ms=e.execution_duration_ms,
        error_message=e.error_message,
        error_stack_trace=e.error_stack_trace,
        created_at=ensure_utc(e.created_at),
    )


class EventLogRepository(BaseRepository[EventLog]):
    """Event log repository. Implements IEventLogRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, EventLog)

    async def create_log(self, data: EventLogCreate) -> EventLogResult:
        """Insert inside a SAVEPOINT.

        A failed insert rolls back to the savepoint only, leaving the caller's
        business writes in the enclosing transaction intact.
        """
        log = EventLog(
            tenant_id=data.tenant_id,
            automation_rule_id=data.automation_rule_id,
            event_type=data.event_type,
            action_type=data.action_type,
            resource_id=data.resource_id,
            resource_type=data.resource_type,
            event_payload=data.event_payload,
            action_result=data.action_result,
            status=data.status.value,
            execution_duration_ms=data.execution_duration_ms,
            error_message=data.error_message,
            error_stack_trace=data.error_stack_trace,
        )
        async with self.db.begin_nested():
            self.db.add(log)
            await self.db.flush()
        await self.db.refresh(log)
        return _log_to_result(log)

    async def _list(self, stmt) -> list[EventLogResult]:
        result = await self.db.execute(stmt)
        return [_log_to_result(e) for e in result.scalars().all()]

    async def get_recent(self, tenant_id: str, limit: int) -> list[EventLogResult]:
        return await self._list(
            select(EventLog)
            .where(EventLog.tenant_id == tenant_id)
            .order_by(EventLog.created_at.desc())
            .limit(limit)
        )

    async def get_by_rule(self, tenant_id: str, rule_id: str) -> list[EventLogResult]:
        return await self._list(
            select(EventLog)
            .where(EventLog.tenant_id == tenant_id, EventLog.automation_rule_id == rule_id)
            .order_by(EventLog.created_at.desc())
        )

    async def get_by_status(
        self, tenant_id: str, status: ExecutionStatus
    ) -> list[EventLogResult]:
        return await self._list(
            select(EventLog)
            .where(EventLog.tenant_id == tenant_id, EventLog.status == status.value)
            .order_by(EventLog.created_at.desc())
        )

    async def get_by_date_range(
        self, tenant_id: str, start: datetime, end: datetime
    ) -> list[EventLogResult]:
        return await self._list(
            select(EventLog)
            .where(
                EventLog.tenant_id == tenant_id,
                EventLog.created_at.between(start, end),
            )
            .order_by(EventLog.created_at.desc())
        )

    async def count_by_status(self, tenant_id: str, status: ExecutionStatus) -> int:
        return await self._count_where(
            EventLog.tenant_id == tenant_id, EventLog.status == status.value
        )

    async def average_duration(self, tenant_id: str) -> float | None:
        result = await self.db.execute(
            select(func.avg(EventLog.execution_duration_ms)).where(
                EventLog.tenant_id == tenant_id,
                EventLog.execution_duration_ms.is_not(None),
            )
        )
        value = result.scalar_one_or_none()
        return float(value) if value is not None else None
