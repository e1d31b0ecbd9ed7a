"""AutomationRule repository.

get_by_id, update_rule, and delete_rule are id-only: AutomationService checks
tenant ownership so a foreign rule and a missing rule look the same.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from saas.application.dtos.automation import AutomationRuleCreate, AutomationRuleResult
from saas.infrastructure.persistence.models.automation_rule import AutomationRule
from saas.infrastructure.persistence.repositories.base import BaseRepository
from saas.shared.utils.datetime import ensure_utc


def _rule_to_result(r: AutomationRule) -> AutomationRuleResult:
    return AutomationRuleResult(
        id=r.id,
        tenant_id=r.tenant_id,
        name=r.name,
        description=r.description,
        event_type=r.event_type,
        action_type=r.action_type,
        conditions=dict(r.conditions or {}),
        action_config=dict(r.action_config or {}),
        is_active=r.is_active,
        execution_count=r.execution_count,
        last_executed_at=ensure_utc(r.last_executed_at),
        created_by=r.created_by,
        created_at=ensure_utc(r.created_at),
        updated_at=ensure_utc(r.updated_at),
    )


class AutomationRuleRepository(BaseRepository[AutomationRule]):
    """Automation rule repository. Implements IAutomationRuleRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, AutomationRule)

    async def create_rule(
        self, tenant_id: str, data: AutomationRuleCreate
    ) -> AutomationRuleResult:
        rule = AutomationRule(
            tenant_id=tenant_id,
            name=data.name,
            description=data.description,
            event_type=data.event_type,
            action_type=data.action_type,
            conditions=dict(data.conditions),
            action_config=dict(data.action_config),
            is_active=data.is_active,
            execution_count=data.execution_count,
            created_by=data.created_by,
        )
        return _rule_to_result(await self._add(rule))

    async def get_by_id(self, rule_id: str) -> AutomationRuleResult | None:
        rule = await self._get(rule_id)
        return _rule_to_result(rule) if rule else None

    async def _list(self, *criteria: Any, order_by: Any = None, limit: int | None = None):
        stmt = select(AutomationRule).where(*criteria)
        stmt = stmt.order_by(
            order_by if order_by is not None else AutomationRule.created_at.desc()
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return [_rule_to_result(r) for r in result.scalars().all()]

    async def get_by_tenant(self, tenant_id: str) -> list[AutomationRuleResult]:
        return await self._list(AutomationRule.tenant_id == tenant_id)

    async def get_active_by_tenant(self, tenant_id: str) -> list[AutomationRuleResult]:
        return await self._list(
            AutomationRule.tenant_id == tenant_id, AutomationRule.is_active.is_(True)
        )

    async def get_active_by_event_type(
        self, tenant_id: str, event_type: str
    ) -> list[AutomationRuleResult]:
        return await self._list(
            AutomationRule.tenant_id == tenant_id,
            AutomationRule.event_type == event_type,
            AutomationRule.is_active.is_(True),
        )

    async def get_top_executed(
        self, tenant_id: str, limit: int
    ) -> list[AutomationRuleResult]:
        return await self._list(
            AutomationRule.tenant_id == tenant_id,
            order_by=AutomationRule.execution_count.desc(),
            limit=limit,
        )

    async def count_by_tenant(self, tenant_id: str) -> int:
        return await self._count_where(AutomationRule.tenant_id == tenant_id)

    async def update_rule(
        self, rule_id: str, changes: dict[str, Any]
    ) -> AutomationRuleResult | None:
        rule = await self._get(rule_id)
        if rule is None:
            return None
        return _rule_to_result(await self._apply(rule, changes))

    async def delete_rule(self, rule_id: str) -> bool:
        return await self._delete_where(AutomationRule.id == rule_id)

    async def record_execution(
        self, rule_id: str, executed_at: datetime
    ) -> AutomationRuleResult | None:
        rule = await self._get(rule_id)
        if rule is None:
            return None
        return _rule_to_result(
            await self._apply(
                rule,
                {
                    "execution_count": (rule.execution_count or 0) + 1,
                    "last_executed_at": executed_at,
                },
            )
        )
