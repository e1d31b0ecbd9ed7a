"""Tenant-isolated automation rules and event log queries.

Every operation reads the tenant from the injected TenantContextProvider.
A rule owned by another tenant is reported exactly like a missing rule.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Any

from saas.application.dtos.event_log import EventLogCreate, EventLogResult
from saas.domain.enums import ExecutionStatus
from saas.domain.exceptions import (
    AutomationRuleNotFoundException,
    TenantContextNotSetException,
    ValidationException,
)
from saas.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from saas.application.dtos.automation import (
        AutomationRuleCreate,
        AutomationRuleResult,
        AutomationRuleUpdate,
    )
    from saas.application.interfaces.repositories import (
        IAutomationRuleRepository,
        IEventLogRepository,
    )
    from saas.core.tenant_context import TenantContextProvider

logger = logging.getLogger(__name__)

DEFAULT_RECENT_LOGS_LIMIT = 50
DEFAULT_TOP_RULES_LIMIT = 10


def conditions_match(conditions: dict[str, Any] | None, payload: dict[str, Any] | None) -> bool:
    """True when every condition key equals the payload value (empty conditions match)."""
    if not conditions:
        return True
    data = payload or {}
    for key, expected in conditions.items():
        if key not in data or data[key] != expected:
            return False
    return True


class AutomationService:
    """CRUD over automation rules plus log queries and execution bookkeeping."""

    def __init__(
        self,
        rule_repo: IAutomationRuleRepository,
        event_log_repo: IEventLogRepository,
        tenant_context: TenantContextProvider,
    ) -> None:
        self.rule_repo = rule_repo
        self.event_log_repo = event_log_repo
        self.tenant_context = tenant_context

    def _require_tenant(self) -> str:
        tenant_id = self.tenant_context.get_tenant_id()
        if not tenant_id:
            raise TenantContextNotSetException()
        return tenant_id

    async def _owned_rule(self, rule_id: str, tenant_id: str) -> AutomationRuleResult:
        rule = await self.rule_repo.get_by_id(rule_id)
        if rule is None or rule.tenant_id != tenant_id:
            if rule is not None:
                logger.warning(
                    "Tenant %s attempted to access rule %s of another tenant",
                    tenant_id,
                    rule_id,
                )
            raise AutomationRuleNotFoundException(rule_id)
        return rule

    # ---- Rules ----

    async def create_rule(self, data: AutomationRuleCreate) -> AutomationRuleResult:
        """Create a rule for the current tenant; is_active/execution_count default only when unset."""
        tenant_id = self._require_tenant()
        data = replace(
            data,
            is_active=True if data.is_active is None else data.is_active,
            execution_count=0 if data.execution_count is None else data.execution_count,
        )
        rule = await self.rule_repo.create_rule(tenant_id, data)
        logger.info("Created automation rule %s for tenant %s", rule.id, tenant_id)
        return rule

    async def get_rule(self, rule_id: str) -> AutomationRuleResult:
        return await self._owned_rule(rule_id, self._require_tenant())

    async def get_all_rules(self) -> list[AutomationRuleResult]:
        return await self.rule_repo.get_by_tenant(self._require_tenant())

    async def get_active_rules(self) -> list[AutomationRuleResult]:
        return await self.rule_repo.get_active_by_tenant(self._require_tenant())

    async def get_rules_by_event_type(self, event_type: str) -> list[AutomationRuleResult]:
        """Active rules only."""
        return await self.rule_repo.get_active_by_event_type(
            self._require_tenant(), event_type
        )

    async def get_top_executed_rules(
        self, limit: int = DEFAULT_TOP_RULES_LIMIT
    ) -> list[AutomationRuleResult]:
        if limit < 1:
            raise ValidationException("limit must be positive", field="limit")
        return await self.rule_repo.get_top_executed(self._require_tenant(), limit)

    async def update_rule(
        self, rule_id: str, patch: AutomationRuleUpdate
    ) -> AutomationRuleResult:
        """Overwrite only the non-None patch fields."""
        tenant_id = self._require_tenant()
        rule = await self._owned_rule(rule_id, tenant_id)
        changes = patch.changes()
        if not changes:
            return rule
        updated = await self.rule_repo.update_rule(rule_id, changes)
        if updated is None:
            raise AutomationRuleNotFoundException(rule_id)
        logger.info("Updated automation rule %s (%s)", rule_id, ", ".join(sorted(changes)))
        return updated

    async def delete_rule(self, rule_id: str) -> None:
        tenant_id = self._require_tenant()
        await self._owned_rule(rule_id, tenant_id)
        await self.rule_repo.delete_rule(rule_id)
        logger.info("Deleted automation rule %s for tenant %s", rule_id, tenant_id)

    async def toggle_rule_status(self, rule_id: str, is_active: bool) -> AutomationRuleResult:
        tenant_id = self._require_tenant()
        await self._owned_rule(rule_id, tenant_id)
        updated = await self.rule_repo.update_rule(rule_id, {"is_active": is_active})
        if updated is None:
            raise AutomationRuleNotFoundException(rule_id)
        logger.info("Rule %s %s", rule_id, "activated" if is_active else "deactivated")
        return updated

    async def count_rules(self) -> int:
        return await self.rule_repo.count_by_tenant(self._require_tenant())

    # ---- Event logs ----

    async def get_recent_logs(self, limit: int = DEFAULT_RECENT_LOGS_LIMIT) -> list[EventLogResult]:
        if limit < 1:
            raise ValidationException("limit must be positive", field="limit")
        return await self.event_log_repo.get_recent(self._require_tenant(), limit)

    async def get_logs_for_rule(self, rule_id: str) -> list[EventLogResult]:
        tenant_id = self._require_tenant()
        await self._owned_rule(rule_id, tenant_id)
        return await self.event_log_repo.get_by_rule(tenant_id, rule_id)

    async def get_failed_logs(self) -> list[EventLogResult]:
        return await self.event_log_repo.get_by_status(
            self._require_tenant(), ExecutionStatus.FAILED
        )

    async def get_logs_by_date_range(
        self, start: datetime, end: datetime
    ) -> list[EventLogResult]:
        """Inclusive range, newest first."""
        if start > end:
            raise ValidationException("start must not be after end", field="start")
        return await self.event_log_repo.get_by_date_range(self._require_tenant(), start, end)

    async def count_logs_by_status(self, status: ExecutionStatus) -> int:
        return await self.event_log_repo.count_by_status(self._require_tenant(), status)

    async def get_average_execution_duration(self) -> float:
        """Mean duration in ms over logs that recorded one; 0.0 when there are none."""
        average = await self.event_log_repo.average_duration(self._require_tenant())
        return average if average is not None else 0.0

    # ---- Execution bookkeeping ----

    async def match_rules(
        self, event_type: str, payload: dict[str, Any] | None = None
    ) -> list[AutomationRuleResult]:
        """Active rules for event_type whose conditions equal the payload's values."""
        rules = await self.get_rules_by_event_type(event_type)
        return [r for r in rules if conditions_match(r.conditions, payload)]

    async def record_execution(
        self,
        rule_id: str,
        event_type: str,
        status: ExecutionStatus,
        duration_ms: int,
        *,
        resource_id: str | None = None,
        resource_type: str | None = None,
        event_payload: dict[str, Any] | None = None,
        action_result: dict[str, Any] | None = None,
        error_message: str | None = None,
    ) -> EventLogResult:
        """Count one execution of the rule and append a log row linked to it."""
        if duration_ms < 0:
            raise ValidationException("duration_ms must not be negative", field="duration_ms")
        tenant_id = self._require_tenant()
        rule = await self._owned_rule(rule_id, tenant_id)
        await self.rule_repo.record_execution(rule_id, utc_now())
        return await self.event_log_repo.create_log(
            EventLogCreate(
                tenant_id=tenant_id,
                event_type=event_type,
                status=status,
                automation_rule_id=rule_id,
                action_type=rule.action_type,
                resource_id=resource_id,
                resource_type=resource_type,
                event_payload=event_payload,
                action_result=action_result,
                execution_duration_ms=duration_ms,
                error_message=error_message,
            )
        )
