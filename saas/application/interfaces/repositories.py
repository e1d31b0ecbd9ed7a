"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill.
All types reference application DTOs only; no infrastructure imports.
Every tenant-owned query takes tenant_id explicitly, except the id-only rule
lookup which the automation service tenant-checks itself.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

from saas.domain.enums import ExecutionStatus

if TYPE_CHECKING:
    from saas.application.dtos.automation import (
        AutomationRuleCreate,
        AutomationRuleResult,
    )
    from saas.application.dtos.event_log import EventLogCreate, EventLogResult
    from saas.application.dtos.project import ProjectCreate, ProjectResult
    from saas.application.dtos.task import TaskCreate, TaskResult
    from saas.application.dtos.tenant import TenantCreate, TenantResult


class ITenantRepository(Protocol):
    async def get_by_id(self, tenant_id: str) -> TenantResult | None:
        """Return tenant by id."""

    async def get_by_id_for_update(self, tenant_id: str) -> TenantResult | None:
        """Return tenant by id, locking the row until the transaction ends."""

    async def get_by_subdomain(self, subdomain: str) -> TenantResult | None:
        """Return tenant by (normalized) subdomain."""

    async def create_tenant(self, data: TenantCreate) -> TenantResult:
        """Insert a tenant; quota_limit already resolved by the caller."""


class IProjectRepository(Protocol):
    async def create_project(self, tenant_id: str, data: ProjectCreate) -> ProjectResult: ...

    async def get_by_id_and_tenant(
        self, project_id: str, tenant_id: str
    ) -> ProjectResult | None: ...

    async def get_by_tenant(
        self, tenant_id: str, skip: int = 0, limit: int = 100, status: str | None = None
    ) -> list[ProjectResult]: ...

    async def update_project(
        self, project_id: str, tenant_id: str, changes: dict[str, Any]
    ) -> ProjectResult | None: ...

    async def delete_project(self, project_id: str, tenant_id: str) -> bool: ...

    async def count_by_tenant(self, tenant_id: str) -> int: ...


class ITaskRepository(Protocol):
    async def create_task(self, tenant_id: str, data: TaskCreate) -> TaskResult: ...

    async def get_by_id_and_tenant(self, task_id: str, tenant_id: str) -> TaskResult | None: ...

    async def get_by_tenant(
        self,
        tenant_id: str,
        skip: int = 0,
        limit: int = 100,
        project_id: str | None = None,
        status: str | None = None,
    ) -> list[TaskResult]: ...

    async def update_task(
        self, task_id: str, tenant_id: str, changes: dict[str, Any]
    ) -> TaskResult | None: ...

    async def delete_task(self, task_id: str, tenant_id: str) -> bool: ...

    async def count_by_tenant(self, tenant_id: str) -> int: ...


class IAutomationRuleRepository(Protocol):
    async def create_rule(
        self, tenant_id: str, data: AutomationRuleCreate
    ) -> AutomationRuleResult:
        """Insert a rule; is_active/execution_count defaults already applied."""

    async def get_by_id(self, rule_id: str) -> AutomationRuleResult | None:
        """Id-only lookup; caller must verify tenant ownership."""

    async def get_by_tenant(self, tenant_id: str) -> list[AutomationRuleResult]: ...

    async def get_active_by_tenant(self, tenant_id: str) -> list[AutomationRuleResult]: ...

    async def get_active_by_event_type(
        self, tenant_id: str, event_type: str
    ) -> list[AutomationRuleResult]: ...

    async def get_top_executed(
        self, tenant_id: str, limit: int
    ) -> list[AutomationRuleResult]: ...

    async def count_by_tenant(self, tenant_id: str) -> int: ...

    async def update_rule(
        self, rule_id: str, changes: dict[str, Any]
    ) -> AutomationRuleResult | None: ...

    async def delete_rule(self, rule_id: str) -> bool: ...

    async def record_execution(
        self, rule_id: str, executed_at: datetime
    ) -> AutomationRuleResult | None:
        """Increment execution_count and set last_executed_at."""


class IEventLogRepository(Protocol):
    async def create_log(self, data: EventLogCreate) -> EventLogResult:
        """Append a log row inside a savepoint of the current transaction."""

    async def get_recent(self, tenant_id: str, limit: int) -> list[EventLogResult]: ...

    async def get_by_rule(self, tenant_id: str, rule_id: str) -> list[EventLogResult]: ...

    async def get_by_status(
        self, tenant_id: str, status: ExecutionStatus
    ) -> list[EventLogResult]:
        """Newest first."""

    async def get_by_date_range(
        self, tenant_id: str, start: datetime, end: datetime
    ) -> list[EventLogResult]:
        """Inclusive on both ends, newest first."""

    async def count_by_status(self, tenant_id: str, status: ExecutionStatus) -> int: ...

    async def average_duration(self, tenant_id: str) -> float | None:
        """AVG(execution_duration_ms) over rows where it is set; None when none."""
