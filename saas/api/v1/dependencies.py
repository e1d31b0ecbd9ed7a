"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions and application services. Read
routes get a plain session (get_db); write routes get one transaction per
request (get_db_transactional) shared by the quota check, the mutation, and
the event log, so all three commit or roll back together.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from saas.application.interfaces.services import IEventBus
from saas.application.services.automation_service import AutomationService
from saas.application.services.event_publisher import EventPublisher
from saas.application.services.quota_enforcer import QuotaEnforcer
from saas.application.services.tenant_service import TenantService
from saas.application.use_cases.projects import ProjectService
from saas.application.use_cases.tasks import TaskService
from saas.core.config import get_settings
from saas.core.tenant_context import TenantContextProvider, request_tenant_context
from saas.domain.exceptions import TenantContextNotSetException
from saas.infrastructure.persistence.database import get_db, get_db_transactional
from saas.infrastructure.persistence.repositories import (
    AutomationRuleRepository,
    EventLogRepository,
    ProjectRepository,
    TaskRepository,
    TenantRepository,
)


def get_tenant_context() -> TenantContextProvider:
    return request_tenant_context


async def get_current_tenant_id(
    context: Annotated[TenantContextProvider, Depends(get_tenant_context)],
) -> str:
    """Tenant installed by TenantContextMiddleware; missing means a wiring error."""
    tenant_id = context.get_tenant_id()
    if not tenant_id:
        raise TenantContextNotSetException()
    return tenant_id


def get_event_bus(request: Request) -> IEventBus | None:
    """EventBridge client created in lifespan; None when dispatch is disabled."""
    return getattr(request.app.state, "event_bus", None)


def _quota_enforcer(db: AsyncSession) -> QuotaEnforcer:
    return QuotaEnforcer(
        TenantRepository(db),
        ProjectRepository(db),
        TaskRepository(db),
        serialize_creators=get_settings().quota_serialize_creators,
    )


# ---- Automations ----


async def get_automation_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Annotated[TenantContextProvider, Depends(get_tenant_context)],
) -> AutomationService:
    return AutomationService(AutomationRuleRepository(db), EventLogRepository(db), context)


async def get_automation_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    context: Annotated[TenantContextProvider, Depends(get_tenant_context)],
) -> AutomationService:
    return AutomationService(AutomationRuleRepository(db), EventLogRepository(db), context)


# ---- Projects and tasks ----


def _project_service(
    db: AsyncSession, context: TenantContextProvider, event_bus: IEventBus | None
) -> ProjectService:
    return ProjectService(
        ProjectRepository(db),
        _quota_enforcer(db),
        EventPublisher(EventLogRepository(db), event_bus),
        context,
    )


def _task_service(
    db: AsyncSession, context: TenantContextProvider, event_bus: IEventBus | None
) -> TaskService:
    return TaskService(
        TaskRepository(db),
        ProjectRepository(db),
        _quota_enforcer(db),
        EventPublisher(EventLogRepository(db), event_bus),
        context,
    )


async def get_project_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Annotated[TenantContextProvider, Depends(get_tenant_context)],
) -> ProjectService:
    return _project_service(db, context, None)


async def get_project_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    context: Annotated[TenantContextProvider, Depends(get_tenant_context)],
    event_bus: Annotated[IEventBus | None, Depends(get_event_bus)],
) -> ProjectService:
    return _project_service(db, context, event_bus)


async def get_task_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Annotated[TenantContextProvider, Depends(get_tenant_context)],
) -> TaskService:
    return _task_service(db, context, None)


async def get_task_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    context: Annotated[TenantContextProvider, Depends(get_tenant_context)],
    event_bus: Annotated[IEventBus | None, Depends(get_event_bus)],
) -> TaskService:
    return _task_service(db, context, event_bus)


# ---- Tenants ----


async def get_tenant_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TenantService:
    return TenantService(TenantRepository(db))


async def get_quota_enforcer(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> QuotaEnforcer:
    return _quota_enforcer(db)
