"""Automation rule and event log API: thin routes delegating to AutomationService.

Static paths (/logs, /count, ...) are declared before /{rule_id} so they are
not captured by it.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from saas.api.v1.dependencies import (
    get_automation_service,
    get_automation_service_for_write,
)
from saas.application.dtos.automation import AutomationRuleCreate, AutomationRuleUpdate
from saas.application.services.automation_service import AutomationService
from saas.core.limiter import limit_writes
from saas.domain.enums import ExecutionStatus
from saas.schemas.automation import (
    AutomationRuleCreateRequest,
    AutomationRuleResponse,
    AutomationRuleToggleRequest,
    AutomationRuleUpdateRequest,
    CountResponse,
)
from saas.schemas.event_log import EventLogResponse, EventLogStatsResponse
from saas.shared.utils.datetime import ensure_utc

router = APIRouter()

ReadService = Annotated[AutomationService, Depends(get_automation_service)]
WriteService = Annotated[AutomationService, Depends(get_automation_service_for_write)]


@router.post("", response_model=AutomationRuleResponse, status_code=201)
@limit_writes
async def create_automation_rule(
    request: Request,
    body: AutomationRuleCreateRequest,
    service: WriteService,
):
    """Create an automation rule for the current tenant."""
    rule = await service.create_rule(AutomationRuleCreate(**body.model_dump()))
    return AutomationRuleResponse.model_validate(rule)


@router.get("", response_model=list[AutomationRuleResponse])
async def list_automation_rules(
    service: ReadService,
    active_only: bool = Query(False),
):
    rules = await (service.get_active_rules() if active_only else service.get_all_rules())
    return [AutomationRuleResponse.model_validate(r) for r in rules]


@router.get("/by-event-type", response_model=list[AutomationRuleResponse])
async def list_rules_by_event_type(
    service: ReadService,
    event_type: str = Query(..., min_length=1, max_length=100),
):
    """Active rules listening to event_type."""
    rules = await service.get_rules_by_event_type(event_type)
    return [AutomationRuleResponse.model_validate(r) for r in rules]


@router.get("/top-executed", response_model=list[AutomationRuleResponse])
async def list_top_executed_rules(
    service: ReadService,
    limit: int = Query(10, ge=1, le=100),
):
    rules = await service.get_top_executed_rules(limit)
    return [AutomationRuleResponse.model_validate(r) for r in rules]


@router.get("/count", response_model=CountResponse)
async def count_automation_rules(service: ReadService):
    return CountResponse(count=await service.count_rules())


@router.get("/logs", response_model=list[EventLogResponse])
async def list_recent_logs(
    service: ReadService,
    limit: int = Query(50, ge=1, le=500),
):
    logs = await service.get_recent_logs(limit)
    return [EventLogResponse.model_validate(e) for e in logs]


@router.get("/logs/failed", response_model=list[EventLogResponse])
async def list_failed_logs(service: ReadService):
    logs = await service.get_failed_logs()
    return [EventLogResponse.model_validate(e) for e in logs]


@router.get("/logs/range", response_model=list[EventLogResponse])
async def list_logs_by_date_range(
    service: ReadService,
    start: datetime = Query(...),
    end: datetime = Query(...),
):
    """Logs created between start and end (inclusive), newest first. Naive times are UTC."""
    logs = await service.get_logs_by_date_range(ensure_utc(start), ensure_utc(end))
    return [EventLogResponse.model_validate(e) for e in logs]


@router.get("/logs/stats", response_model=EventLogStatsResponse)
async def get_log_stats(service: ReadService):
    counts = {s: await service.count_logs_by_status(s) for s in ExecutionStatus}
    return EventLogStatsResponse(
        counts=counts,
        average_execution_duration_ms=await service.get_average_execution_duration(),
    )


@router.get("/{rule_id}", response_model=AutomationRuleResponse)
async def get_automation_rule(rule_id: str, service: ReadService):
    return AutomationRuleResponse.model_validate(await service.get_rule(rule_id))


@router.get("/{rule_id}/logs", response_model=list[EventLogResponse])
async def list_logs_for_rule(rule_id: str, service: ReadService):
    logs = await service.get_logs_for_rule(rule_id)
    return [EventLogResponse.model_validate(e) for e in logs]


@router.put("/{rule_id}", response_model=AutomationRuleResponse)
@limit_writes
async def update_automation_rule(
    request: Request,
    rule_id: str,
    body: AutomationRuleUpdateRequest,
    service: WriteService,
):
    """Partial update: null or omitted fields keep their current value."""
    rule = await service.update_rule(rule_id, AutomationRuleUpdate(**body.model_dump()))
    return AutomationRuleResponse.model_validate(rule)


@router.patch("/{rule_id}/toggle", response_model=AutomationRuleResponse)
@limit_writes
async def toggle_automation_rule(
    request: Request,
    rule_id: str,
    body: AutomationRuleToggleRequest,
    service: WriteService,
):
    rule = await service.toggle_rule_status(rule_id, body.is_active)
    return AutomationRuleResponse.model_validate(rule)


@router.delete("/{rule_id}", status_code=204)
@limit_writes
async def delete_automation_rule(
    request: Request,
    rule_id: str,
    service: WriteService,
):
    await service.delete_rule(rule_id)
    return Response(status_code=204)
