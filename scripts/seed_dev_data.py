"""Seed dev data from scripts/seed-data.json into the database.

Creates tenants (by subdomain; skipped if present), then for each tenant its
projects, tasks, and automation rules through the same services the API uses,
so quota checks and event logs apply.

Usage:
    python -m scripts.seed_dev_data [path/to/seed-data.json]

Requires: DATABASE_URL and a migrated database (alembic upgrade head).
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from saas.application.dtos.automation import AutomationRuleCreate
from saas.application.dtos.project import ProjectCreate
from saas.application.dtos.task import TaskCreate
from saas.application.dtos.tenant import TenantCreate
from saas.application.services.automation_service import AutomationService
from saas.application.services.event_publisher import EventPublisher
from saas.application.services.quota_enforcer import QuotaEnforcer
from saas.application.services.tenant_service import TenantService
from saas.application.use_cases.projects import ProjectService
from saas.application.use_cases.tasks import TaskService
from saas.core.tenant_context import FixedTenantContext, tenant_scope
from saas.domain.enums import Priority, ProjectStatus, SubscriptionTier, TaskStatus
from saas.infrastructure.persistence.database import dispose_engine, get_session_factory
from saas.infrastructure.persistence.repositories import (
    AutomationRuleRepository,
    EventLogRepository,
    ProjectRepository,
    TaskRepository,
    TenantRepository,
)


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)


async def _seed_tenant(entry: dict[str, Any]) -> None:
    factory = get_session_factory()
    async with factory() as session, session.begin():
        tenant_repo = TenantRepository(session)
        existing = await tenant_repo.get_by_subdomain(entry["subdomain"])
        if existing:
            print(f"Tenant {entry['subdomain']} already exists, skip")
            return
        tenant = await TenantService(tenant_repo).create_tenant(
            TenantCreate(
                subdomain=entry["subdomain"],
                name=entry["name"],
                subscription_tier=SubscriptionTier(entry.get("subscription_tier", "FREE")),
                quota_limit=entry.get("quota_limit"),
            )
        )
        print(f"Tenant {tenant.subdomain} -> {tenant.id} (quota {tenant.quota_limit})")

        context = FixedTenantContext()
        project_repo = ProjectRepository(session)
        quota = QuotaEnforcer(tenant_repo, project_repo, TaskRepository(session))
        publisher = EventPublisher(EventLogRepository(session))
        projects = ProjectService(project_repo, quota, publisher, context)
        tasks = TaskService(TaskRepository(session), project_repo, quota, publisher, context)
        automations = AutomationService(
            AutomationRuleRepository(session), EventLogRepository(session), context
        )

        with tenant_scope(context, tenant.id, tenant.subdomain):
            for p in entry.get("projects", []):
                project = await projects.create_project(
                    ProjectCreate(
                        name=p["name"],
                        description=p.get("description"),
                        status=ProjectStatus(p.get("status", "PLANNING")),
                        priority=Priority(p.get("priority", "MEDIUM")),
                    )
                )
                print(f"  Project {project.name} -> {project.id}")
                for t in p.get("tasks", []):
                    task = await tasks.create_task(
                        TaskCreate(
                            project_id=project.id,
                            name=t["name"],
                            status=TaskStatus(t.get("status", "TODO")),
                            priority=Priority(t.get("priority", "MEDIUM")),
                        )
                    )
                    print(f"    Task {task.name} -> {task.id}")
            for r in entry.get("automation_rules", []):
                rule = await automations.create_rule(
                    AutomationRuleCreate(
                        name=r["name"],
                        event_type=r["event_type"],
                        action_type=r["action_type"],
                        conditions=r.get("conditions", {}),
                        action_config=r.get("action_config", {}),
                    )
                )
                print(f"  Rule {rule.name} ({rule.event_type}) -> {rule.id}")


async def run(path: Path) -> None:
    if not path.is_file():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)
    data = json.loads(path.read_text(encoding="utf-8"))
    try:
        for entry in data.get("tenants", []):
            await _seed_tenant(entry)
    finally:
        await dispose_engine()
    print("Seed completed.")


def main() -> None:
    _load_env()
    path_arg = sys.argv[1] if len(sys.argv) > 1 else None
    path = Path(path_arg) if path_arg else _project_root() / "scripts" / "seed-data.json"
    asyncio.run(run(path))


if __name__ == "__main__":
    main()
