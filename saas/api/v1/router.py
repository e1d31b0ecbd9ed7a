"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from saas.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from saas.api.v1.endpoints import automations, health, projects, tasks, tenants

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(automations.router, prefix="/automations", tags=["automations"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(tenants.router, prefix="/tenants", tags=["tenants"])
