"""Application services: tenant resolution, quota, event publishing, automations."""

from saas.application.services.automation_service import AutomationService
from saas.application.services.event_publisher import EventPublisher
from saas.application.services.quota_enforcer import QuotaEnforcer
from saas.application.services.tenant_resolver import TenantResolver
from saas.application.services.tenant_service import TenantService

__all__ = ["AutomationService", "EventPublisher", "QuotaEnforcer", "TenantResolver", "TenantService"]
