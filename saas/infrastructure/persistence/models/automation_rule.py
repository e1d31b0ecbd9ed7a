"""AutomationRule ORM model. Rules react to events of one dot-namespaced type."""

from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from saas.infrastructure.persistence.database import Base
from saas.infrastructure.persistence.models.mixins import JsonType, MultiTenantModel


class AutomationRule(MultiTenantModel, Base):
    """Automation rule. Table: automation_rule."""

    __tablename__ = "automation_rule"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    event_type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    action_type: Mapped[str] = mapped_column(String(100), nullable=False)
    conditions: Mapped[dict[str, Any]] = mapped_column(
        JsonType, nullable=False, default=dict
    )
    action_config: Mapped[dict[str, Any]] = mapped_column(
        JsonType, nullable=False, default=dict
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    execution_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_executed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        Index("ix_automation_rule_tenant_event", "tenant_id", "event_type", "is_active"),
    )
