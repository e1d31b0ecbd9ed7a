"""EventLog ORM model. Append-only record of published events and rule executions."""

from typing import Any

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from saas.domain.enums import ExecutionStatus
from saas.infrastructure.persistence.database import Base
from saas.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    JsonType,
    TenantMixin,
)


class EventLog(CuidMixin, TenantMixin, CreatedAtMixin, Base):
    """Event log row. Table: event_log. No updated_at: rows are never modified."""

    __tablename__ = "event_log"

    automation_rule_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("automation_rule.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    event_type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    action_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    resource_id: Mapped[str | None] = mapped_column(String, nullable=True)
    resource_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    event_payload: Mapped[dict[str, Any] | None] = mapped_column(
        JsonType, nullable=True
    )
    action_result: Mapped[dict[str, Any] | None] = mapped_column(
        JsonType, nullable=True
    )
    status: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    execution_duration_ms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    error_stack_trace: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_event_log_tenant_created", "tenant_id", "created_at"),
        CheckConstraint(
            "status IN ({})".format(", ".join(f"'{s.value}'" for s in ExecutionStatus)),
            name="event_log_status_check",
        ),
        CheckConstraint(
            "execution_duration_ms IS NULL OR execution_duration_ms >= 0",
            name="event_log_duration_check",
        ),
    )
