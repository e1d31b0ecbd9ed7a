"""initial_schema_tenants_projects_tasks_automations

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-19 09:12:44.118203

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9b7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "tenant",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("subdomain", sa.String(length=63), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("subscription_tier", sa.String(length=32), nullable=False),
        sa.Column("quota_limit", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "subscription_tier IN ('FREE', 'PRO', 'ENTERPRISE')",
            name="tenant_subscription_tier_check",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_tenant_subdomain"), "tenant", ["subdomain"], unique=True)

    op.create_table(
        "project",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("priority", sa.String(length=32), nullable=False),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("owner_id", sa.String(), nullable=True),
        sa.Column("progress_percentage", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenant.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_project_tenant_id"), "project", ["tenant_id"])
    op.create_index("ix_project_tenant_status", "project", ["tenant_id", "status"])

    op.create_table(
        "task",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("priority", sa.String(length=32), nullable=False),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("progress_percentage", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenant.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["project_id"], ["project.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_task_tenant_id"), "task", ["tenant_id"])
    op.create_index(op.f("ix_task_project_id"), "task", ["project_id"])
    op.create_index("ix_task_tenant_project", "task", ["tenant_id", "project_id"])

    op.create_table(
        "automation_rule",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("event_type", sa.String(length=100), nullable=False),
        sa.Column("action_type", sa.String(length=100), nullable=False),
        sa.Column("conditions", postgresql.JSONB(), nullable=False),
        sa.Column("action_config", postgresql.JSONB(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("execution_count", sa.Integer(), nullable=False),
        sa.Column("last_executed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by", sa.String(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenant.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_automation_rule_tenant_id"), "automation_rule", ["tenant_id"])
    op.create_index(op.f("ix_automation_rule_event_type"), "automation_rule", ["event_type"])
    op.create_index(
        "ix_automation_rule_tenant_event",
        "automation_rule",
        ["tenant_id", "event_type", "is_active"],
    )

    op.create_table(
        "event_log",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("automation_rule_id", sa.String(), nullable=True),
        sa.Column("event_type", sa.String(length=100), nullable=False),
        sa.Column("action_type", sa.String(length=100), nullable=True),
        sa.Column("resource_id", sa.String(), nullable=True),
        sa.Column("resource_type", sa.String(length=50), nullable=True),
        sa.Column("event_payload", postgresql.JSONB(), nullable=True),
        sa.Column("action_result", postgresql.JSONB(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("execution_duration_ms", sa.Integer(), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("error_stack_trace", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "status IN ('SUCCESS', 'FAILED', 'SKIPPED', 'NO_RULES_MATCHED')",
            name="event_log_status_check",
        ),
        sa.CheckConstraint(
            "execution_duration_ms IS NULL OR execution_duration_ms >= 0",
            name="event_log_duration_check",
        ),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenant.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["automation_rule_id"], ["automation_rule.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_event_log_tenant_id"), "event_log", ["tenant_id"])
    op.create_index(
        op.f("ix_event_log_automation_rule_id"), "event_log", ["automation_rule_id"]
    )
    op.create_index(op.f("ix_event_log_event_type"), "event_log", ["event_type"])
    op.create_index(op.f("ix_event_log_status"), "event_log", ["status"])
    op.create_index("ix_event_log_tenant_created", "event_log", ["tenant_id", "created_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("event_log")
    op.drop_table("automation_rule")
    op.drop_table("task")
    op.drop_table("project")
    op.drop_table("tenant")
