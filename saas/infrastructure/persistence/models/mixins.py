"""SQLAlchemy mixins for common model patterns.

Provides CuidMixin, TenantMixin, TimestampMixin, and the combined
MultiTenantModel used by every tenant-owned table.
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from saas.shared.utils.datetime import utc_now
from saas.shared.utils.generators import generate_cuid

# JSONB on Postgres, plain JSON elsewhere (SQLite in tests).
JsonType = JSON().with_variant(JSONB(), "postgresql")


class CuidMixin:
    """Mixin for models using CUID as primary key."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class TenantMixin:
    """Mixin for multi-tenant models. tenant_id FK to tenant with CASCADE delete."""

    @declared_attr
    def tenant_id(cls) -> Mapped[str]:
        return mapped_column(
            String,
            ForeignKey("tenant.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


class CreatedAtMixin:
    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            default=utc_now,
            server_default=func.now(),
            nullable=False,
        )


class TimestampMixin(CreatedAtMixin):
    """Mixin for created_at and updated_at (timezone-aware)."""

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            default=utc_now,
            server_default=func.now(),
            onupdate=utc_now,
            nullable=False,
        )


class MultiTenantModel(CuidMixin, TenantMixin, TimestampMixin):
    """Combined mixin: CUID + tenant_id + created_at/updated_at."""

    __abstract__ = True
