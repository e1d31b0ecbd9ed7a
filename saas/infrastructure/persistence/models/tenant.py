"""Tenant ORM model. Root entity for the multi-tenant hierarchy (no tenant_id)."""

from sqlalchemy import Boolean, CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from saas.domain.enums import SubscriptionTier
from saas.infrastructure.persistence.database import Base
from saas.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Tenant(CuidMixin, TimestampMixin, Base):
    """Root tenant entity. Table: tenant. quota_limit NULL means unlimited."""

    __tablename__ = "tenant"

    subdomain: Mapped[str] = mapped_column(
        String(63), unique=True, nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    subscription_tier: Mapped[str] = mapped_column(
        String(32), nullable=False, default=SubscriptionTier.FREE.value
    )
    quota_limit: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint(
            "subscription_tier IN ({})".format(
                ", ".join(f"'{t.value}'" for t in SubscriptionTier)
            ),
            name="tenant_subscription_tier_check",
        ),
    )
