"""Domain enumerations.

Enums are stored and serialized by their string value.
"""

from enum import Enum


class SubscriptionTier(str, Enum):
    FREE = "FREE"
    PRO = "PRO"
    ENTERPRISE = "ENTERPRISE"

    @property
    def default_quota(self) -> int | None:
        """Combined projects+tasks limit for the tier; None means unlimited."""
        return _TIER_QUOTAS[self]


_TIER_QUOTAS: dict[SubscriptionTier, int | None] = {
    SubscriptionTier.FREE: 50,
    SubscriptionTier.PRO: 1000,
    SubscriptionTier.ENTERPRISE: None,
}


class ExecutionStatus(str, Enum):
    """Outcome recorded on an event log row."""

    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"
    NO_RULES_MATCHED = "NO_RULES_MATCHED"


class ProjectStatus(str, Enum):
    PLANNING = "PLANNING"
    ACTIVE = "ACTIVE"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class TaskStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    BLOCKED = "BLOCKED"
    COMPLETED = "COMPLETED"


class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class EventType(str, Enum):
    """Event types emitted by the resource services."""

    PROJECT_CREATED = "project.created"
    PROJECT_UPDATED = "project.updated"
    PROJECT_DELETED = "project.deleted"
    TASK_CREATED = "task.created"
    TASK_UPDATED = "task.updated"
    TASK_STATUS_CHANGED = "task.status.changed"
    TASK_DELETED = "task.deleted"
