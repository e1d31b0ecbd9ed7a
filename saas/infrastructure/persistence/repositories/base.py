"""Base repository: generic lookups and writes shared by the concrete repositories."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from saas.infrastructure.persistence.database import Base
from saas.shared.utils.datetime import ensure_utc


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic get/create/update/delete over one mapped model.

    Subclasses expose DTO-returning methods and keep ORM objects private.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def _get_for_tenant(self, entity_id: str, tenant_id: str) -> ModelType | None:
        model: Any = self.model
        result = await self.db.execute(
            select(self.model).where(model.id == entity_id, model.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def _add(self, obj: ModelType) -> ModelType:
        """Persist a new record and reload server-side defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _apply(self, obj: ModelType, changes: dict[str, Any]) -> ModelType:
        """Overwrite the given attributes, flush, and reload."""
        for key, value in changes.items():
            if not hasattr(obj, key):
                raise ValueError(f"{self.model.__name__} has no attribute {key!r}")
            setattr(obj, key, value)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _delete_where(self, *criteria: Any) -> bool:
        result = await self.db.execute(delete(self.model).where(*criteria))
        await self.db.flush()
        return (result.rowcount or 0) > 0

    async def _count_where(self, *criteria: Any) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(self.model).where(*criteria)
        )
        return int(result.scalar_one())


def _column_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return ensure_utc(value)
    return getattr(value, "value", value)


def column_values(changes: dict[str, Any]) -> dict[str, Any]:
    """Enums are stored by value; datetimes are normalized to UTC (SQLite drops offsets)."""
    return {k: _column_value(v) for k, v in changes.items()}
