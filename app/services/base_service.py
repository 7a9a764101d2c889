"""Base service class with common database operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseService(Generic[ModelType]):
    """Base service with common CRUD operations."""

    def __init__(self, db: AsyncSession, model: type[ModelType]):
        self.db = db
        self.model = model

    async def get_by_id(self, id: Any) -> ModelType | None:
        """Get entity by primary key."""
        return await self.db.get(self.model, id)

    async def find(
        self,
        *criteria: Any,
        order_by: Any = None,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[ModelType]:
        """Get entities matching all criteria."""
        query = select(self.model)
        if criteria:
            query = query.where(*criteria)
        if isinstance(order_by, (list, tuple)):
            query = query.order_by(*order_by)
        elif order_by is not None:
            query = query.order_by(order_by)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().unique().all())

    async def find_one(self, *criteria: Any) -> ModelType | None:
        """Get the single entity matching all criteria, if any."""
        result = await self.db.execute(select(self.model).where(*criteria))
        return result.scalars().unique().one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Create new entity."""
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Persist changes made to an entity."""
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Delete entity."""
        await self.db.delete(obj)
        await self.db.commit()
