"""
Base repository interfaces and utilities.

This module provides the foundational repository patterns used across all
repository implementations in the database layer. Built with async SQLAlchemy
sessions and SQLModel entities.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from ..base import utc_now

# Generic type for SQLModel entities
EntityType = TypeVar("EntityType", bound=SQLModel)


class QueryBuilder:
    """Utility class for building SQLModel-based database queries."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Apply equality filters to a select statement, skipping None values
        and names the model does not have."""
        for key, value in filters.items():
            if value is not None and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt


class BaseRepository(Generic[EntityType]):
    """Base repository with common CRUD operations using SQLModel."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        """Initialize repository with async database session and SQLModel entity class.

        Args:
            session: Async session for database operations
            model: SQLModel entity class for this repository
        """
        self.session = session
        self.model = model

    async def create(self, entity: EntityType) -> EntityType:
        """Persist a new entity and return it with generated fields populated."""
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def get_by_id(self, entity_id: int) -> Optional[EntityType]:
        stmt = select(self.model).where(self.model.id == entity_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, entity: EntityType) -> EntityType:
        """Write back a modified entity, bumping ``updated_at`` when present."""
        if hasattr(entity, "updated_at"):
            entity.updated_at = utc_now()
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: EntityType) -> None:
        await self.session.delete(entity)
        await self.session.commit()

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Sequence[Any] = (),
    ) -> List[EntityType]:
        """List entities with optional filtering, ordering and pagination.

        Args:
            limit: Maximum number of records to return
            offset: Number of records to skip
            filters: Dictionary of equality filters
            order_by: Column expressions to order by

        Returns:
            List of entity instances
        """
        stmt = select(self.model)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        if order_by:
            stmt = stmt.order_by(*order_by)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class OwnedContentRepository(BaseRepository[EntityType]):
    """Repository for content rows that belong to the user who created them.

    Subclasses declare ``public_flag`` (the boolean column deciding public
    visibility) and ``default_order`` (the listing order).
    """

    public_flag: str = "is_active"

    def default_order(self) -> Sequence[Any]:
        return (self.model.display_order.asc(), self.model.id.asc())

    async def list_for_owner(self, owner_id: int) -> List[EntityType]:
        return await self.list(filters={"user_id": owner_id}, order_by=self.default_order())

    async def list_public(self) -> List[EntityType]:
        return await self.list(filters={self.public_flag: True}, order_by=self.default_order())

    async def get_for_owner(self, entity_id: int, owner_id: int) -> Optional[EntityType]:
        stmt = select(self.model).where(self.model.id == entity_id, self.model.user_id == owner_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def apply_changes(self, entity: EntityType, changes: Dict[str, Any]) -> EntityType:
        """Copy the given field values onto the entity and persist it."""
        for key, value in changes.items():
            setattr(entity, key, value)
        return await self.update(entity)

    async def toggle_public_flag(self, entity: EntityType) -> EntityType:
        setattr(entity, self.public_flag, not getattr(entity, self.public_flag))
        return await self.update(entity)
