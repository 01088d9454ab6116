"""
Base repository interfaces and utilities.

This module provides the foundational repository patterns used across all
repository implementations: the abstract CRUD interface, a generic async
SQL implementation of it, and query-building helpers for equality filters,
case-insensitive search, sorting and range pagination.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterable, List, Optional, Sequence, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from ..base import utc_now

# Generic type for SQLModel entities
EntityType = TypeVar("EntityType", bound=SQLModel)


class AsyncBaseRepository(ABC, Generic[EntityType]):
    """Base async repository interface with common CRUD operations using SQLModel."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        """Initialize repository with async database session and SQLModel entity class.

        Args:
            session: Async SQLAlchemy session for database operations
            model: SQLModel entity class for this repository
        """
        self.session = session
        self.model = model

    @abstractmethod
    async def create(self, entity: EntityType) -> EntityType:
        """Create a new entity record.

        Args:
            entity: SQLModel instance to persist

        Returns:
            Persisted entity with generated fields populated
        """

    @abstractmethod
    async def get_by_id(self, entity_id: str) -> Optional[EntityType]:
        """Get entity by its primary identifier.

        Args:
            entity_id: Primary key value

        Returns:
            Entity instance or None if not found
        """

    @abstractmethod
    async def update(self, entity: EntityType) -> EntityType:
        """Update an existing entity record.

        Args:
            entity: SQLModel instance with updated fields

        Returns:
            Updated entity instance
        """

    @abstractmethod
    async def delete(self, entity_id: str) -> bool:
        """Delete entity by its primary identifier.

        Args:
            entity_id: Primary key value

        Returns:
            True if deleted, False if not found
        """

    @abstractmethod
    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """List entities with optional pagination and filtering.

        Args:
            limit: Maximum number of records to return
            offset: Number of records to skip
            filters: Dictionary of field filters

        Returns:
            List of entity instances
        """


class QueryBuilder:
    """Utility class for building SQLModel-based database queries."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Apply equality filters to a select statement.

        ``None`` values are skipped; list/tuple/set values become ``IN`` filters.

        Args:
            stmt: SQLModel select statement
            model: SQLModel entity class
            filters: Dictionary of field filters

        Returns:
            Modified select statement with filters applied
        """
        for key, value in filters.items():
            if value is None or not hasattr(model, key):
                continue
            column = getattr(model, key)
            if isinstance(value, (list, tuple, set)):
                stmt = stmt.where(column.in_(list(value)))
            else:
                stmt = stmt.where(column == value)
        return stmt

    @staticmethod
    def apply_search(stmt, column, term: Optional[str]):
        """Case-insensitive substring match on ``column``."""
        if term:
            stmt = stmt.where(column.ilike(f"%{term}%"))
        return stmt

    @staticmethod
    def apply_sort(stmt, model: Type[EntityType], field: str, ascending: bool, default: str = "created_at"):
        """Order by ``field`` (falling back to ``default`` for unknown columns)."""
        column = getattr(model, field, None)
        if column is None or not hasattr(column, "asc"):
            column = getattr(model, default)
        return stmt.order_by(column.asc() if ascending else column.desc())

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        """Apply pagination to a select statement.

        Args:
            stmt: SQLModel select statement
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            Modified select statement with pagination applied
        """
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt


class SqlRepository(AsyncBaseRepository[EntityType]):
    """Generic async SQL implementation of the CRUD interface.

    Every write commits immediately; table repositories add domain queries on top.
    """

    default_order: str = "created_at"

    async def create(self, entity: EntityType) -> EntityType:
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def create_many(self, entities: Sequence[EntityType]) -> List[EntityType]:
        """Insert several rows in one commit."""
        self.session.add_all(list(entities))
        await self.session.commit()
        for entity in entities:
            await self.session.refresh(entity)
        return list(entities)

    async def get_by_id(self, entity_id: str) -> Optional[EntityType]:
        return await self.session.get(self.model, entity_id)

    async def get_owned(self, entity_id: str, user_id: str) -> Optional[EntityType]:
        """Get a row by id only if it belongs to ``user_id``."""
        entity = await self.get_by_id(entity_id)
        if entity is None or getattr(entity, "user_id", None) != user_id:
            return None
        return entity

    async def get_many(self, ids: Iterable[str]) -> List[EntityType]:
        ids = list(ids)
        if not ids:
            return []
        stmt = select(self.model).where(self.model.id.in_(ids))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, entity: EntityType) -> EntityType:
        if hasattr(entity, "updated_at"):
            entity.updated_at = utc_now()
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity_id: str) -> bool:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.commit()
        return True

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        ascending: bool = False,
    ) -> List[EntityType]:
        stmt = select(self.model)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        stmt = QueryBuilder.apply_sort(stmt, self.model, order_by or self.default_order, ascending, self.default_order)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search(self, user_id: str, column, term: str, limit: int) -> List[EntityType]:
        """Rows owned by ``user_id`` whose ``column`` contains ``term`` (case-insensitive)."""
        stmt = select(self.model).where(self.model.user_id == user_id)
        stmt = QueryBuilder.apply_search(stmt, column, term)
        stmt = QueryBuilder.apply_sort(stmt, self.model, self.default_order, False, self.default_order)
        stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
