"""
Object and stage history repositories.

Objects are always scoped to their owner's ``user_id``. Stage history rows are
scoped through their parent object.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.issues import Issue
from ..entities.objects import StageHistory, TrackedObject
from .base import QueryBuilder, SqlRepository


class ObjectRepository(SqlRepository[TrackedObject]):
    """Data access for tracked objects."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, TrackedObject)

    async def list_objects(
        self,
        user_id: str,
        filters: Optional[Dict[str, Any]] = None,
        search: Optional[str] = None,
        sort: str = "created_at",
        ascending: bool = False,
    ) -> List[TrackedObject]:
        """List a user's objects with equality filters, name search and ordering.

        Args:
            user_id: Owner of the rows
            filters: Column equality filters (``None`` values ignored)
            search: Case-insensitive substring of the object name
            sort: Column name to order by; unknown names fall back to ``created_at``
            ascending: Sort direction

        Returns:
            Matching objects
        """
        stmt = select(TrackedObject).where(TrackedObject.user_id == user_id)
        stmt = QueryBuilder.apply_filters(stmt, TrackedObject, filters or {})
        stmt = QueryBuilder.apply_search(stmt, TrackedObject.name, search)
        stmt = QueryBuilder.apply_sort(stmt, TrackedObject, sort, ascending)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_names(self, user_id: str, include_archived: bool = False) -> List[TrackedObject]:
        stmt = select(TrackedObject).where(TrackedObject.user_id == user_id)
        if not include_archived:
            stmt = stmt.where(TrackedObject.is_archived == False)  # noqa: E712
        stmt = stmt.order_by(TrackedObject.name.asc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def open_issue_counts(self, object_ids: List[str]) -> Dict[str, int]:
        """Count non-closed, non-archived issues per object id."""
        if not object_ids:
            return {}
        stmt = (
            select(Issue.object_id, func.count(Issue.id))
            .where(Issue.object_id.in_(object_ids))
            .where(Issue.status != "closed")
            .where(Issue.is_archived == False)  # noqa: E712
            .group_by(Issue.object_id)
        )
        result = await self.session.execute(stmt)
        return {object_id: count for object_id, count in result.all()}


class StageHistoryRepository(SqlRepository[StageHistory]):
    """Data access for stage transitions."""

    default_order = "transitioned_at"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, StageHistory)

    async def list_for_object(self, object_id: str) -> List[StageHistory]:
        """Transitions of one object, oldest first."""
        stmt = (
            select(StageHistory)
            .where(StageHistory.object_id == object_id)
            .order_by(StageHistory.transitioned_at.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_user(self, user_id: str) -> List[StageHistory]:
        """Every transition of the user's objects, oldest first."""
        stmt = (
            select(StageHistory)
            .join(TrackedObject, TrackedObject.id == StageHistory.object_id)
            .where(TrackedObject.user_id == user_id)
            .order_by(StageHistory.transitioned_at.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
