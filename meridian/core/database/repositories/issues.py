"""
Issue repository.

Issue reads are joined with their parent object so callers get the object's
name and module without a second query.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.issues import Issue
from ..entities.objects import TrackedObject
from .base import QueryBuilder, SqlRepository

IssueRow = Tuple[Issue, str, str]


class IssueRepository(SqlRepository[Issue]):
    """Data access for issues."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Issue)

    def _joined(self, user_id: str):
        return (
            select(Issue, TrackedObject.name, TrackedObject.module)
            .join(TrackedObject, TrackedObject.id == Issue.object_id)
            .where(Issue.user_id == user_id)
        )

    async def list_with_objects(
        self,
        user_id: str,
        statuses: Optional[Sequence[str]] = None,
        exclude_statuses: Optional[Sequence[str]] = None,
        filters: Optional[Dict[str, Any]] = None,
        module: Optional[str] = None,
        search: Optional[str] = None,
        sort: str = "created_at",
        ascending: bool = False,
    ) -> List[IssueRow]:
        """List issues with their parent object's name and module.

        Args:
            user_id: Owner of the rows
            statuses: Keep only these statuses
            exclude_statuses: Drop these statuses (applied when ``statuses`` is empty)
            filters: Issue column equality filters
            module: Parent object's module
            search: Case-insensitive substring of the title
            sort: Issue column to order by
            ascending: Sort direction

        Returns:
            ``(issue, object_name, object_module)`` tuples
        """
        stmt = self._joined(user_id)
        if statuses:
            stmt = stmt.where(Issue.status.in_(list(statuses)))
        elif exclude_statuses:
            stmt = stmt.where(Issue.status.not_in(list(exclude_statuses)))
        stmt = QueryBuilder.apply_filters(stmt, Issue, filters or {})
        if module:
            stmt = stmt.where(TrackedObject.module == module)
        stmt = QueryBuilder.apply_search(stmt, Issue.title, search)
        stmt = QueryBuilder.apply_sort(stmt, Issue, sort, ascending)
        result = await self.session.execute(stmt)
        return [tuple(row) for row in result.all()]

    async def get_with_object(self, issue_id: str, user_id: str) -> Optional[IssueRow]:
        stmt = self._joined(user_id).where(Issue.id == issue_id)
        result = await self.session.execute(stmt)
        row = result.first()
        return tuple(row) if row is not None else None

    async def list_for_object(self, object_id: str, user_id: str) -> List[IssueRow]:
        """Non-archived issues of one object, newest first."""
        stmt = (
            self._joined(user_id)
            .where(Issue.object_id == object_id)
            .where(Issue.is_archived == False)  # noqa: E712
            .order_by(Issue.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [tuple(row) for row in result.all()]

    async def page_for_owner(
        self,
        user_id: str,
        filters: Optional[Dict[str, Any]] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Issue]:
        """Non-archived issues, newest first, one page at a time."""
        stmt = (
            select(Issue)
            .where(Issue.user_id == user_id)
            .where(Issue.is_archived == False)  # noqa: E712
        )
        stmt = QueryBuilder.apply_filters(stmt, Issue, filters or {})
        stmt = stmt.order_by(Issue.created_at.desc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
