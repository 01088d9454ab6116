"""Meeting repository."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.meetings import Meeting
from .base import QueryBuilder, SqlRepository


class MeetingRepository(SqlRepository[Meeting]):
    default_order = "meeting_date"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Meeting)

    async def list_meetings(
        self,
        user_id: str,
        search: Optional[str] = None,
        sort: str = "meeting_date",
        ascending: bool = False,
    ) -> List[Meeting]:
        stmt = select(Meeting).where(Meeting.user_id == user_id)
        stmt = QueryBuilder.apply_search(stmt, Meeting.title, search)
        stmt = QueryBuilder.apply_sort(stmt, Meeting, sort, ascending, self.default_order)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
