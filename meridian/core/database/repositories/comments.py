"""Comment and pin repositories."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.comments import Comment, Pin
from .base import SqlRepository


class CommentRepository(SqlRepository[Comment]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Comment)

    async def list_for_entity(self, user_id: str, entity_type: str, entity_id: str) -> List[Comment]:
        """Comments on one object or issue, newest first."""
        stmt = (
            select(Comment)
            .where(Comment.user_id == user_id)
            .where(Comment.entity_type == entity_type)
            .where(Comment.entity_id == entity_id)
            .order_by(Comment.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class PinRepository(SqlRepository[Pin]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Pin)

    async def find(self, user_id: str, entity_type: str, entity_id: str) -> Optional[Pin]:
        stmt = (
            select(Pin)
            .where(Pin.user_id == user_id)
            .where(Pin.entity_type == entity_type)
            .where(Pin.entity_id == entity_id)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_for_user(self, user_id: str, entity_type: Optional[str] = None) -> List[Pin]:
        stmt = select(Pin).where(Pin.user_id == user_id)
        if entity_type:
            stmt = stmt.where(Pin.entity_type == entity_type)
        stmt = stmt.order_by(Pin.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
