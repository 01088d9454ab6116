"""API token repository."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.api_tokens import ApiToken
from .base import SqlRepository


class ApiTokenRepository(SqlRepository[ApiToken]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ApiToken)

    async def get_by_hash(self, token_hash: str) -> Optional[ApiToken]:
        stmt = select(ApiToken).where(ApiToken.token_hash == token_hash)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_for_user(self, user_id: str) -> List[ApiToken]:
        stmt = select(ApiToken).where(ApiToken.user_id == user_id).order_by(ApiToken.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
