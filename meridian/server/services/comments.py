"""Services for comments and pins on objects and issues."""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from meridian.core.database.entities import Comment, Pin
from meridian.core.database.repositories import (
    CommentRepository,
    IssueRepository,
    ObjectRepository,
    PinRepository,
)
from meridian.core.models.domain.enums import EntityType
from meridian.core.models.io.comments import CommentCreate, PinState
from meridian.core.models.io.issues import IssueWithObject
from meridian.core.models.io.objects import ObjectWithComputed

from .errors import NotFoundError
from .issues import IssueService
from .objects import ObjectService

logger = logging.getLogger(__name__)


async def _require_entity(session: AsyncSession, user_id: str, entity_type: str, entity_id: str) -> None:
    if entity_type == EntityType.object.value:
        found = await ObjectRepository(session).get_owned(entity_id, user_id)
        label = "Object"
    else:
        found = await IssueRepository(session).get_owned(entity_id, user_id)
        label = "Issue"
    if found is None:
        raise NotFoundError(label, entity_id)


class CommentService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.comments = CommentRepository(session)

    async def list_comments(self, user_id: str, entity_type: str, entity_id: str) -> List[Comment]:
        return await self.comments.list_for_entity(user_id, entity_type, entity_id)

    async def create_comment(self, user_id: str, data: CommentCreate) -> Comment:
        await _require_entity(self.session, user_id, data.entity_type, data.entity_id)
        return await self.comments.create(Comment(user_id=user_id, **data.model_dump()))


class PinService:
    """A user's pinned objects and issues."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.pins = PinRepository(session)

    async def list_pins(self, user_id: str) -> List[Pin]:
        return await self.pins.list_for_user(user_id)

    async def is_pinned(self, user_id: str, entity_type: str, entity_id: str) -> bool:
        return await self.pins.find(user_id, entity_type, entity_id) is not None

    async def toggle(self, user_id: str, entity_type: str, entity_id: str) -> PinState:
        """Pin the entity if it is not pinned, otherwise unpin it."""
        existing = await self.pins.find(user_id, entity_type, entity_id)
        if existing is not None:
            await self.pins.delete(existing.id)
            logger.debug(f"Unpinned {entity_type} {entity_id} for user {user_id}")
            return PinState(entity_type=entity_type, entity_id=entity_id, pinned=False)

        await _require_entity(self.session, user_id, entity_type, entity_id)
        await self.pins.create(Pin(user_id=user_id, entity_type=entity_type, entity_id=entity_id))
        logger.debug(f"Pinned {entity_type} {entity_id} for user {user_id}")
        return PinState(entity_type=entity_type, entity_id=entity_id, pinned=True)

    async def pinned_objects(self, user_id: str) -> List[ObjectWithComputed]:
        pins = await self.pins.list_for_user(user_id, EntityType.object.value)
        return await ObjectService(self.session).get_objects(user_id, [pin.entity_id for pin in pins])

    async def pinned_issues(self, user_id: str) -> List[IssueWithObject]:
        pins = await self.pins.list_for_user(user_id, EntityType.issue.value)
        return await IssueService(self.session).get_issues(user_id, [pin.entity_id for pin in pins])
