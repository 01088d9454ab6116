"""Comment Endpoints: threads on objects and issues."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Response, status

from meridian.core.models.domain.enums import EntityType
from meridian.core.models.io.comments import CommentCreate, CommentRead
from meridian.server.api.cache_keys import COMMENT_KEYS, invalidate
from meridian.server.services.comments import CommentService
from meridian.server.services.deps import SessionDep, UserIdDep

router = APIRouter()


@router.get(
    "",
    response_model=List[CommentRead],
    summary="List Comments",
    description="Comments on one object or issue, newest first.",
)
async def list_comments(
    entity_type: EntityType, entity_id: str, session: SessionDep, user_id: UserIdDep
) -> List[CommentRead]:
    rows = await CommentService(session).list_comments(user_id, entity_type.value, entity_id)
    return [CommentRead.model_validate(row) for row in rows]


@router.post(
    "",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Comment",
    responses={404: {"description": "Commented object or issue not found"}},
)
async def create_comment(
    payload: CommentCreate, response: Response, session: SessionDep, user_id: UserIdDep
) -> CommentRead:
    comment = await CommentService(session).create_comment(user_id, payload)
    invalidate(response, COMMENT_KEYS)
    return CommentRead.model_validate(comment)
