"""
Archive Endpoints.

Lists archived objects and issues and restores them. A restored object comes
back on track; a restored issue comes back open.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Response

from meridian.core.models.io.issues import IssueRead, IssueWithObject
from meridian.core.models.io.objects import ObjectRead, ObjectWithComputed
from meridian.server.api.cache_keys import invalidate, issue_keys, object_keys
from meridian.server.services.deps import SessionDep, UserIdDep
from meridian.server.services.exports import ALL_ISSUE_STATUSES
from meridian.server.services.issues import IssueService
from meridian.server.services.objects import ObjectService

router = APIRouter()


@router.get("/objects", response_model=List[ObjectWithComputed], summary="List Archived Objects")
async def archived_objects(session: SessionDep, user_id: UserIdDep) -> List[ObjectWithComputed]:
    return await ObjectService(session).list_objects(user_id, is_archived=True, sort="updated_at")


@router.get("/issues", response_model=List[IssueWithObject], summary="List Archived Issues")
async def archived_issues(session: SessionDep, user_id: UserIdDep) -> List[IssueWithObject]:
    return await IssueService(session).list_issues(
        user_id, status=ALL_ISSUE_STATUSES, is_archived=True, sort="updated_at", order="desc"
    )


@router.post(
    "/objects/{object_id}/restore",
    response_model=ObjectRead,
    summary="Restore Object",
    responses={404: {"description": "Object not found"}},
)
async def restore_object(object_id: str, response: Response, session: SessionDep, user_id: UserIdDep) -> ObjectRead:
    obj = await ObjectService(session).restore_object(user_id, object_id)
    invalidate(response, object_keys() + object_keys(object_id))
    return ObjectRead.model_validate(obj)


@router.post(
    "/issues/{issue_id}/restore",
    response_model=IssueRead,
    summary="Restore Issue",
    responses={404: {"description": "Issue not found"}},
)
async def restore_issue(issue_id: str, response: Response, session: SessionDep, user_id: UserIdDep) -> IssueRead:
    issue = await IssueService(session).restore_issue(user_id, issue_id)
    invalidate(response, issue_keys(issue_id))
    return IssueRead.model_validate(issue)
