"""
Issue Endpoints.

Issues are listed joined with their parent object. Closed issues are left out
of the list unless a ``status`` filter asks for them.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, Response, status

from meridian.core.models.io.issues import IssueBulkUpdate, IssueCreate, IssueRead, IssueUpdate, IssueWithObject
from meridian.server.api.cache_keys import invalidate, issue_keys
from meridian.server.services.deps import SessionDep, UserIdDep
from meridian.server.services.issues import IssueService

router = APIRouter()


@router.get(
    "",
    response_model=List[IssueWithObject],
    summary="List Issues",
    description="List the caller's issues with parent object name, module and age.",
    response_description="Issues matching the filters.",
)
async def list_issues(
    session: SessionDep,
    user_id: UserIdDep,
    status_: Optional[str] = Query(default=None, alias="status", description="Comma-separated statuses"),
    issue_type: Optional[str] = None,
    lifecycle_stage: Optional[str] = None,
    next_action: Optional[str] = None,
    module: Optional[str] = Query(default=None, description="Module of the parent object"),
    search: Optional[str] = None,
    is_archived: bool = False,
    sort: str = "created_at",
    order: str = Query(default="asc", pattern="^(asc|desc)$"),
) -> List[IssueWithObject]:
    """
    List issues.

    - **status**: e.g. ``open,in_progress``. Without it every status but closed is returned.
    - **search**: case-insensitive match on the issue title.
    """
    return await IssueService(session).list_issues(
        user_id,
        status=status_,
        issue_type=issue_type,
        lifecycle_stage=lifecycle_stage,
        next_action=next_action,
        module=module,
        search=search,
        is_archived=is_archived,
        sort=sort,
        order=order,
    )


@router.patch(
    "/bulk",
    response_model=List[IssueRead],
    summary="Bulk Update Issues",
    description="Apply the same partial update to several issues.",
)
async def bulk_update_issues(
    payload: IssueBulkUpdate, response: Response, session: SessionDep, user_id: UserIdDep
) -> List[IssueRead]:
    rows = await IssueService(session).bulk_update(user_id, payload.ids, payload.updates)
    keys = issue_keys()
    for row in rows:
        keys += issue_keys(row.id)
    invalidate(response, keys)
    return [IssueRead.model_validate(row) for row in rows]


@router.get(
    "/{issue_id}",
    response_model=IssueWithObject,
    summary="Get Issue",
    responses={404: {"description": "Issue not found"}},
)
async def get_issue(issue_id: str, session: SessionDep, user_id: UserIdDep) -> IssueWithObject:
    return await IssueService(session).get_issue(user_id, issue_id)


@router.post(
    "",
    response_model=IssueRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Issue",
    description="Raise an issue against one of the caller's objects.",
    responses={400: {"description": "Invalid issue data or unknown object"}},
)
async def create_issue(payload: IssueCreate, response: Response, session: SessionDep, user_id: UserIdDep) -> IssueRead:
    issue = await IssueService(session).create_issue(user_id, payload)
    invalidate(response, issue_keys())
    return IssueRead.model_validate(issue)


@router.patch(
    "/{issue_id}",
    response_model=IssueRead,
    summary="Update Issue",
    description=(
        "Partially update an issue. Moving into resolved or closed stamps ``resolved_at`` unless one is "
        "given; moving back out clears it."
    ),
    responses={400: {"description": "Invalid update"}, 404: {"description": "Issue not found"}},
)
async def update_issue(
    issue_id: str, payload: IssueUpdate, response: Response, session: SessionDep, user_id: UserIdDep
) -> IssueRead:
    issue = await IssueService(session).update_issue(user_id, issue_id, payload)
    invalidate(response, issue_keys(issue_id))
    return IssueRead.model_validate(issue)
