"""
Tracked Object Endpoints.

CRUD for objects plus the lookups the tracker screens need: name list,
next suggested object code, stage history and the issues of one object.
Every mutation names the caches to refresh in the ``X-Invalidate`` header.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, Response, status

from meridian.core.models.domain.enums import ModuleType, ObjectCategory
from meridian.core.models.io.issues import IssueWithObject
from meridian.core.models.io.objects import (
    NextCodeRead,
    ObjectBulkUpdate,
    ObjectCreate,
    ObjectName,
    ObjectRead,
    ObjectUpdate,
    ObjectWithComputed,
    StageHistoryRead,
)
from meridian.server.api.cache_keys import invalidate, object_keys
from meridian.server.services.deps import SessionDep, UserIdDep
from meridian.server.services.objects import ObjectService

router = APIRouter()


@router.get(
    "",
    response_model=List[ObjectWithComputed],
    summary="List Objects",
    description="List the caller's objects with computed aging, progress and open issue counts.",
    response_description="Objects matching the filters.",
)
async def list_objects(
    session: SessionDep,
    user_id: UserIdDep,
    module: Optional[str] = None,
    category: Optional[str] = None,
    status_: Optional[str] = Query(default=None, alias="status"),
    current_stage: Optional[str] = None,
    source_system: Optional[str] = None,
    region: Optional[str] = None,
    search: Optional[str] = None,
    is_archived: bool = False,
    sort: str = "created_at",
    order: str = Query(default="desc", pattern="^(asc|desc)$"),
) -> List[ObjectWithComputed]:
    """
    List objects.

    - **search**: case-insensitive match on the object name.
    - **sort**: any object column, or ``aging`` for time in the current stage.
    """
    return await ObjectService(session).list_objects(
        user_id,
        module=module,
        category=category,
        status=status_,
        current_stage=current_stage,
        source_system=source_system,
        region=region,
        search=search,
        is_archived=is_archived,
        sort=sort,
        order=order,
    )


@router.get(
    "/names",
    response_model=List[ObjectName],
    summary="List Object Names",
    description="Id, name and module of every active object, ordered by name.",
)
async def list_object_names(session: SessionDep, user_id: UserIdDep) -> List[ObjectName]:
    rows = await ObjectService(session).object_names(user_id)
    return [ObjectName.model_validate(row) for row in rows]


@router.get(
    "/next-code",
    response_model=NextCodeRead,
    summary="Suggest Object Code",
    description="Next free ``OBJ-<module>-<category>-NNN`` code for the module and category.",
    responses={400: {"description": "Unknown module or category"}},
)
async def next_code(
    session: SessionDep, user_id: UserIdDep, module: ModuleType, category: ObjectCategory
) -> NextCodeRead:
    code = await ObjectService(session).next_code(user_id, module.value, category.value)
    return NextCodeRead(code=code)


@router.get(
    "/stage-history",
    response_model=List[StageHistoryRead],
    summary="List All Stage History",
    description="Stage transitions across all of the caller's objects, oldest first.",
)
async def list_all_stage_history(session: SessionDep, user_id: UserIdDep) -> List[StageHistoryRead]:
    rows = await ObjectService(session).all_stage_history(user_id)
    return [StageHistoryRead.model_validate(row) for row in rows]


@router.patch(
    "/bulk",
    response_model=List[ObjectRead],
    summary="Bulk Update Objects",
    description="Apply the same partial update to several objects.",
    responses={400: {"description": "Update is invalid for one of the objects"}},
)
async def bulk_update_objects(
    payload: ObjectBulkUpdate, response: Response, session: SessionDep, user_id: UserIdDep
) -> List[ObjectRead]:
    rows = await ObjectService(session).bulk_update(user_id, payload.ids, payload.updates)
    keys = ["objects", "object-names"]
    for row in rows:
        keys += object_keys(row.id)
    invalidate(response, keys)
    return [ObjectRead.model_validate(row) for row in rows]


@router.get(
    "/{object_id}",
    response_model=ObjectWithComputed,
    summary="Get Object",
    responses={404: {"description": "Object not found"}},
)
async def get_object(object_id: str, session: SessionDep, user_id: UserIdDep) -> ObjectWithComputed:
    return await ObjectService(session).get_object(user_id, object_id)


@router.get(
    "/{object_id}/issues",
    response_model=List[IssueWithObject],
    summary="List Object Issues",
    description="Non-archived issues raised against the object, newest first.",
    responses={404: {"description": "Object not found"}},
)
async def list_object_issues(object_id: str, session: SessionDep, user_id: UserIdDep) -> List[IssueWithObject]:
    return await ObjectService(session).list_object_issues(user_id, object_id)


@router.get(
    "/{object_id}/stage-history",
    response_model=List[StageHistoryRead],
    summary="Get Object Stage History",
    responses={404: {"description": "Object not found"}},
)
async def get_stage_history(object_id: str, session: SessionDep, user_id: UserIdDep) -> List[StageHistoryRead]:
    rows = await ObjectService(session).stage_history(user_id, object_id)
    return [StageHistoryRead.model_validate(row) for row in rows]


@router.post(
    "",
    response_model=ObjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Object",
    description="Create an object; its first stage history row is written with it.",
    responses={400: {"description": "Invalid object data"}},
)
async def create_object(
    payload: ObjectCreate, response: Response, session: SessionDep, user_id: UserIdDep
) -> ObjectRead:
    obj = await ObjectService(session).create_object(user_id, payload)
    invalidate(response, object_keys())
    return ObjectRead.model_validate(obj)


@router.patch(
    "/{object_id}",
    response_model=ObjectRead,
    summary="Update Object",
    description="Partially update an object. A stage change restarts aging and records a history row.",
    responses={400: {"description": "Invalid update"}, 404: {"description": "Object not found"}},
)
async def update_object(
    object_id: str, payload: ObjectUpdate, response: Response, session: SessionDep, user_id: UserIdDep
) -> ObjectRead:
    obj = await ObjectService(session).update_object(user_id, object_id, payload)
    invalidate(response, object_keys(object_id))
    return ObjectRead.model_validate(obj)
