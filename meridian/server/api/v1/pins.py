"""Pin Endpoints: a user's pinned objects and issues."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Response

from meridian.core.models.domain.enums import EntityType
from meridian.core.models.io.comments import PinRead, PinState, PinToggle
from meridian.core.models.io.issues import IssueWithObject
from meridian.core.models.io.objects import ObjectWithComputed
from meridian.server.api.cache_keys import PIN_KEYS, invalidate
from meridian.server.services.comments import PinService
from meridian.server.services.deps import SessionDep, UserIdDep

router = APIRouter()


@router.get("", response_model=List[PinRead], summary="List Pins")
async def list_pins(session: SessionDep, user_id: UserIdDep) -> List[PinRead]:
    return [PinRead.model_validate(pin) for pin in await PinService(session).list_pins(user_id)]


@router.get("/status", response_model=PinState, summary="Is Pinned")
async def pin_status(entity_type: EntityType, entity_id: str, session: SessionDep, user_id: UserIdDep) -> PinState:
    pinned = await PinService(session).is_pinned(user_id, entity_type.value, entity_id)
    return PinState(entity_type=entity_type.value, entity_id=entity_id, pinned=pinned)


@router.post(
    "/toggle",
    response_model=PinState,
    summary="Toggle Pin",
    description="Pin the entity if it is not pinned yet, otherwise remove the pin.",
    responses={404: {"description": "Object or issue not found"}},
)
async def toggle_pin(payload: PinToggle, response: Response, session: SessionDep, user_id: UserIdDep) -> PinState:
    state = await PinService(session).toggle(user_id, payload.entity_type, payload.entity_id)
    invalidate(response, PIN_KEYS)
    return state


@router.get("/objects", response_model=List[ObjectWithComputed], summary="List Pinned Objects")
async def pinned_objects(session: SessionDep, user_id: UserIdDep) -> List[ObjectWithComputed]:
    return await PinService(session).pinned_objects(user_id)


@router.get("/issues", response_model=List[IssueWithObject], summary="List Pinned Issues")
async def pinned_issues(session: SessionDep, user_id: UserIdDep) -> List[IssueWithObject]:
    return await PinService(session).pinned_issues(user_id)
