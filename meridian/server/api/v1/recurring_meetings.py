"""Recurring Meeting Endpoints: the templates the schedule is expanded from."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Response, status

from meridian.core.models.io.schedule import RecurringMeetingCreate, RecurringMeetingRead, RecurringMeetingUpdate
from meridian.server.api.cache_keys import RECURRING_MEETING_KEYS, invalidate
from meridian.server.services.deps import SessionDep, UserIdDep
from meridian.server.services.schedule import ScheduleService

router = APIRouter()


@router.get(
    "",
    response_model=List[RecurringMeetingRead],
    summary="List Recurring Meetings",
    description="All of the caller's recurring meetings, ordered by name.",
)
async def list_recurring_meetings(session: SessionDep, user_id: UserIdDep) -> List[RecurringMeetingRead]:
    rows = await ScheduleService(session).list_recurring(user_id)
    return [RecurringMeetingRead.model_validate(row) for row in rows]


@router.get(
    "/{meeting_id}",
    response_model=RecurringMeetingRead,
    summary="Get Recurring Meeting",
    responses={404: {"description": "Recurring meeting not found"}},
)
async def get_recurring_meeting(meeting_id: str, session: SessionDep, user_id: UserIdDep) -> RecurringMeetingRead:
    return RecurringMeetingRead.model_validate(await ScheduleService(session).require(user_id, meeting_id))


@router.post(
    "",
    response_model=RecurringMeetingRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Recurring Meeting",
    responses={422: {"description": "Pattern is missing its day or interval"}},
)
async def create_recurring_meeting(
    payload: RecurringMeetingCreate, response: Response, session: SessionDep, user_id: UserIdDep
) -> RecurringMeetingRead:
    meeting = await ScheduleService(session).create_recurring(user_id, payload)
    invalidate(response, RECURRING_MEETING_KEYS)
    return RecurringMeetingRead.model_validate(meeting)


@router.patch(
    "/{meeting_id}",
    response_model=RecurringMeetingRead,
    summary="Update Recurring Meeting",
    responses={400: {"description": "End date before start date"}, 404: {"description": "Recurring meeting not found"}},
)
async def update_recurring_meeting(
    meeting_id: str, payload: RecurringMeetingUpdate, response: Response, session: SessionDep, user_id: UserIdDep
) -> RecurringMeetingRead:
    meeting = await ScheduleService(session).update_recurring(user_id, meeting_id, payload)
    invalidate(response, RECURRING_MEETING_KEYS)
    return RecurringMeetingRead.model_validate(meeting)


@router.delete(
    "/{meeting_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Recurring Meeting",
    description="Delete the meeting together with its occurrence logs.",
    responses={404: {"description": "Recurring meeting not found"}},
)
async def delete_recurring_meeting(
    meeting_id: str, response: Response, session: SessionDep, user_id: UserIdDep
) -> None:
    await ScheduleService(session).delete_recurring(user_id, meeting_id)
    invalidate(response, RECURRING_MEETING_KEYS)
