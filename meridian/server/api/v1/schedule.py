"""
Schedule Endpoints.

Concrete occurrences of the recurring meetings, the per-occurrence log
(invite sent / attended / notes) and the list of occurrences that still need
attention.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Response

from meridian.core.models.io.schedule import ActionNeededItem, ScheduleLogRead, ScheduleLogUpsert, ScheduleOccurrence
from meridian.server.api.cache_keys import SCHEDULE_LOG_KEYS, invalidate
from meridian.server.services.deps import SessionDep, UserIdDep
from meridian.server.services.schedule import ScheduleService

router = APIRouter()


@router.get(
    "/occurrences",
    response_model=List[ScheduleOccurrence],
    summary="List Occurrences",
    description="Expand the active recurring meetings over an inclusive date range, joined with their logs.",
    responses={400: {"description": "End before start"}},
)
async def list_occurrences(
    start: date, end: date, session: SessionDep, user_id: UserIdDep, today: Optional[date] = None
) -> List[ScheduleOccurrence]:
    """
    List occurrences between ``start`` and ``end``.

    Sorted by date, then time of day. ``today`` only affects the ``is_past``
    and ``is_today`` flags.
    """
    return await ScheduleService(session).occurrences(
        user_id, start.isoformat(), end.isoformat(), today=today.isoformat() if today else None
    )


@router.put(
    "/logs",
    response_model=ScheduleLogRead,
    summary="Upsert Occurrence Log",
    description="Create or update the log of one occurrence. Flags left out keep their stored value.",
    responses={404: {"description": "Recurring meeting not found"}},
)
async def upsert_log(
    payload: ScheduleLogUpsert, response: Response, session: SessionDep, user_id: UserIdDep
) -> ScheduleLogRead:
    log = await ScheduleService(session).upsert_log(user_id, payload)
    invalidate(response, SCHEDULE_LOG_KEYS)
    return ScheduleLogRead.model_validate(log)


@router.get(
    "/action-needed",
    response_model=List[ActionNeededItem],
    summary="List Occurrences Needing Action",
    description="Occurrences of the past seven days through today without an invite, or past and not attended.",
)
async def action_needed(
    session: SessionDep, user_id: UserIdDep, today: Optional[date] = None
) -> List[ActionNeededItem]:
    return await ScheduleService(session).action_needed(user_id, today=today.isoformat() if today else None)
