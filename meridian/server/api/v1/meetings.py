"""
Meeting Endpoints.

Recorded meetings with their generated minutes. Besides CRUD this module
exposes:
- transcript upload (.txt / .docx) returning the extracted text
- minutes generation through Gemini
- conversion of a meeting's action items into issues
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, File, HTTPException, Query, Response, UploadFile, status

from meridian.core.logging_config import get_logger
from meridian.core.models.io.meetings import (
    ConvertToIssuesRequest,
    ConvertToIssuesResult,
    GeneratedMinutes,
    GenerateMinutesRequest,
    MeetingCreate,
    MeetingRead,
    MeetingUpdate,
    MeetingWithLinks,
)
from meridian.files.transcripts import TranscriptFileError, read_transcript
from meridian.server.api.cache_keys import invalidate, issue_keys, meeting_keys, object_keys
from meridian.server.core.config import settings
from meridian.server.services.deps import MinutesGeneratorDep, SessionDep, UserIdDep
from meridian.server.services.meetings import MeetingService

logger = get_logger(__name__)
router = APIRouter()


@router.get(
    "",
    response_model=List[MeetingRead],
    summary="List Meetings",
    description="List the caller's meetings, newest meeting date first by default.",
)
async def list_meetings(
    session: SessionDep,
    user_id: UserIdDep,
    search: Optional[str] = None,
    sort: str = "meeting_date",
    order: str = Query(default="desc", pattern="^(asc|desc)$"),
) -> List[MeetingRead]:
    rows = await MeetingService(session).list_meetings(user_id, search=search, sort=sort, order=order)
    return [MeetingRead.model_validate(row) for row in rows]


@router.post(
    "/generate-minutes",
    response_model=GeneratedMinutes,
    summary="Generate Minutes",
    description=(
        "Generate structured minutes from a transcript. Short transcripts use the fast model, "
        "long ones the larger model."
    ),
    responses={400: {"description": "Empty transcript"}, 502: {"description": "LLM call failed"}},
)
async def generate_minutes(
    payload: GenerateMinutesRequest, generator: MinutesGeneratorDep, user_id: UserIdDep
) -> GeneratedMinutes:
    """
    Generate minutes of meeting.

    - **mode**: ``full_mom`` (default) or ``quick_summary``.
    """
    return await generator.generate(payload.transcript, payload.mode)


@router.post(
    "/transcript",
    summary="Upload Transcript",
    description="Extract the text of an uploaded .txt or .docx transcript.",
    responses={400: {"description": "File is empty, too large or unreadable"}},
)
async def upload_transcript(user_id: UserIdDep, file: UploadFile = File(...)):
    content = await file.read()
    try:
        text = read_transcript(file.filename, content, settings.imports.max_transcript_bytes)
    except TranscriptFileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return {"filename": file.filename, "transcript": text}


@router.get(
    "/{meeting_id}",
    response_model=MeetingWithLinks,
    summary="Get Meeting",
    description="Meeting with the names of linked objects and titles of linked issues.",
    responses={404: {"description": "Meeting not found"}},
)
async def get_meeting(meeting_id: str, session: SessionDep, user_id: UserIdDep) -> MeetingWithLinks:
    return await MeetingService(session).get_meeting(user_id, meeting_id)


@router.post(
    "",
    response_model=MeetingRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Meeting",
)
async def create_meeting(
    payload: MeetingCreate, response: Response, session: SessionDep, user_id: UserIdDep
) -> MeetingRead:
    meeting = await MeetingService(session).create_meeting(user_id, payload)
    invalidate(response, meeting_keys())
    return MeetingRead.model_validate(meeting)


@router.patch(
    "/{meeting_id}",
    response_model=MeetingRead,
    summary="Update Meeting",
    responses={404: {"description": "Meeting not found"}},
)
async def update_meeting(
    meeting_id: str, payload: MeetingUpdate, response: Response, session: SessionDep, user_id: UserIdDep
) -> MeetingRead:
    meeting = await MeetingService(session).update_meeting(user_id, meeting_id, payload)
    invalidate(response, meeting_keys(meeting_id))
    return MeetingRead.model_validate(meeting)


@router.delete(
    "/{meeting_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Meeting",
    responses={404: {"description": "Meeting not found"}},
)
async def delete_meeting(meeting_id: str, response: Response, session: SessionDep, user_id: UserIdDep) -> None:
    await MeetingService(session).delete_meeting(user_id, meeting_id)
    invalidate(response, meeting_keys(meeting_id))


@router.post(
    "/{meeting_id}/convert-to-issues",
    response_model=ConvertToIssuesResult,
    status_code=status.HTTP_201_CREATED,
    summary="Convert Action Items to Issues",
    description=(
        "Create one issue per action item under an existing or new object. Each issue is linked to the "
        "meeting as soon as it is created."
    ),
    responses={
        400: {"description": "No action items, or no target object"},
        404: {"description": "Meeting or object not found"},
        500: {"description": "Conversion stopped part-way; earlier issues stay linked"},
    },
)
async def convert_to_issues(
    meeting_id: str,
    payload: ConvertToIssuesRequest,
    response: Response,
    session: SessionDep,
    user_id: UserIdDep,
) -> ConvertToIssuesResult:
    result = await MeetingService(session).convert_next_steps_to_issues(user_id, meeting_id, payload)
    keys = meeting_keys(meeting_id) + issue_keys()
    if payload.new_object is not None:
        keys += object_keys()
    invalidate(response, keys)
    return result
