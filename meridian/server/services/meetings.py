"""
Service for recorded meetings.

Besides CRUD this converts a meeting's action items into issues. Each issue is
linked to the meeting as soon as it is created, so a failure part-way leaves
every issue created so far attached to the meeting.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from meridian.core.database.entities import Meeting, TrackedObject
from meridian.core.database.repositories import IssueRepository, MeetingRepository, ObjectRepository
from meridian.core.models.io.issues import IssueCreate
from meridian.core.models.io.meetings import (
    ConvertToIssuesRequest,
    ConvertToIssuesResult,
    MeetingCreate,
    MeetingUpdate,
    MeetingWithLinks,
)
from meridian.core.models.io.objects import ObjectCreate

from .errors import NotFoundError, PartialConversionError, ValidationError
from .issues import IssueService
from .objects import ObjectService

logger = logging.getLogger(__name__)


class MeetingService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.meetings = MeetingRepository(session)

    async def require(self, user_id: str, meeting_id: str) -> Meeting:
        meeting = await self.meetings.get_owned(meeting_id, user_id)
        if meeting is None:
            raise NotFoundError("Meeting", meeting_id)
        return meeting

    async def list_meetings(
        self, user_id: str, search: Optional[str] = None, sort: str = "meeting_date", order: str = "desc"
    ) -> List[Meeting]:
        return await self.meetings.list_meetings(user_id, search=search, sort=sort, ascending=order == "asc")

    async def get_meeting(self, user_id: str, meeting_id: str) -> MeetingWithLinks:
        """Meeting with the names of its linked objects and titles of its linked issues."""
        meeting = await self.require(user_id, meeting_id)
        objects = await ObjectRepository(self.session).get_many(meeting.linked_object_ids or [])
        issues = await IssueRepository(self.session).get_many(meeting.linked_issue_ids or [])
        return MeetingWithLinks.model_validate(
            {
                **meeting.model_dump(),
                "linked_object_names": [obj.name for obj in objects],
                "linked_issue_titles": [issue.title for issue in issues],
            }
        )

    async def create_meeting(self, user_id: str, data: MeetingCreate) -> Meeting:
        meeting = await self.meetings.create(Meeting(user_id=user_id, **data.model_dump()))
        logger.info(f"Created meeting {meeting.id} ({meeting.title})")
        return meeting

    async def update_meeting(self, user_id: str, meeting_id: str, data: MeetingUpdate) -> Meeting:
        meeting = await self.require(user_id, meeting_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is None and key in ("title", "meeting_date", "transcript", "meeting_type"):
                continue
            if value is None and key in ("linked_object_ids", "linked_issue_ids"):
                value = []
            setattr(meeting, key, value)
        return await self.meetings.update(meeting)

    async def delete_meeting(self, user_id: str, meeting_id: str) -> None:
        await self.require(user_id, meeting_id)
        await self.meetings.delete(meeting_id)

    async def _resolve_object(self, user_id: str, request: ConvertToIssuesRequest) -> TrackedObject:
        objects = ObjectService(self.session)
        if request.object_id:
            return await objects.require(user_id, request.object_id)
        if request.new_object is None:
            raise ValidationError("Either object_id or new_object is required")

        spec = request.new_object
        name = (spec.name or "").strip() or await objects.next_code(user_id, spec.module, spec.category)
        return await objects.create_object(
            user_id,
            ObjectCreate(module=spec.module, category=spec.category, name=name, owner_alias=spec.owner_alias),
        )

    async def convert_next_steps_to_issues(
        self, user_id: str, meeting_id: str, request: ConvertToIssuesRequest
    ) -> ConvertToIssuesResult:
        """
        Create one issue per non-blank action item and link each to the meeting.

        Args:
            user_id: Owner of the meeting
            meeting_id: Meeting whose action items are converted
            request: Entries plus the target object (existing or to be created)

        Returns:
            The parent object id, the new issue ids and the meeting's full linked list

        Raises:
            PartialConversionError: An issue failed; the earlier ones remain created and linked
        """
        meeting = await self.require(user_id, meeting_id)
        entries = [entry for entry in request.entries if entry.action.strip()]
        if not entries:
            raise ValidationError("No action items to convert")

        obj = await self._resolve_object(user_id, request)
        issues = IssueService(self.session)
        existing = list(meeting.linked_issue_ids or [])
        created: List[str] = []

        for entry in entries:
            try:
                issue = await issues.create_issue(
                    user_id,
                    IssueCreate(
                        object_id=obj.id,
                        title=entry.action.strip(),
                        issue_type=request.issue_type,
                        lifecycle_stage=request.lifecycle_stage,
                        status=request.status,
                        owner_alias=(entry.owner or "").strip() or None,
                    ),
                )
                created.append(issue.id)
                meeting.linked_issue_ids = existing + created
                meeting = await self.meetings.update(meeting)
            except Exception as e:
                await self.session.rollback()
                logger.error(f"Converting action items of meeting {meeting_id} stopped after {len(created)}: {e}")
                raise PartialConversionError(len(created), len(entries), e) from e

        logger.info(f"Converted {len(created)} action items of meeting {meeting_id} into issues")
        return ConvertToIssuesResult(
            object_id=obj.id,
            created_issue_ids=created,
            linked_issue_ids=list(meeting.linked_issue_ids),
        )
