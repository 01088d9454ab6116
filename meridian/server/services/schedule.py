"""
Service for recurring meetings and the schedule built from them.

Occurrences are never stored. They are expanded from each active meeting's
pattern for the requested range and joined with the per-occurrence logs.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from meridian.core.database.entities import RecurringMeeting, ScheduleLog
from meridian.core.database.repositories import RecurringMeetingRepository, ScheduleLogRepository
from meridian.core.models.io.schedule import (
    ActionNeededItem,
    RecurringMeetingCreate,
    RecurringMeetingRead,
    RecurringMeetingUpdate,
    ScheduleLogRead,
    ScheduleLogUpsert,
    ScheduleOccurrence,
)
from meridian.tracking.recurrence import add_days, format_date, generate_occurrences, get_today_str, parse_date

from .errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Days before today that the action-needed list looks back over
ACTION_LOOKBACK_DAYS = 7


class ScheduleService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.meetings = RecurringMeetingRepository(session)
        self.logs = ScheduleLogRepository(session)

    async def require(self, user_id: str, meeting_id: str) -> RecurringMeeting:
        meeting = await self.meetings.get_owned(meeting_id, user_id)
        if meeting is None:
            raise NotFoundError("Recurring meeting", meeting_id)
        return meeting

    async def list_recurring(self, user_id: str) -> List[RecurringMeeting]:
        return await self.meetings.list_for_user(user_id)

    async def create_recurring(self, user_id: str, data: RecurringMeetingCreate) -> RecurringMeeting:
        meeting = await self.meetings.create(RecurringMeeting(user_id=user_id, **data.model_dump()))
        logger.info(f"Created recurring meeting {meeting.id} ({meeting.name}, {meeting.recurrence})")
        return meeting

    async def update_recurring(self, user_id: str, meeting_id: str, data: RecurringMeetingUpdate) -> RecurringMeeting:
        meeting = await self.require(user_id, meeting_id)
        changes = data.model_dump(exclude_unset=True)
        for key, value in changes.items():
            if value is None and key in ("name", "recurrence", "time_of_day", "duration_minutes", "start_date", "is_active"):
                continue
            if value is None and key in ("linked_object_ids", "linked_issue_ids"):
                value = []
            setattr(meeting, key, value)
        if meeting.end_date is not None and meeting.end_date < meeting.start_date:
            raise ValidationError("end_date must not be before start_date")
        return await self.meetings.update(meeting)

    async def delete_recurring(self, user_id: str, meeting_id: str) -> None:
        await self.require(user_id, meeting_id)
        await self.meetings.delete(meeting_id)

    async def occurrences(
        self, user_id: str, range_start: str, range_end: str, today: Optional[str] = None
    ) -> List[ScheduleOccurrence]:
        """
        Expand every active recurring meeting over [range_start, range_end].

        Args:
            user_id: Owner of the meetings
            range_start: First day, ``YYYY-MM-DD``
            range_end: Last day, ``YYYY-MM-DD``
            today: Override for "today" (``YYYY-MM-DD``)

        Returns:
            Occurrences sorted by date, then time of day
        """
        start, end = parse_date(range_start), parse_date(range_end)
        if end < start:
            raise ValidationError("range_end must not be before range_start")

        meetings = await self.meetings.list_for_user(user_id, active_only=True)
        if not meetings:
            return []

        meeting_ids = {m.id for m in meetings}
        logs = {
            (log.recurring_meeting_id, format_date(log.occurrence_date)): log
            for log in await self.logs.list_in_range(user_id, start, end)
            if log.recurring_meeting_id in meeting_ids
        }

        today = today or get_today_str()
        result: List[ScheduleOccurrence] = []
        for meeting in meetings:
            meeting_read = RecurringMeetingRead.model_validate(meeting)
            for day in generate_occurrences(meeting, start, end):
                log = logs.get((meeting.id, day))
                result.append(
                    ScheduleOccurrence(
                        meeting=meeting_read,
                        date=day,
                        log=ScheduleLogRead.model_validate(log) if log is not None else None,
                        is_past=day < today,
                        is_today=day == today,
                    )
                )
        result.sort(key=lambda occ: (occ.date, occ.meeting.time_of_day))
        return result

    async def upsert_log(self, user_id: str, data: ScheduleLogUpsert) -> ScheduleLog:
        """
        Create or update the log for one (meeting, date).

        The request carries the whole log, so an existing row is overwritten
        with exactly the flags and notes given.
        """
        await self.require(user_id, data.recurring_meeting_id)
        log = await self.logs.find(data.recurring_meeting_id, data.occurrence_date)
        if log is None:
            log = ScheduleLog(
                user_id=user_id,
                recurring_meeting_id=data.recurring_meeting_id,
                occurrence_date=data.occurrence_date,
                invite_sent=data.invite_sent,
                attended=data.attended,
                notes=data.notes,
            )
            return await self.logs.create(log)

        log.invite_sent = data.invite_sent
        log.attended = data.attended
        log.notes = data.notes
        return await self.logs.update(log)

    async def action_needed(self, user_id: str, today: Optional[str] = None) -> List[ActionNeededItem]:
        """Occurrences of the last week through today that still need attention."""
        today = today or get_today_str()
        items: List[ActionNeededItem] = []
        for occ in await self.occurrences(user_id, add_days(today, -ACTION_LOOKBACK_DAYS), today, today=today):
            invite_sent = occ.log.invite_sent if occ.log else False
            attended = occ.log.attended if occ.log else False
            reasons = []
            if not invite_sent:
                reasons.append("Invite not sent")
            if occ.is_past and not attended:
                reasons.append("Not attended")
            if reasons:
                items.append(ActionNeededItem(occurrence=occ, reasons=reasons))
        return items