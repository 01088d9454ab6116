"""Recurring meeting and schedule log repositories."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.schedule import RecurringMeeting, ScheduleLog
from .base import SqlRepository


class RecurringMeetingRepository(SqlRepository[RecurringMeeting]):
    default_order = "name"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, RecurringMeeting)

    async def list_for_user(self, user_id: str, active_only: bool = False) -> List[RecurringMeeting]:
        """A user's recurring meetings ordered by name."""
        stmt = select(RecurringMeeting).where(RecurringMeeting.user_id == user_id)
        if active_only:
            stmt = stmt.where(RecurringMeeting.is_active == True)  # noqa: E712
        stmt = stmt.order_by(RecurringMeeting.name.asc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete(self, entity_id: str) -> bool:
        """Delete a recurring meeting together with its occurrence logs."""
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self.session.execute(delete(ScheduleLog).where(ScheduleLog.recurring_meeting_id == entity_id))
        await self.session.delete(entity)
        await self.session.commit()
        return True


class ScheduleLogRepository(SqlRepository[ScheduleLog]):
    default_order = "occurrence_date"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ScheduleLog)

    async def list_in_range(self, user_id: str, start: date, end: date) -> List[ScheduleLog]:
        stmt = (
            select(ScheduleLog)
            .where(ScheduleLog.user_id == user_id)
            .where(ScheduleLog.occurrence_date >= start)
            .where(ScheduleLog.occurrence_date <= end)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find(self, recurring_meeting_id: str, occurrence_date: date) -> Optional[ScheduleLog]:
        stmt = (
            select(ScheduleLog)
            .where(ScheduleLog.recurring_meeting_id == recurring_meeting_id)
            .where(ScheduleLog.occurrence_date == occurrence_date)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()
