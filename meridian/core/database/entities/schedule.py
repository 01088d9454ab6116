"""
Recurring meeting and schedule log entities.

A RecurringMeeting describes a schedule pattern; occurrences are never stored,
they are expanded on read. A ScheduleLog records what happened for one
occurrence and is unique per (meeting, date).
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import JSON, Field

from ..base import Base, new_id, utc_now


class RecurringMeeting(Base, table=True):
    """Table: meridian_recurring_meetings"""

    __tablename__ = "meridian_recurring_meetings"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: str = Field(index=True, max_length=128)

    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None)

    # Pattern
    recurrence: str = Field(default="weekly", max_length=16)
    day_of_week: Optional[int] = Field(default=None, description="0=Sunday .. 6=Saturday")
    day_of_month: Optional[int] = Field(default=None)
    custom_interval_days: Optional[int] = Field(default=None)
    time_of_day: str = Field(default="09:00", max_length=5)
    duration_minutes: int = Field(default=30)
    start_date: date
    end_date: Optional[date] = Field(default=None)

    linked_object_ids: List[str] = Field(default_factory=list, sa_type=JSON)
    linked_issue_ids: List[str] = Field(default_factory=list, sa_type=JSON)
    is_active: bool = Field(default=True, index=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"RecurringMeeting(id={self.id}, name={self.name}, recurrence={self.recurrence})"


class ScheduleLog(Base, table=True):
    """Table: meridian_schedule_logs"""

    __tablename__ = "meridian_schedule_logs"
    __table_args__ = (
        UniqueConstraint("recurring_meeting_id", "occurrence_date", name="uq_meridian_schedule_logs_occurrence"),
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: str = Field(index=True, max_length=128)
    recurring_meeting_id: str = Field(foreign_key="meridian_recurring_meetings.id", index=True, max_length=64)
    occurrence_date: date = Field(index=True)
    invite_sent: bool = Field(default=False)
    attended: bool = Field(default=False)
    notes: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
