"""Recurring meeting, schedule log and occurrence I/O models."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from meridian.core.models.domain.enums import RecurrencePattern

_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class RecurringMeetingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    recurrence: str
    day_of_week: Optional[int] = None
    day_of_month: Optional[int] = None
    custom_interval_days: Optional[int] = None
    time_of_day: str
    duration_minutes: int
    start_date: date
    end_date: Optional[date] = None
    linked_object_ids: List[str] = Field(default_factory=list)
    linked_issue_ids: List[str] = Field(default_factory=list)
    is_active: bool
    created_at: datetime
    updated_at: datetime


class RecurringMeetingCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(min_length=1)
    description: Optional[str] = None
    recurrence: RecurrencePattern = RecurrencePattern.weekly
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6, description="0=Sunday .. 6=Saturday")
    day_of_month: Optional[int] = Field(default=None, ge=1, le=31)
    custom_interval_days: Optional[int] = Field(default=None, ge=1)
    time_of_day: str = Field(default="09:00", pattern=_TIME_PATTERN)
    duration_minutes: int = Field(default=30, ge=1)
    start_date: date
    end_date: Optional[date] = None
    linked_object_ids: List[str] = Field(default_factory=list)
    linked_issue_ids: List[str] = Field(default_factory=list)
    is_active: bool = True

    @model_validator(mode="after")
    def _end_not_before_start(self) -> "RecurringMeetingCreate":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class RecurringMeetingUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    recurrence: Optional[RecurrencePattern] = None
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    day_of_month: Optional[int] = Field(default=None, ge=1, le=31)
    custom_interval_days: Optional[int] = Field(default=None, ge=1)
    time_of_day: Optional[str] = Field(default=None, pattern=_TIME_PATTERN)
    duration_minutes: Optional[int] = Field(default=None, ge=1)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    linked_object_ids: Optional[List[str]] = None
    linked_issue_ids: Optional[List[str]] = None
    is_active: Optional[bool] = None


class ScheduleLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    recurring_meeting_id: str
    occurrence_date: date
    invite_sent: bool
    attended: bool
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ScheduleLogUpsert(BaseModel):
    """Full state of one occurrence log; omitted flags are stored as false and omitted notes as null."""

    recurring_meeting_id: str
    occurrence_date: date
    invite_sent: bool = False
    attended: bool = False
    notes: Optional[str] = None


class ScheduleOccurrence(BaseModel):
    meeting: RecurringMeetingRead
    date: str
    log: Optional[ScheduleLogRead] = None
    is_past: bool
    is_today: bool


class ActionNeededItem(BaseModel):
    occurrence: ScheduleOccurrence
    reasons: List[str]
