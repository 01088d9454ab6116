"""
Meeting entity.

A recorded meeting with its transcript and the structured minutes generated
from it. Link lists are stored as JSON arrays; always assign a new list when
changing them so the change is flushed.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import DateTime
from sqlmodel import JSON, Field

from ..base import Base, new_id, utc_now


class Meeting(Base, table=True):
    """Table: meridian_meetings"""

    __tablename__ = "meridian_meetings"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: str = Field(index=True, max_length=128)

    title: str = Field(max_length=500)
    meeting_date: date = Field(index=True)
    transcript: str = Field(default="")
    meeting_type: str = Field(default="full_mom", max_length=32)

    # Generated minutes
    tldr: Optional[str] = Field(default=None)
    discussion_points: Optional[List[str]] = Field(default=None, sa_type=JSON)
    next_steps: Optional[List[Dict[str, Any]]] = Field(default=None, sa_type=JSON)
    action_log: Optional[str] = Field(default=None)
    quote: Optional[str] = Field(default=None)
    model_used: Optional[str] = Field(default=None, max_length=64)

    linked_object_ids: List[str] = Field(default_factory=list, sa_type=JSON)
    linked_issue_ids: List[str] = Field(default_factory=list, sa_type=JSON)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"Meeting(id={self.id}, title={self.title}, date={self.meeting_date})"
