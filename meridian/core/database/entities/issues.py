"""
Issue entity.

Issues are problems or action items raised against an object. They are
soft-deleted through ``is_archived``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class Issue(Base, table=True):
    """Entity for an issue attached to an object.

    Table: meridian_issues
    """

    __tablename__ = "meridian_issues"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: str = Field(index=True, max_length=128)
    object_id: str = Field(foreign_key="meridian_objects.id", index=True, max_length=64)

    title: str = Field(max_length=500)
    description: Optional[str] = Field(default=None)
    issue_type: str = Field(index=True, max_length=32)
    lifecycle_stage: str = Field(index=True, max_length=32)
    status: str = Field(default="open", index=True, max_length=32)
    next_action: Optional[str] = Field(default=None, max_length=32)

    owner_alias: Optional[str] = Field(default=None, max_length=128)
    raised_by_alias: Optional[str] = Field(default=None, max_length=128)
    blocked_by_object_id: Optional[str] = Field(default=None, max_length=64)
    blocked_by_note: Optional[str] = Field(default=None)
    decision: Optional[str] = Field(default=None)
    resolved_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    is_archived: bool = Field(default=False, index=True)

    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"Issue(id={self.id}, title={self.title}, status={self.status})"
