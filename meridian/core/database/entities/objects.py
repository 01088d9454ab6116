"""
Object and stage history entities.

Objects are the tracked work items. Every change of ``current_stage`` is
recorded as a StageHistory row; the service layer keeps the two in step.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class TrackedObject(Base, table=True):
    """Entity for a tracked data-migration object.

    Table: meridian_objects
    """

    __tablename__ = "meridian_objects"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: str = Field(index=True, max_length=128)

    name: str = Field(index=True, max_length=255)
    description: Optional[str] = Field(default=None)
    module: str = Field(index=True, max_length=32)
    category: str = Field(default="master_data", max_length=32)
    region: str = Field(default="global", max_length=32)
    source_system: str = Field(default="other", max_length=32)

    # Lifecycle
    current_stage: str = Field(default="requirements", index=True, max_length=32)
    stage_entered_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
    status: str = Field(default="on_track", index=True, max_length=32)

    owner_alias: Optional[str] = Field(default=None, max_length=128)
    team_alias: Optional[str] = Field(default=None, max_length=128)
    notes: Optional[str] = Field(default=None)
    is_archived: bool = Field(default=False, index=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"TrackedObject(id={self.id}, name={self.name}, stage={self.current_stage})"


class StageHistory(Base, table=True):
    """Entity for lifecycle stage transitions of an object.

    Table: meridian_stage_history
    """

    __tablename__ = "meridian_stage_history"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    object_id: str = Field(foreign_key="meridian_objects.id", index=True, max_length=64)
    from_stage: Optional[str] = Field(default=None, max_length=32)
    to_stage: str = Field(max_length=32)
    transitioned_at: datetime = Field(default_factory=utc_now, index=True, sa_type=DateTime)
    note: Optional[str] = Field(default=None)

    def __repr__(self) -> str:
        return f"StageHistory(object_id={self.object_id}, {self.from_stage} -> {self.to_stage})"
