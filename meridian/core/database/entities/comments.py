"""
Comment and pin entities.

Both attach to either an object or an issue through
(``entity_type``, ``entity_id``) rather than a foreign key.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class Comment(Base, table=True):
    """Table: meridian_comments"""

    __tablename__ = "meridian_comments"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: str = Field(index=True, max_length=128)
    entity_type: str = Field(max_length=16)
    entity_id: str = Field(index=True, max_length=64)
    body: str
    author_alias: Optional[str] = Field(default=None, max_length=128)
    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=DateTime)


class Pin(Base, table=True):
    """A user's bookmark on an object or issue.

    Table: meridian_pins
    """

    __tablename__ = "meridian_pins"
    __table_args__ = (UniqueConstraint("user_id", "entity_type", "entity_id", name="uq_meridian_pins_entity"),)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: str = Field(index=True, max_length=128)
    entity_type: str = Field(max_length=16)
    entity_id: str = Field(max_length=64)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
