"""Comment and pin I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from meridian.core.models.domain.enums import EntityType


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    entity_type: str
    entity_id: str
    body: str
    author_alias: Optional[str] = None
    created_at: datetime


class CommentCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    entity_type: EntityType
    entity_id: str
    body: str = Field(min_length=1)
    author_alias: Optional[str] = None


class PinRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    entity_type: str
    entity_id: str
    created_at: datetime


class PinToggle(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    entity_type: EntityType
    entity_id: str


class PinState(BaseModel):
    entity_type: str
    entity_id: str
    pinned: bool
