"""Issue I/O models for API requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from meridian.core.models.domain.enums import IssueStatus, IssueType, LifecycleStage, NextAction

from .types import UtcDateTime


class IssueRead(BaseModel):
    """Schema for reading a stored issue row."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    object_id: str
    title: str
    description: Optional[str] = None
    issue_type: str
    lifecycle_stage: str
    status: str
    next_action: Optional[str] = None
    owner_alias: Optional[str] = None
    raised_by_alias: Optional[str] = None
    blocked_by_object_id: Optional[str] = None
    blocked_by_note: Optional[str] = None
    decision: Optional[str] = None
    resolved_at: Optional[datetime] = None
    is_archived: bool
    created_at: datetime
    updated_at: datetime


class IssueWithObject(IssueRead):
    """Issue row joined with its parent object's name and module."""

    object_name: str
    object_module: str
    age_days: int = Field(description="Whole days open, up to resolution when resolved")


class IssueCreate(BaseModel):
    """Schema for creating an issue via API."""

    model_config = ConfigDict(use_enum_values=True)

    object_id: str
    title: str = Field(min_length=1)
    description: Optional[str] = None
    issue_type: IssueType
    lifecycle_stage: LifecycleStage
    status: IssueStatus = IssueStatus.open
    next_action: Optional[NextAction] = None
    owner_alias: Optional[str] = None
    raised_by_alias: Optional[str] = None
    blocked_by_object_id: Optional[str] = None
    blocked_by_note: Optional[str] = None
    decision: Optional[str] = None


class IssueUpdate(BaseModel):
    """Schema for partially updating an issue via API."""

    model_config = ConfigDict(use_enum_values=True)

    object_id: Optional[str] = None
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    issue_type: Optional[IssueType] = None
    lifecycle_stage: Optional[LifecycleStage] = None
    status: Optional[IssueStatus] = None
    next_action: Optional[NextAction] = None
    owner_alias: Optional[str] = None
    raised_by_alias: Optional[str] = None
    blocked_by_object_id: Optional[str] = None
    blocked_by_note: Optional[str] = None
    decision: Optional[str] = None
    resolved_at: Optional[UtcDateTime] = None
    is_archived: Optional[bool] = None


class IssueBulkUpdate(BaseModel):
    ids: List[str] = Field(min_length=1)
    updates: IssueUpdate
