"""
Meeting I/O models.

Covers recorded meetings (with their AI-generated minutes), the minutes
generation request/response, and the action-item to issue conversion.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from meridian.core.models.domain.enums import (
    MODULE_CATEGORIES,
    IssueStatus,
    IssueType,
    LifecycleStage,
    MeetingType,
    ModuleType,
    ObjectCategory,
)


class NextStep(BaseModel):
    """One action item from the minutes."""

    action: str
    owner: str = "TBD"
    due_date: str = "TBD"


class MeetingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    meeting_date: date
    transcript: str
    meeting_type: str
    tldr: Optional[str] = None
    discussion_points: Optional[List[str]] = None
    next_steps: Optional[List[NextStep]] = None
    action_log: Optional[str] = None
    quote: Optional[str] = None
    model_used: Optional[str] = None
    linked_object_ids: List[str] = Field(default_factory=list)
    linked_issue_ids: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class MeetingWithLinks(MeetingRead):
    linked_object_names: List[str] = Field(default_factory=list)
    linked_issue_titles: List[str] = Field(default_factory=list)


class MeetingCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(min_length=1)
    meeting_date: date
    transcript: str = ""
    meeting_type: MeetingType = MeetingType.full_mom
    tldr: Optional[str] = None
    discussion_points: Optional[List[str]] = None
    next_steps: Optional[List[NextStep]] = None
    action_log: Optional[str] = None
    quote: Optional[str] = None
    model_used: Optional[str] = None
    linked_object_ids: List[str] = Field(default_factory=list)
    linked_issue_ids: List[str] = Field(default_factory=list)


class MeetingUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: Optional[str] = Field(default=None, min_length=1)
    meeting_date: Optional[date] = None
    transcript: Optional[str] = None
    meeting_type: Optional[MeetingType] = None
    tldr: Optional[str] = None
    discussion_points: Optional[List[str]] = None
    next_steps: Optional[List[NextStep]] = None
    action_log: Optional[str] = None
    quote: Optional[str] = None
    model_used: Optional[str] = None
    linked_object_ids: Optional[List[str]] = None
    linked_issue_ids: Optional[List[str]] = None


class GenerateMinutesRequest(BaseModel):
    transcript: str = ""
    mode: str = Field(default=MeetingType.full_mom.value, pattern="^(full_mom|quick_summary)$")


class MinutesContent(BaseModel):
    """Structured minutes as returned by the language model."""

    tldr: str = Field(description="Short summary of the meeting")
    discussion_points: List[str] = Field(default_factory=list, description="Key discussion points")
    next_steps: List[NextStep] = Field(default_factory=list, description="Action items with owner and due date")
    action_log: str = Field(default="", description="Lines formatted 'YYYY-MM-DD | Action'")
    quote: Optional[str] = Field(default=None, description="A notable verbatim quote, if any")


class GeneratedMinutes(MinutesContent):
    model_used: str


class NewObjectSpec(BaseModel):
    """Parent object to create before converting action items."""

    model_config = ConfigDict(use_enum_values=True)

    module: ModuleType
    category: ObjectCategory
    name: Optional[str] = Field(default=None, description="Defaults to the next suggested object code")
    owner_alias: Optional[str] = None

    @model_validator(mode="after")
    def _category_allowed_for_module(self) -> "NewObjectSpec":
        if self.category not in MODULE_CATEGORIES.get(self.module, []):
            raise ValueError(f"Category {self.category!r} is not valid for module {self.module!r}")
        return self


class ConvertEntry(BaseModel):
    action: str
    owner: Optional[str] = None


class ConvertToIssuesRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    entries: List[ConvertEntry] = Field(min_length=1)
    object_id: Optional[str] = None
    new_object: Optional[NewObjectSpec] = None
    issue_type: IssueType = IssueType.other
    lifecycle_stage: LifecycleStage = LifecycleStage.requirements
    status: IssueStatus = IssueStatus.open


class ConvertToIssuesResult(BaseModel):
    object_id: str
    created_issue_ids: List[str]
    linked_issue_ids: List[str]
