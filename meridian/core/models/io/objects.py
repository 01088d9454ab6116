"""
Object I/O models for API requests and responses.

Objects are the tracked data-migration work items. The read model carries the
computed fields (aging, open issue count, progress) next to the stored row.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from meridian.core.models.domain.enums import (
    MODULE_CATEGORIES,
    LifecycleStage,
    ModuleType,
    ObjectCategory,
    ObjectStatus,
    RegionType,
    SourceSystem,
)


class ObjectRead(BaseModel):
    """Schema for reading a stored object row."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    module: str
    category: str
    region: str
    source_system: str
    current_stage: str
    stage_entered_at: datetime
    status: str
    owner_alias: Optional[str] = None
    team_alias: Optional[str] = None
    notes: Optional[str] = None
    is_archived: bool
    created_at: datetime
    updated_at: datetime


class ObjectWithComputed(ObjectRead):
    """Object row enriched with derived fields."""

    aging_days: int = Field(description="Whole days spent in the current stage")
    open_issue_count: int = Field(description="Issues on this object that are not closed")
    progress_percent: int = Field(description="Lifecycle completion derived from the current stage")


class ObjectCreate(BaseModel):
    """Schema for creating an object via API."""

    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(min_length=1)
    description: Optional[str] = None
    module: ModuleType
    category: ObjectCategory = ObjectCategory.master_data
    region: RegionType = RegionType.global_
    source_system: SourceSystem = SourceSystem.other
    current_stage: LifecycleStage = LifecycleStage.requirements
    status: ObjectStatus = ObjectStatus.on_track
    owner_alias: Optional[str] = None
    team_alias: Optional[str] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _category_allowed_for_module(self) -> "ObjectCreate":
        allowed = MODULE_CATEGORIES.get(self.module, [])
        if self.category not in allowed:
            raise ValueError(f"Category {self.category!r} is not valid for module {self.module!r}")
        return self


class ObjectUpdate(BaseModel):
    """Schema for partially updating an object via API."""

    model_config = ConfigDict(use_enum_values=True)

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    module: Optional[ModuleType] = None
    category: Optional[ObjectCategory] = None
    region: Optional[RegionType] = None
    source_system: Optional[SourceSystem] = None
    current_stage: Optional[LifecycleStage] = None
    status: Optional[ObjectStatus] = None
    owner_alias: Optional[str] = None
    team_alias: Optional[str] = None
    notes: Optional[str] = None
    is_archived: Optional[bool] = None
    stage_note: Optional[str] = Field(default=None, description="Note recorded on the stage history row")


class ObjectBulkUpdate(BaseModel):
    """Apply the same partial update to several objects."""

    ids: List[str] = Field(min_length=1)
    updates: ObjectUpdate


class ObjectName(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    module: str


class NextCodeRead(BaseModel):
    code: str


class StageHistoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    object_id: str
    from_stage: Optional[str] = None
    to_stage: str
    transitioned_at: datetime
    note: Optional[str] = None
