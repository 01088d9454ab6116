"""Domain enums and constants shared by the database layer, services and exports."""

from __future__ import annotations

from .enums import (
    AgingLevel,
    ApiTokenScope,
    EntityType,
    IssueStatus,
    IssueType,
    LifecycleStage,
    MeetingType,
    ModuleType,
    NextAction,
    ObjectCategory,
    ObjectStatus,
    RecurrencePattern,
    RegionType,
    SourceSystem,
)

__all__ = [
    "AgingLevel",
    "ApiTokenScope",
    "EntityType",
    "IssueStatus",
    "IssueType",
    "LifecycleStage",
    "MeetingType",
    "ModuleType",
    "NextAction",
    "ObjectCategory",
    "ObjectStatus",
    "RecurrencePattern",
    "RegionType",
    "SourceSystem",
]
