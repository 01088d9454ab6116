"""Domain enums, display labels and thresholds for the tracker."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List


class LifecycleStage(str, Enum):
    """
    Fixed, ordered lifecycle every object moves through.

    Declaration order is the pipeline order; ``STAGE_ORDER`` relies on it.
    """

    requirements = "requirements"
    mapping = "mapping"
    extraction = "extraction"
    ingestion = "ingestion"
    transformation = "transformation"
    push_to_target = "push_to_target"
    validation = "validation"
    signoff = "signoff"
    live = "live"


class ModuleType(str, Enum):
    """Planning module an object belongs to."""

    demand_planning = "demand_planning"
    supply_planning = "supply_planning"


class ObjectCategory(str, Enum):
    """Object category; the allowed set depends on the module."""

    master_data = "master_data"
    drivers = "drivers"
    priority_1 = "priority_1"
    priority_2 = "priority_2"
    priority_3 = "priority_3"


class SourceSystem(str, Enum):
    erp_primary = "erp_primary"
    manual_file = "manual_file"
    external_1 = "external_1"
    external_2 = "external_2"
    data_lake = "data_lake"
    sub_system = "sub_system"
    other = "other"


class RegionType(str, Enum):
    region_eu = "region_eu"
    region_na = "region_na"
    region_apac = "region_apac"
    region_latam = "region_latam"
    region_mea = "region_mea"
    global_ = "global"


class ObjectStatus(str, Enum):
    """Health of an object. ``archived`` is kept for legacy rows."""

    on_track = "on_track"
    at_risk = "at_risk"
    blocked = "blocked"
    completed = "completed"
    archived = "archived"


class IssueType(str, Enum):
    mapping = "mapping"
    data_quality = "data_quality"
    dependency = "dependency"
    signoff = "signoff"
    technical = "technical"
    clarification = "clarification"
    other = "other"


class IssueStatus(str, Enum):
    """Issue workflow status. ``resolved`` and ``closed`` both end the issue."""

    open = "open"
    in_progress = "in_progress"
    blocked = "blocked"
    resolved = "resolved"
    closed = "closed"


class NextAction(str, Enum):
    observe = "observe"
    follow_up = "follow_up"
    set_meeting = "set_meeting"


class MeetingType(str, Enum):
    full_mom = "full_mom"
    quick_summary = "quick_summary"
    ai_conversation = "ai_conversation"


class RecurrencePattern(str, Enum):
    daily = "daily"
    weekly = "weekly"
    biweekly = "biweekly"
    monthly = "monthly"
    custom = "custom"


class EntityType(str, Enum):
    """Entity kinds that comments and pins can attach to."""

    object = "object"
    issue = "issue"


class ApiTokenScope(str, Enum):
    issues_read = "issues:read"
    issues_write = "issues:write"


class AgingLevel(str, Enum):
    normal = "normal"
    warning = "warning"
    critical = "critical"


STAGE_ORDER: List[LifecycleStage] = list(LifecycleStage)

STAGE_LABELS: Dict[str, str] = {
    LifecycleStage.requirements.value: "Requirements",
    LifecycleStage.mapping.value: "Mapping",
    LifecycleStage.extraction.value: "Extraction",
    LifecycleStage.ingestion.value: "Ingestion",
    LifecycleStage.transformation.value: "Transformation",
    LifecycleStage.push_to_target.value: "Push to Target",
    LifecycleStage.validation.value: "Validation",
    LifecycleStage.signoff.value: "Sign-off",
    LifecycleStage.live.value: "Live",
}

MODULE_LABELS: Dict[str, str] = {
    ModuleType.demand_planning.value: "Demand Planning",
    ModuleType.supply_planning.value: "Supply Planning",
}

CATEGORY_LABELS: Dict[str, str] = {
    ObjectCategory.master_data.value: "Master Data",
    ObjectCategory.drivers.value: "Drivers",
    ObjectCategory.priority_1.value: "Priority 1",
    ObjectCategory.priority_2.value: "Priority 2",
    ObjectCategory.priority_3.value: "Priority 3",
}

MODULE_CATEGORIES: Dict[str, List[str]] = {
    ModuleType.demand_planning.value: [ObjectCategory.master_data.value, ObjectCategory.drivers.value],
    ModuleType.supply_planning.value: [
        ObjectCategory.master_data.value,
        ObjectCategory.priority_1.value,
        ObjectCategory.priority_2.value,
        ObjectCategory.priority_3.value,
    ],
}

SOURCE_SYSTEM_LABELS: Dict[str, str] = {
    SourceSystem.erp_primary.value: "ERP Primary",
    SourceSystem.manual_file.value: "Manual File",
    SourceSystem.external_1.value: "External 1",
    SourceSystem.external_2.value: "External 2",
    SourceSystem.data_lake.value: "Data Lake",
    SourceSystem.sub_system.value: "Sub-System",
    SourceSystem.other.value: "Other",
}

REGION_LABELS: Dict[str, str] = {
    RegionType.region_eu.value: "EU",
    RegionType.region_na.value: "NA",
    RegionType.region_apac.value: "APAC",
    RegionType.region_latam.value: "LATAM",
    RegionType.region_mea.value: "MEA",
    RegionType.global_.value: "Global",
}

OBJECT_STATUS_LABELS: Dict[str, str] = {
    ObjectStatus.on_track.value: "On Track",
    ObjectStatus.at_risk.value: "At Risk",
    ObjectStatus.blocked.value: "Blocked",
    ObjectStatus.completed.value: "Completed",
    ObjectStatus.archived.value: "Archived",
}

ISSUE_TYPE_LABELS: Dict[str, str] = {
    IssueType.mapping.value: "Mapping",
    IssueType.data_quality.value: "Data Quality",
    IssueType.dependency.value: "Dependency",
    IssueType.signoff.value: "Sign-off",
    IssueType.technical.value: "Technical",
    IssueType.clarification.value: "Clarification",
    IssueType.other.value: "Other",
}

ISSUE_STATUS_LABELS: Dict[str, str] = {
    IssueStatus.open.value: "Open",
    IssueStatus.in_progress.value: "In Progress",
    IssueStatus.blocked.value: "Blocked",
    IssueStatus.resolved.value: "Resolved",
    IssueStatus.closed.value: "Closed",
}

NEXT_ACTION_LABELS: Dict[str, str] = {
    NextAction.observe.value: "Observe",
    NextAction.follow_up.value: "Follow Up",
    NextAction.set_meeting.value: "Set Meeting in Calendar",
}

RECURRENCE_LABELS: Dict[str, str] = {
    RecurrencePattern.daily.value: "Daily",
    RecurrencePattern.weekly.value: "Weekly",
    RecurrencePattern.biweekly.value: "Biweekly",
    RecurrencePattern.monthly.value: "Monthly",
    RecurrencePattern.custom.value: "Custom",
}

# Aging thresholds in days: (warning, critical)
OBJECT_AGING_THRESHOLDS = (8, 15)
ISSUE_AGING_THRESHOLDS = (4, 8)

# Issue statuses that end an issue's working life
TERMINAL_ISSUE_STATUSES = (IssueStatus.resolved.value, IssueStatus.closed.value)


def label_for(labels: Dict[str, str], value: str | None) -> str:
    """Look up a display label, falling back to the raw value."""
    if value is None:
        return ""
    return labels.get(value, value)
