"""Dashboard and report row models produced by ``meridian.tracking.reports``."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, computed_field


class StageCount(BaseModel):
    stage: str
    label: str
    count: int


class ModuleSummary(BaseModel):
    module: str
    label: str
    object_count: int
    open_issues: int
    avg_progress: int
    blocked: int


class LabelledCount(BaseModel):
    key: Optional[str]
    label: str
    count: int


class ActivityEvent(BaseModel):
    time: datetime
    kind: str
    message: str
    entity_id: str


class DashboardStats(BaseModel):
    total_objects: int
    open_issues: int
    blocked_objects: int
    blocked_issues: int
    at_risk_objects: int
    avg_aging: int
    percent_live: int
    stage_pipeline: List[StageCount]
    object_status_breakdown: Dict[str, int]
    issue_status_breakdown: Dict[str, int]
    module_summary: List[ModuleSummary]
    next_action_summary: List[LabelledCount]
    issue_type_counts: List[LabelledCount]
    recent_activity: List[ActivityEvent]


class ModuleReportRow(BaseModel):
    module: str
    label: str
    total: int
    on_track: int
    at_risk: int
    blocked: int
    completed: int
    avg_aging: int


class StageReportRow(BaseModel):
    stage: str
    label: str
    count: int
    percent_of_total: int
    avg_days: int
    blocked: int


class OwnerReportRow(BaseModel):
    name: str
    total: int
    on_track: int
    at_risk: int
    blocked: int
    completed: int
    open_issues: int


class WeeklyTrendRow(BaseModel):
    week_start: str
    label: str
    objects_advanced: int
    issues_opened: int
    issues_closed: int

    @computed_field
    @property
    def net_issues(self) -> int:
        return self.issues_opened - self.issues_closed


class ReportBundle(BaseModel):
    by_module: List[ModuleReportRow]
    by_stage: List[StageReportRow]
    by_owner: List[OwnerReportRow]
    weekly_trend: List[WeeklyTrendRow]
    bottleneck_stage: Optional[str] = None
