"""
Dashboard and report aggregation.

Pure functions over enriched objects/issues (and stage history for the weekly
trend). The same rows back the JSON report endpoints and the Excel reports
workbook.
"""

from __future__ import annotations

import math
from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from meridian.core.models.domain.enums import (
    ISSUE_STATUS_LABELS,
    ISSUE_TYPE_LABELS,
    MODULE_LABELS,
    NEXT_ACTION_LABELS,
    STAGE_LABELS,
    STAGE_ORDER,
    TERMINAL_ISSUE_STATUSES,
    IssueStatus,
    LifecycleStage,
    ObjectStatus,
)
from meridian.core.models.io.issues import IssueWithObject
from meridian.core.models.io.meetings import MeetingRead
from meridian.core.models.io.objects import ObjectWithComputed, StageHistoryRead
from meridian.core.models.io.reports import (
    ActivityEvent,
    DashboardStats,
    LabelledCount,
    ModuleReportRow,
    ModuleSummary,
    OwnerReportRow,
    ReportBundle,
    StageCount,
    StageReportRow,
    WeeklyTrendRow,
)

from .aging import round_half_up, stage_index

REPORT_STATUSES = (
    ObjectStatus.on_track.value,
    ObjectStatus.at_risk.value,
    ObjectStatus.blocked.value,
    ObjectStatus.completed.value,
)
UNASSIGNED = "(Unassigned)"
MAX_TREND_WEEKS = 12
RECENT_ACTIVITY_LIMIT = 12
# A stage holding more than this share of objects is flagged as a bottleneck
BOTTLENECK_PERCENT = 40


def _average(values: Sequence[int]) -> int:
    return round_half_up(sum(values) / len(values)) if values else 0


def _percent(part: int, whole: int) -> int:
    return round_half_up(part / whole * 100) if whole else 0


def is_open_issue(issue: IssueWithObject) -> bool:
    return issue.status not in TERMINAL_ISSUE_STATUSES


def filter_by_module(
    objects: List[ObjectWithComputed], issues: List[IssueWithObject], module: Optional[str]
) -> tuple[List[ObjectWithComputed], List[IssueWithObject]]:
    if not module or module == "all":
        return objects, issues
    return [o for o in objects if o.module == module], [i for i in issues if i.object_module == module]


def stage_pipeline(objects: Iterable[ObjectWithComputed]) -> List[StageCount]:
    counts: Dict[str, int] = defaultdict(int)
    for obj in objects:
        counts[obj.current_stage] += 1
    return [StageCount(stage=s.value, label=STAGE_LABELS[s.value], count=counts[s.value]) for s in STAGE_ORDER]


def _recent_activity(
    objects: List[ObjectWithComputed], issues: List[IssueWithObject], meetings: List[MeetingRead]
) -> List[ActivityEvent]:
    events: List[ActivityEvent] = []
    for issue in issues:
        events.append(
            ActivityEvent(
                time=issue.created_at,
                kind="issue_opened",
                message=f'Issue opened: "{issue.title}" on {issue.object_name}',
                entity_id=issue.id,
            )
        )
        if issue.resolved_at:
            events.append(
                ActivityEvent(
                    time=issue.resolved_at,
                    kind="issue_resolved",
                    message=f'Issue resolved: "{issue.title}"',
                    entity_id=issue.id,
                )
            )
    for obj in objects:
        events.append(
            ActivityEvent(time=obj.created_at, kind="object_created", message=f"Object created: {obj.name}", entity_id=obj.id)
        )
    for meeting in meetings:
        events.append(
            ActivityEvent(
                time=meeting.created_at,
                kind="meeting_recorded",
                message=f'Meeting recorded: "{meeting.title}"',
                entity_id=meeting.id,
            )
        )
    events.sort(key=lambda e: e.time, reverse=True)
    return events[:RECENT_ACTIVITY_LIMIT]


def dashboard_stats(
    objects: List[ObjectWithComputed],
    issues: List[IssueWithObject],
    meetings: Optional[List[MeetingRead]] = None,
) -> DashboardStats:
    """Headline numbers and breakdowns shown on the dashboard."""
    open_issues = [i for i in issues if is_open_issue(i)]
    pipeline = stage_pipeline(objects)
    live = next(s.count for s in pipeline if s.stage == LifecycleStage.live.value)

    module_summary: List[ModuleSummary] = []
    for module, label in MODULE_LABELS.items():
        mod_objects = [o for o in objects if o.module == module]
        if not mod_objects:
            continue
        module_summary.append(
            ModuleSummary(
                module=module,
                label=label,
                object_count=len(mod_objects),
                open_issues=sum(1 for i in open_issues if i.object_module == module),
                avg_progress=_average([o.progress_percent for o in mod_objects]),
                blocked=sum(1 for o in mod_objects if o.status == ObjectStatus.blocked.value),
            )
        )

    next_actions = [
        LabelledCount(key=key, label=label, count=sum(1 for i in issues if i.next_action == key))
        for key, label in NEXT_ACTION_LABELS.items()
    ]
    next_actions.append(
        LabelledCount(key=None, label="No action set", count=sum(1 for i in issues if not i.next_action))
    )

    issue_types = [
        LabelledCount(key=key, label=label, count=count)
        for key, label in ISSUE_TYPE_LABELS.items()
        if (count := sum(1 for i in issues if i.issue_type == key)) > 0
    ]

    return DashboardStats(
        total_objects=len(objects),
        open_issues=len(open_issues),
        blocked_objects=sum(1 for o in objects if o.status == ObjectStatus.blocked.value),
        blocked_issues=sum(1 for i in open_issues if i.status == IssueStatus.blocked.value),
        at_risk_objects=sum(1 for o in objects if o.status == ObjectStatus.at_risk.value),
        avg_aging=_average([o.aging_days for o in objects]),
        percent_live=_percent(live, len(objects)),
        stage_pipeline=pipeline,
        object_status_breakdown={
            s: n for s in REPORT_STATUSES if (n := sum(1 for o in objects if o.status == s)) > 0
        },
        issue_status_breakdown={
            s: n for s in ISSUE_STATUS_LABELS if (n := sum(1 for i in issues if i.status == s)) > 0
        },
        module_summary=module_summary,
        next_action_summary=next_actions,
        issue_type_counts=issue_types,
        recent_activity=_recent_activity(objects, issues, meetings or []),
    )


def module_report(objects: List[ObjectWithComputed]) -> List[ModuleReportRow]:
    rows = []
    for module, label in MODULE_LABELS.items():
        mod_objects = [o for o in objects if o.module == module]
        counts = {s: sum(1 for o in mod_objects if o.status == s) for s in REPORT_STATUSES}
        rows.append(
            ModuleReportRow(
                module=module,
                label=label,
                total=len(mod_objects),
                avg_aging=_average([o.aging_days for o in mod_objects]),
                **counts,
            )
        )
    return rows


def stage_report(objects: List[ObjectWithComputed]) -> List[StageReportRow]:
    total = len(objects)
    rows = []
    for stage in STAGE_ORDER:
        at_stage = [o for o in objects if o.current_stage == stage.value]
        rows.append(
            StageReportRow(
                stage=stage.value,
                label=STAGE_LABELS[stage.value],
                count=len(at_stage),
                percent_of_total=_percent(len(at_stage), total),
                avg_days=_average([o.aging_days for o in at_stage]),
                blocked=sum(1 for o in at_stage if o.status == ObjectStatus.blocked.value),
            )
        )
    return rows


def bottleneck_stage(rows: List[StageReportRow]) -> Optional[str]:
    """Stage holding the most objects, if it holds more than the bottleneck share."""
    if not rows:
        return None
    busiest = max(rows, key=lambda r: r.count)
    return busiest.stage if busiest.percent_of_total > BOTTLENECK_PERCENT else None


def owner_report(
    objects: List[ObjectWithComputed], issues: List[IssueWithObject], group_by: str = "owner"
) -> List[OwnerReportRow]:
    """Per-owner (or per-team) workload, busiest first."""
    field = "team_alias" if group_by == "team" else "owner_alias"
    groups: Dict[str, List[ObjectWithComputed]] = defaultdict(list)
    for obj in objects:
        groups[getattr(obj, field) or UNASSIGNED].append(obj)

    rows = []
    for name, group in groups.items():
        ids = {o.id for o in group}
        counts = {s: sum(1 for o in group if o.status == s) for s in REPORT_STATUSES}
        rows.append(
            OwnerReportRow(
                name=name,
                total=len(group),
                open_issues=sum(1 for i in issues if i.object_id in ids and is_open_issue(i)),
                **counts,
            )
        )
    rows.sort(key=lambda r: r.total, reverse=True)
    return rows


def _week_label(start: date) -> str:
    end = start + timedelta(days=6)
    return f"{start.day} {start:%b} - {end.day} {end:%b}"


def weekly_trend(
    stage_history: List[StageHistoryRead],
    issues: List[IssueWithObject],
    cutoff: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> List[WeeklyTrendRow]:
    """
    Monday-based weekly counts, oldest week first.

    Twelve weeks are reported, or fewer when ``cutoff`` is closer than that.
    """
    now = now or datetime.now()
    week_count = MAX_TREND_WEEKS
    if cutoff is not None:
        week_count = min(MAX_TREND_WEEKS, math.ceil((now - cutoff).total_seconds() / (7 * 86400)))

    this_monday = now.date() - timedelta(days=now.weekday())
    rows = []
    for offset in range(week_count - 1, -1, -1):
        start_day = this_monday - timedelta(weeks=offset)
        start = datetime.combine(start_day, time.min)
        end = datetime.combine(start_day + timedelta(days=6), time.max)

        advanced = sum(
            1
            for h in stage_history
            if h.from_stage is not None
            and start <= h.transitioned_at <= end
            and stage_index(h.to_stage) > stage_index(h.from_stage)
        )
        opened = sum(1 for i in issues if start <= i.created_at <= end)
        closed = sum(
            1
            for i in issues
            if i.resolved_at is not None and start <= i.resolved_at <= end and not is_open_issue(i)
        )
        rows.append(
            WeeklyTrendRow(
                week_start=start_day.isoformat(),
                label=_week_label(start_day),
                objects_advanced=advanced,
                issues_opened=opened,
                issues_closed=closed,
            )
        )
    return rows


def build_reports(
    objects: List[ObjectWithComputed],
    issues: List[IssueWithObject],
    stage_history: List[StageHistoryRead],
    cutoff: Optional[datetime] = None,
    group_by: str = "owner",
    now: Optional[datetime] = None,
) -> ReportBundle:
    by_stage = stage_report(objects)
    return ReportBundle(
        by_module=module_report(objects),
        by_stage=by_stage,
        by_owner=owner_report(objects, issues, group_by=group_by),
        weekly_trend=weekly_trend(stage_history, issues, cutoff=cutoff, now=now),
        bottleneck_stage=bottleneck_stage(by_stage),
    )
