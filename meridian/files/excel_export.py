"""
Excel exports built with openpyxl.

Every sheet is a header row followed by one row per record. Columns are
auto-fitted to ``min(longest value + 2, 50)`` characters.
"""

from __future__ import annotations

import io
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from meridian.core.models.domain.enums import (
    CATEGORY_LABELS,
    ISSUE_STATUS_LABELS,
    ISSUE_TYPE_LABELS,
    MODULE_LABELS,
    OBJECT_STATUS_LABELS,
    REGION_LABELS,
    SOURCE_SYSTEM_LABELS,
    STAGE_LABELS,
    TERMINAL_ISSUE_STATUSES,
    ModuleType,
    ObjectStatus,
    label_for,
)
from meridian.core.models.io.issues import IssueWithObject
from meridian.core.models.io.objects import ObjectWithComputed
from meridian.core.models.io.reports import ReportBundle

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
MAX_COLUMN_WIDTH = 50

HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="2F5496", end_color="2F5496", fill_type="solid")

Row = Dict[str, Any]

OBJECT_COLUMNS = [
    "Name",
    "Description",
    "Module",
    "Category",
    "Region",
    "Source System",
    "Current Stage",
    "Status",
    "Owner",
    "Team",
    "Aging (days)",
    "Open Issues",
    "Progress (%)",
    "Created",
    "Last Updated",
]

ISSUE_COLUMNS = [
    "Title",
    "Description",
    "Parent Object",
    "Module",
    "Issue Type",
    "Lifecycle Stage",
    "Status",
    "Owner",
    "Raised By",
    "Age (days)",
    "Decision",
    "Blocked By",
    "Created",
    "Resolved",
]


def _format_date(value: Optional[datetime]) -> str:
    return value.date().isoformat() if value else ""


def export_filename(kind: str, today: Optional[date] = None) -> str:
    """``meridian-<kind>-YYYY-MM-DD.xlsx``"""
    return f"meridian-{kind}-{(today or date.today()).isoformat()}.xlsx"


def objects_to_rows(objects: Sequence[ObjectWithComputed]) -> List[Row]:
    return [
        {
            "Name": obj.name,
            "Description": obj.description or "",
            "Module": label_for(MODULE_LABELS, obj.module),
            "Category": label_for(CATEGORY_LABELS, obj.category),
            "Region": label_for(REGION_LABELS, obj.region),
            "Source System": label_for(SOURCE_SYSTEM_LABELS, obj.source_system),
            "Current Stage": label_for(STAGE_LABELS, obj.current_stage),
            "Status": label_for(OBJECT_STATUS_LABELS, obj.status),
            "Owner": obj.owner_alias or "",
            "Team": obj.team_alias or "",
            "Aging (days)": obj.aging_days,
            "Open Issues": obj.open_issue_count,
            "Progress (%)": obj.progress_percent,
            "Created": _format_date(obj.created_at),
            "Last Updated": _format_date(obj.updated_at),
        }
        for obj in objects
    ]


def issues_to_rows(issues: Sequence[IssueWithObject]) -> List[Row]:
    return [
        {
            "Title": issue.title,
            "Description": issue.description or "",
            "Parent Object": issue.object_name,
            "Module": label_for(MODULE_LABELS, issue.object_module),
            "Issue Type": label_for(ISSUE_TYPE_LABELS, issue.issue_type),
            "Lifecycle Stage": label_for(STAGE_LABELS, issue.lifecycle_stage),
            "Status": label_for(ISSUE_STATUS_LABELS, issue.status),
            "Owner": issue.owner_alias or "",
            "Raised By": issue.raised_by_alias or "",
            "Age (days)": issue.age_days,
            "Decision": issue.decision or "",
            "Blocked By": issue.blocked_by_note or "",
            "Created": _format_date(issue.created_at),
            "Resolved": _format_date(issue.resolved_at),
        }
        for issue in issues
    ]


def _write_sheet(wb: Workbook, title: str, columns: Sequence[str], rows: Sequence[Row]) -> None:
    ws = wb.create_sheet(title)
    ws.append(list(columns))
    for cell in ws[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
    for row in rows:
        ws.append([row.get(column, "") for column in columns])

    for index, column in enumerate(columns, start=1):
        longest = max([len(column)] + [len(str(row.get(column, ""))) for row in rows])
        ws.column_dimensions[get_column_letter(index)].width = min(longest + 2, MAX_COLUMN_WIDTH)


def _new_workbook() -> Workbook:
    wb = Workbook()
    wb.remove(wb.active)
    return wb


def build_objects_workbook(objects: Sequence[ObjectWithComputed]) -> Workbook:
    wb = _new_workbook()
    _write_sheet(wb, "Objects", OBJECT_COLUMNS, objects_to_rows(objects))
    return wb


def build_issues_workbook(issues: Sequence[IssueWithObject]) -> Workbook:
    wb = _new_workbook()
    _write_sheet(wb, "Issues", ISSUE_COLUMNS, issues_to_rows(issues))
    return wb


def build_full_workbook(objects: Sequence[ObjectWithComputed], issues: Sequence[IssueWithObject]) -> Workbook:
    """Objects split by module, issues split into open and resolved, plus a summary sheet."""
    wb = _new_workbook()
    dp = [o for o in objects if o.module == ModuleType.demand_planning.value]
    sp = [o for o in objects if o.module == ModuleType.supply_planning.value]
    open_issues = [i for i in issues if i.status not in TERMINAL_ISSUE_STATUSES]
    resolved_issues = [i for i in issues if i.status in TERMINAL_ISSUE_STATUSES]

    _write_sheet(wb, "Objects - Demand Planning", OBJECT_COLUMNS, objects_to_rows(dp))
    _write_sheet(wb, "Objects - Supply Planning", OBJECT_COLUMNS, objects_to_rows(sp))
    _write_sheet(wb, "Issues - Open", ISSUE_COLUMNS, issues_to_rows(open_issues))
    _write_sheet(wb, "Issues - Resolved", ISSUE_COLUMNS, issues_to_rows(resolved_issues))

    def status_row(metric: str, status: str) -> Row:
        return {
            "Metric": metric,
            "Demand Planning": sum(1 for o in dp if o.status == status),
            "Supply Planning": sum(1 for o in sp if o.status == status),
            "Total": sum(1 for o in objects if o.status == status),
        }

    def issue_row(metric: str, group: Sequence[IssueWithObject]) -> Row:
        return {
            "Metric": metric,
            "Demand Planning": sum(1 for i in group if i.object_module == ModuleType.demand_planning.value),
            "Supply Planning": sum(1 for i in group if i.object_module == ModuleType.supply_planning.value),
            "Total": len(group),
        }

    summary = [
        {"Metric": "Total Objects", "Demand Planning": len(dp), "Supply Planning": len(sp), "Total": len(objects)},
        status_row("On Track", ObjectStatus.on_track.value),
        status_row("At Risk", ObjectStatus.at_risk.value),
        status_row("Blocked", ObjectStatus.blocked.value),
        status_row("Completed", ObjectStatus.completed.value),
        issue_row("Open Issues", open_issues),
        issue_row("Resolved Issues", resolved_issues),
    ]
    _write_sheet(wb, "Summary", ["Metric", "Demand Planning", "Supply Planning", "Total"], summary)
    return wb


def build_reports_workbook(bundle: ReportBundle) -> Workbook:
    """Module, stage, owner and weekly-trend reports, one sheet each."""
    wb = _new_workbook()
    _write_sheet(
        wb,
        "By Module",
        ["Module", "Total", "On Track", "At Risk", "Blocked", "Completed", "Avg Aging (days)"],
        [
            {
                "Module": row.label,
                "Total": row.total,
                "On Track": row.on_track,
                "At Risk": row.at_risk,
                "Blocked": row.blocked,
                "Completed": row.completed,
                "Avg Aging (days)": row.avg_aging,
            }
            for row in bundle.by_module
        ],
    )
    _write_sheet(
        wb,
        "By Stage",
        ["Stage", "Count", "% of Total", "Avg Days at Stage", "Blocked"],
        [
            {
                "Stage": row.label,
                "Count": row.count,
                "% of Total": f"{row.percent_of_total}%",
                "Avg Days at Stage": row.avg_days,
                "Blocked": row.blocked,
            }
            for row in bundle.by_stage
        ],
    )
    _write_sheet(
        wb,
        "By Owner",
        ["Owner", "Objects", "On Track", "At Risk", "Blocked"],
        [
            {
                "Owner": row.name,
                "Objects": row.total,
                "On Track": row.on_track,
                "At Risk": row.at_risk,
                "Blocked": row.blocked,
            }
            for row in bundle.by_owner
        ],
    )
    _write_sheet(
        wb,
        "Weekly Trend",
        ["Week", "Objects Advanced", "Issues Opened", "Issues Closed", "Net Issues"],
        [
            {
                "Week": row.label,
                "Objects Advanced": row.objects_advanced,
                "Issues Opened": row.issues_opened,
                "Issues Closed": row.issues_closed,
                "Net Issues": row.net_issues,
            }
            for row in bundle.weekly_trend
        ],
    )
    return wb


def workbook_bytes(wb: Workbook) -> bytes:
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
