"""Unit tests for the Excel workbook builders."""

import io
from datetime import date, datetime

from openpyxl import load_workbook

from meridian.core.models.io.issues import IssueWithObject
from meridian.core.models.io.objects import ObjectWithComputed
from meridian.files.excel_export import (
    MAX_COLUMN_WIDTH,
    OBJECT_COLUMNS,
    build_full_workbook,
    build_objects_workbook,
    build_reports_workbook,
    export_filename,
    objects_to_rows,
    workbook_bytes,
)
from meridian.tracking.reports import build_reports

CREATED = datetime(2025, 3, 1, 10, 30)


def _object(name: str, module: str = "demand_planning", **overrides) -> ObjectWithComputed:
    data = dict(
        id=f"id-{name}",
        user_id="user-1",
        name=name,
        module=module,
        category="master_data",
        region="global",
        source_system="erp_primary",
        current_stage="push_to_target",
        stage_entered_at=CREATED,
        status="at_risk",
        is_archived=False,
        created_at=CREATED,
        updated_at=CREATED,
        aging_days=3,
        open_issue_count=1,
        progress_percent=67,
    )
    data.update(overrides)
    return ObjectWithComputed(**data)


def _issue(title: str, status: str = "open") -> IssueWithObject:
    return IssueWithObject(
        id=f"id-{title}",
        user_id="user-1",
        object_id="id-A",
        title=title,
        issue_type="data_quality",
        lifecycle_stage="extraction",
        status=status,
        is_archived=False,
        created_at=CREATED,
        updated_at=CREATED,
        object_name="A",
        object_module="demand_planning",
        age_days=1,
    )


def _reload(wb):
    return load_workbook(io.BytesIO(workbook_bytes(wb)))


class TestExportFilename:
    def test_dated_name(self):
        assert export_filename("objects", date(2025, 3, 12)) == "meridian-objects-2025-03-12.xlsx"
        assert export_filename("full-export", date(2025, 1, 2)) == "meridian-full-export-2025-01-02.xlsx"


class TestObjectRows:
    def test_values_use_display_labels(self):
        row = objects_to_rows([_object("A")])[0]
        assert row["Module"] == "Demand Planning"
        assert row["Current Stage"] == "Push to Target"
        assert row["Status"] == "At Risk"
        assert row["Source System"] == "ERP Primary"
        assert row["Region"] == "Global"
        assert row["Created"] == "2025-03-01"


class TestWorkbooks:
    def test_objects_workbook_header_and_rows(self):
        wb = _reload(build_objects_workbook([_object("A"), _object("B")]))
        ws = wb["Objects"]
        assert wb.sheetnames == ["Objects"]
        assert [cell.value for cell in ws[1]] == OBJECT_COLUMNS
        assert ws.max_row == 3
        assert ws["A2"].value == "A"
        assert ws["A1"].font.bold

    def test_column_width_is_capped(self):
        wb = _reload(build_objects_workbook([_object("A", description="x" * 200)]))
        assert wb["Objects"].column_dimensions["B"].width == MAX_COLUMN_WIDTH

    def test_full_workbook_sheets(self):
        objects = [_object("A"), _object("B", module="supply_planning", status="blocked")]
        issues = [_issue("open one"), _issue("done", status="closed")]

        wb = _reload(build_full_workbook(objects, issues))

        assert wb.sheetnames == [
            "Objects - Demand Planning",
            "Objects - Supply Planning",
            "Issues - Open",
            "Issues - Resolved",
            "Summary",
        ]
        assert wb["Issues - Open"].max_row == 2
        assert wb["Issues - Resolved"]["A2"].value == "done"
        summary = {row[0]: row[1:] for row in wb["Summary"].iter_rows(min_row=2, values_only=True)}
        assert summary["Total Objects"] == (1, 1, 2)
        assert summary["Blocked"] == (0, 1, 1)
        assert summary["Resolved Issues"] == (1, 0, 1)

    def test_reports_workbook_sheets(self):
        bundle = build_reports([_object("A")], [], [], now=datetime(2025, 3, 12))
        wb = _reload(build_reports_workbook(bundle))
        assert wb.sheetnames == ["By Module", "By Stage", "By Owner", "Weekly Trend"]
        assert wb["By Stage"].max_row == 10
        assert wb["Weekly Trend"].max_row == 13
