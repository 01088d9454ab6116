"""Tests for CSV import and Excel export endpoints."""

import io
from datetime import date

import pytest
from httpx import AsyncClient
from openpyxl import load_workbook

from meridian.files.csv_import import ISSUE_TEMPLATE, OBJECT_TEMPLATE
from meridian.files.excel_export import XLSX_MEDIA_TYPE

pytestmark = pytest.mark.asyncio

IMPORT_URL = "/api/v1/import"
EXPORT_URL = "/api/v1/export"

OBJECTS_CSV = (
    "Name,Module,Status,Lifecycle_Stage,Owner_Alias\n"
    "Customer Master,demand_planning,on_track,mapping,Sam\n"
    "Forecast Drivers,supply_planning,blocked,,\n"
    "Broken,warehouse,on_track,,\n"
    ",demand_planning,on_track,,\n"
)


def _csv(text: str, name: str = "upload.csv"):
    return {"file": (name, text.encode("utf-8"), "text/csv")}


class TestTemplates:
    @pytest.mark.parametrize("kind, template", [("objects", OBJECT_TEMPLATE), ("issues", ISSUE_TEMPLATE)])
    async def test_download(self, client: AsyncClient, kind: str, template: str):
        response = await client.get(f"{IMPORT_URL}/templates/{kind}")

        assert response.status_code == 200
        assert response.text == template
        assert response.headers["content-type"].startswith("text/csv")
        assert f'filename="{kind}-template.csv"' in response.headers["content-disposition"]

    async def test_unknown_kind(self, client: AsyncClient):
        response = await client.get(f"{IMPORT_URL}/templates/meetings")
        assert response.status_code == 422


class TestImportObjects:
    async def test_dry_run_writes_nothing(self, client: AsyncClient):
        response = await client.post(f"{IMPORT_URL}/objects", params={"dry_run": True}, files=_csv(OBJECTS_CSV))

        assert response.status_code == 200
        preview = response.json()
        assert preview["total_rows"] == 4
        assert preview["valid_rows"] == 2
        assert [error["row"] for error in preview["errors"]] == [4, 5]
        assert (await client.get("/api/v1/objects")).json() == []

    async def test_import(self, client: AsyncClient):
        response = await client.post(f"{IMPORT_URL}/objects", files=_csv(OBJECTS_CSV))

        assert response.status_code == 200
        result = response.json()
        assert result["imported"] == 2
        assert result["failed"] == 2
        assert result["errors"] == []
        assert len(result["validation_errors"]) == 2
        assert response.headers["X-Invalidate"] == "objects,object-names"

        objects = {row["name"]: row for row in (await client.get("/api/v1/objects")).json()}
        assert objects["Customer Master"]["current_stage"] == "mapping"
        assert objects["Customer Master"]["owner_alias"] == "Sam"
        assert objects["Forecast Drivers"]["current_stage"] == "requirements"
        assert objects["Forecast Drivers"]["region"] == "global"

    async def test_imported_objects_have_stage_history(self, client: AsyncClient):
        await client.post(f"{IMPORT_URL}/objects", files=_csv(OBJECTS_CSV))
        obj = next(row for row in (await client.get("/api/v1/objects")).json() if row["name"] == "Customer Master")

        history = (await client.get(f"/api/v1/objects/{obj['id']}/stage-history")).json()

        assert [(row["from_stage"], row["to_stage"]) for row in history] == [(None, "mapping")]

    async def test_non_utf8_file(self, client: AsyncClient):
        response = await client.post(
            f"{IMPORT_URL}/objects", files={"file": ("upload.csv", "name\nCafé".encode("latin-1"), "text/csv")}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "CSV file must be UTF-8 encoded"


class TestImportIssues:
    async def test_matches_objects_by_name(self, client: AsyncClient):
        await client.post("/api/v1/objects", json={"name": "Customer Master", "module": "demand_planning"})
        text = (
            "title,object_name,issue_type,lifecycle_stage,status\n"
            "Missing mapping,customer master,mapping,mapping,open\n"
            "Orphan,Nowhere,mapping,mapping,open\n"
            "Bad type,Customer Master,unknown,mapping,open\n"
        )

        response = await client.post(f"{IMPORT_URL}/issues", files=_csv(text))

        result = response.json()
        assert result["total_rows"] == 3
        assert result["imported"] == 1
        assert result["failed"] == 2
        assert result["errors"] == ['"Orphan": No matching object found for "Nowhere"']
        assert result["validation_errors"] == [{"row": 4, "message": 'Invalid issue_type "unknown"'}]

        issues = (await client.get("/api/v1/issues")).json()
        assert [row["title"] for row in issues] == ["Missing mapping"]
        assert issues[0]["object_name"] == "Customer Master"


class TestExports:
    """Test the xlsx downloads."""

    async def test_objects_workbook(self, client: AsyncClient):
        await client.post("/api/v1/objects", json={"name": "Customer Master", "module": "demand_planning"})

        response = await client.get(f"{EXPORT_URL}/objects")

        assert response.status_code == 200
        assert response.headers["content-type"] == XLSX_MEDIA_TYPE
        expected = f'attachment; filename="meridian-objects-{date.today().isoformat()}.xlsx"'
        assert response.headers["content-disposition"] == expected

        sheet = load_workbook(io.BytesIO(response.content)).active
        assert sheet.max_row == 2
        assert "Customer Master" in [cell.value for cell in sheet[2]]

    async def test_full_workbook_sheets(self, client: AsyncClient):
        response = await client.get(f"{EXPORT_URL}/full")

        workbook = load_workbook(io.BytesIO(response.content))
        assert "Summary" in workbook.sheetnames
        assert "full-export" in response.headers["content-disposition"]

    async def test_reports_workbook(self, client: AsyncClient):
        response = await client.get(f"{EXPORT_URL}/reports", params={"date_range": "all", "group_by": "team"})

        assert response.status_code == 200
        assert "meridian-reports-" in response.headers["content-disposition"]

    async def test_reports_unknown_range(self, client: AsyncClient):
        response = await client.get(f"{EXPORT_URL}/reports", params={"date_range": "1y"})
        assert response.status_code == 400
