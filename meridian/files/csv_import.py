"""
CSV import of objects and issues.

Rows are validated independently. Row numbers in errors count the header as
row 1, so the first data row is row 2. Only the first failing check of a row
is reported.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from typing import Dict, Generic, Iterator, List, Optional, Sequence, TypeVar

from meridian.core.models.domain.enums import (
    MODULE_CATEGORIES,
    IssueStatus,
    IssueType,
    LifecycleStage,
    ModuleType,
    ObjectStatus,
    RegionType,
    SourceSystem,
)
from meridian.core.models.io.imports import RowError

T = TypeVar("T")

VALID_MODULES = [m.value for m in ModuleType]
VALID_OBJECT_STATUSES = [
    ObjectStatus.on_track.value,
    ObjectStatus.at_risk.value,
    ObjectStatus.blocked.value,
    ObjectStatus.completed.value,
]
VALID_STAGES = [s.value for s in LifecycleStage]
VALID_ISSUE_TYPES = [t.value for t in IssueType]
VALID_ISSUE_STATUSES = [s.value for s in IssueStatus]
VALID_REGIONS = [r.value for r in RegionType]
VALID_SOURCE_SYSTEMS = [s.value for s in SourceSystem]

OBJECT_TEMPLATE = (
    "name,module,status,lifecycle_stage,owner_alias,description,category,region,source_system\n"
    "Example Object,demand_planning,on_track,requirements,JSmith,Sample description,master_data,global,erp_primary"
)
ISSUE_TEMPLATE = (
    "title,object_name,issue_type,lifecycle_stage,status,next_action,owner_alias,description\n"
    "Example Issue,Example Object,data_quality,extraction,open,follow_up,JSmith,Sample issue description"
)


@dataclass
class ParsedCSV:
    headers: List[str] = field(default_factory=list)
    rows: List[Dict[str, str]] = field(default_factory=list)


@dataclass
class ValidationResult(Generic[T]):
    valid: List[T] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)


@dataclass
class ObjectImportRow:
    name: str
    module: str
    status: str
    lifecycle_stage: Optional[str] = None
    owner_alias: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    region: Optional[str] = None
    source_system: Optional[str] = None


@dataclass
class IssueImportRow:
    title: str
    object_name: str
    issue_type: str
    lifecycle_stage: str
    status: str
    next_action: Optional[str] = None
    owner_alias: Optional[str] = None
    description: Optional[str] = None


def parse_csv(text: str) -> ParsedCSV:
    """
    Parse CSV text into lower-cased headers and trimmed row dicts.

    Quoted fields may contain commas, newlines and doubled quotes. Rows whose
    cells are all blank are dropped; short rows are padded with "".
    """
    lines = [line for line in csv.reader(io.StringIO(text, newline="")) if any(cell.strip() for cell in line)]
    if not lines:
        return ParsedCSV()

    headers = [h.strip().lower() for h in lines[0]]
    rows = []
    for line in lines[1:]:
        rows.append({header: (line[i] if i < len(line) else "").strip() for i, header in enumerate(headers)})
    return ParsedCSV(headers=headers, rows=rows)


def _missing(row: Dict[str, str], required: Sequence[str]) -> List[str]:
    return [name for name in required if not row.get(name)]


def _invalid_attribute(row: Dict[str, str]) -> Optional[str]:
    category = row.get("category")
    if category:
        allowed = MODULE_CATEGORIES[row["module"]]
        if category not in allowed:
            return f'Invalid category "{category}" for module {row["module"]}. Valid: {", ".join(allowed)}'
    if row.get("region") and row["region"] not in VALID_REGIONS:
        return f'Invalid region "{row["region"]}". Valid: {", ".join(VALID_REGIONS)}'
    if row.get("source_system") and row["source_system"] not in VALID_SOURCE_SYSTEMS:
        return f'Invalid source_system "{row["source_system"]}". Valid: {", ".join(VALID_SOURCE_SYSTEMS)}'
    return None


def validate_object_rows(rows: List[Dict[str, str]]) -> ValidationResult[ObjectImportRow]:
    result: ValidationResult[ObjectImportRow] = ValidationResult()
    for index, row in enumerate(rows):
        row_num = index + 2
        missing = _missing(row, ("name", "module", "status"))
        if missing:
            result.errors.append(RowError(row=row_num, message=f"Missing required fields: {', '.join(missing)}"))
            continue
        if row["module"] not in VALID_MODULES:
            result.errors.append(
                RowError(row=row_num, message=f'Invalid module "{row["module"]}". Valid: {", ".join(VALID_MODULES)}')
            )
            continue
        if row["status"] not in VALID_OBJECT_STATUSES:
            result.errors.append(
                RowError(
                    row=row_num,
                    message=f'Invalid status "{row["status"]}". Valid: {", ".join(VALID_OBJECT_STATUSES)}',
                )
            )
            continue
        if row.get("lifecycle_stage") and row["lifecycle_stage"] not in VALID_STAGES:
            result.errors.append(RowError(row=row_num, message=f'Invalid lifecycle_stage "{row["lifecycle_stage"]}"'))
            continue
        error = _invalid_attribute(row)
        if error:
            result.errors.append(RowError(row=row_num, message=error))
            continue

        result.valid.append(
            ObjectImportRow(
                name=row["name"],
                module=row["module"],
                status=row["status"],
                lifecycle_stage=row.get("lifecycle_stage") or None,
                owner_alias=row.get("owner_alias") or None,
                description=row.get("description") or None,
                category=row.get("category") or None,
                region=row.get("region") or None,
                source_system=row.get("source_system") or None,
            )
        )
    return result


def validate_issue_rows(rows: List[Dict[str, str]]) -> ValidationResult[IssueImportRow]:
    result: ValidationResult[IssueImportRow] = ValidationResult()
    for index, row in enumerate(rows):
        row_num = index + 2
        missing = _missing(row, ("title", "object_name", "issue_type", "lifecycle_stage", "status"))
        if missing:
            result.errors.append(RowError(row=row_num, message=f"Missing required fields: {', '.join(missing)}"))
            continue
        if row["issue_type"] not in VALID_ISSUE_TYPES:
            result.errors.append(RowError(row=row_num, message=f'Invalid issue_type "{row["issue_type"]}"'))
            continue
        if row["lifecycle_stage"] not in VALID_STAGES:
            result.errors.append(RowError(row=row_num, message=f'Invalid lifecycle_stage "{row["lifecycle_stage"]}"'))
            continue
        if row["status"] not in VALID_ISSUE_STATUSES:
            result.errors.append(RowError(row=row_num, message=f'Invalid status "{row["status"]}"'))
            continue

        result.valid.append(
            IssueImportRow(
                title=row["title"],
                object_name=row["object_name"],
                issue_type=row["issue_type"],
                lifecycle_stage=row["lifecycle_stage"],
                status=row["status"],
                next_action=row.get("next_action") or None,
                owner_alias=row.get("owner_alias") or None,
                description=row.get("description") or None,
            )
        )
    return result


def batched(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """Consecutive slices of ``items`` of at most ``size`` elements."""
    for start in range(0, len(items), size):
        yield list(items[start : start + size])
