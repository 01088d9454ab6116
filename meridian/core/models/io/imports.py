"""CSV import I/O models."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class RowError(BaseModel):
    """Validation failure for one CSV row (row 1 is the header)."""

    row: int
    message: str


class ImportPreview(BaseModel):
    total_rows: int
    valid_rows: int
    errors: List[RowError] = Field(default_factory=list)


class ImportResult(BaseModel):
    total_rows: int
    imported: int
    failed: int
    errors: List[str] = Field(default_factory=list)
    validation_errors: List[RowError] = Field(default_factory=list)
