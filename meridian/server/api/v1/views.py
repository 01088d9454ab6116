"""Saved View Endpoints: the built-in filter presets of the object and issue lists."""

from __future__ import annotations

from dataclasses import asdict
from typing import Literal

from fastapi import APIRouter, HTTPException, status

from meridian.tracking.saved_views import get_view, list_views

router = APIRouter()


@router.get("/{kind}", summary="List Saved Views")
async def saved_views(kind: Literal["objects", "issues"]):
    return [asdict(view) for view in list_views(kind)]


@router.get("/{kind}/{view_id}", summary="Get Saved View", responses={404: {"description": "Unknown view"}})
async def saved_view(kind: Literal["objects", "issues"], view_id: str):
    view = get_view(kind, view_id)
    if view is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Saved view {view_id} not found")
    return asdict(view)
