"""Built-in named filter presets for the object and issue lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

ViewKind = Literal["objects", "issues"]


@dataclass(frozen=True)
class SavedView:
    id: str
    name: str
    filters: Dict[str, str] = field(default_factory=dict)


OBJECT_VIEWS: List[SavedView] = [
    SavedView("obj-blocked", "Blocked", {"status": "blocked"}),
    SavedView("obj-at-risk", "At Risk", {"status": "at_risk"}),
    SavedView("obj-stale", "Stale (>15d)", {"sort": "aging", "order": "desc"}),
    SavedView("obj-dp", "Demand Planning", {"module": "demand_planning"}),
    SavedView("obj-sp", "Supply Planning", {"module": "supply_planning"}),
]

ISSUE_VIEWS: List[SavedView] = [
    SavedView("iss-open", "All Open", {"status": "open,in_progress,blocked"}),
    SavedView("iss-blocked", "Blocked", {"status": "blocked"}),
    SavedView("iss-deps", "Dependencies", {"issue_type": "dependency"}),
]


def list_views(kind: ViewKind) -> List[SavedView]:
    return OBJECT_VIEWS if kind == "objects" else ISSUE_VIEWS


def get_view(kind: ViewKind, view_id: str) -> Optional[SavedView]:
    return next((view for view in list_views(kind) if view.id == view_id), None)
