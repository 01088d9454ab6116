"""Suggested object codes of the form ``OBJ-<module>-<category>-NNN``."""

from __future__ import annotations

import re
from typing import Iterable

MODULE_CODES = {
    "demand_planning": "DP",
    "supply_planning": "SP",
}

CATEGORY_CODES = {
    "master_data": "MD",
    "drivers": "DR",
    "priority_1": "P1",
    "priority_2": "P2",
    "priority_3": "P3",
}


def code_prefix(module: str, category: str) -> str:
    try:
        return f"OBJ-{MODULE_CODES[module]}-{CATEGORY_CODES[category]}-"
    except KeyError as e:
        raise ValueError(f"No object code defined for module={module!r} category={category!r}") from e


def compute_next_code(existing_names: Iterable[str], module: str, category: str) -> str:
    """Next free code for the module/category, one above the highest existing counter."""
    prefix = code_prefix(module, category)
    pattern = re.compile(rf"^{re.escape(prefix)}(\d+)")
    highest = 0
    for name in existing_names:
        match = pattern.match(name or "")
        if match:
            highest = max(highest, int(match.group(1)))
    return f"{prefix}{highest + 1:03d}"
