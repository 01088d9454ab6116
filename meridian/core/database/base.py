"""
Base database models and utilities.

This module provides the foundational database components used across
all entities in the database layer using SQLModel.
"""

from __future__ import annotations

from uuid import uuid4

from pydantic import ConfigDict
from sqlmodel import SQLModel

from meridian.tracking.aging import utc_now


class Base(SQLModel):
    """Base class for all SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


def new_id() -> str:
    """Primary key factory: random UUID4 string."""
    return str(uuid4())


__all__ = ["Base", "new_id", "utc_now"]
