"""Shared field types for request models."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from meridian.tracking.aging import to_naive_utc

# Timestamps are stored as naive UTC; offsets on input are applied before storage.
UtcDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]
