"""
Database layer for Meridian.

Structure:
- entities/: SQLModel table models organized by business domain
- repositories/: data access classes, one per table
- session.py: global engine and session factory management
- utils.py: engine/session factory helpers and table creation
"""

from .base import Base
from .session import (
    async_session_maker,
    engine,
    get_session,
    init_db,
)
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "Base",
    "async_session_maker",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "engine",
    "get_session",
    "init_db",
]
