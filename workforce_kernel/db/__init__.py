"""Database layer - engine, session scope and declarative base classes."""

from workforce_kernel.db.base import Base, TrackedBase, UUIDString
from workforce_kernel.db.engine import (
    create_tables,
    get_engine,
    get_session,
    init_engine_from_url,
    session_scope,
)

__all__ = [
    "init_engine_from_url",
    "get_engine",
    "get_session",
    "session_scope",
    "create_tables",
    "Base",
    "TrackedBase",
    "UUIDString",
]
