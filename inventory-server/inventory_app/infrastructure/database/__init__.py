"""Database infrastructure helpers (engine, sessions, migrations)."""

from .base import Base
from .session import (
    build_engine,
    build_session_factory,
    claim_write_lock,
    get_engine,
    get_session_factory,
    init_db,
    write_session,
)

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "claim_write_lock",
    "get_engine",
    "get_session_factory",
    "init_db",
    "write_session",
]
