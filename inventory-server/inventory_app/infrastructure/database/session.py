"""Async SQLAlchemy engine and session management."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from inventory_app.core.config import Settings, get_settings
from inventory_app.infrastructure.database.base import Base

_engine: AsyncEngine | None = None
AsyncSessionFactory: async_sessionmaker[AsyncSession] | None = None

# connection execution option marking a unit of work that will write
WRITE_LOCK_OPTION = "sqlite_write_lock"


def _configure_sqlite(engine: AsyncEngine, begin_mode: str) -> None:
    """Take over transaction control from the sqlite driver.

    The driver otherwise defers BEGIN until the first DML statement, which
    breaks SAVEPOINT handling and lets two writers interleave. Connections
    opened through :func:`write_session` begin with ``begin_mode`` so writers
    serialize up front; every other transaction is DEFERRED and only takes a
    shared lock while it reads.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):  # noqa: ANN001
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):  # noqa: ANN001
        mode = begin_mode if conn.get_execution_options().get(WRITE_LOCK_OPTION) else "DEFERRED"
        conn.exec_driver_sql(f"BEGIN {mode}".strip())


def build_engine(settings: Settings) -> AsyncEngine:
    engine_kwargs: dict[str, Any] = {
        "echo": settings.database.echo or settings.debug,
        "future": True,
    }
    if settings.database.pool_size is not None:
        engine_kwargs["pool_size"] = settings.database.pool_size
    if settings.database.max_overflow is not None:
        engine_kwargs["max_overflow"] = settings.database.max_overflow

    engine = create_async_engine(settings.database_url, **engine_kwargs)
    if engine.dialect.name == "sqlite":
        _configure_sqlite(engine, settings.database.sqlite_begin)
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


def get_engine() -> AsyncEngine:
    global _engine, AsyncSessionFactory
    if _engine is None:
        _engine = build_engine(get_settings())
        AsyncSessionFactory = build_session_factory(_engine)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if AsyncSessionFactory is None:
        get_engine()

    assert AsyncSessionFactory is not None  # for mypy
    return AsyncSessionFactory


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create database tables in development mode (migrations preferred)."""
    # deferred so the tables register on Base.metadata
    from inventory_app.db import models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def claim_write_lock(session: AsyncSession) -> None:
    """Bind ``session`` to a connection that begins as a writer.

    Must run before the session executes its first statement.
    """
    await session.connection(execution_options={WRITE_LOCK_OPTION: True})


@asynccontextmanager
async def write_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    """Unit of work for mutating operations: commit on success, rollback on error."""
    async with session_factory.begin() as session:
        await claim_write_lock(session)
        yield session
