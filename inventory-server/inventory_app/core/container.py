"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from inventory_app.core.config import Settings, get_settings
from inventory_app.infrastructure.database.session import build_engine, build_session_factory, get_engine, get_session_factory
from inventory_app.modules.borrowing import BorrowWorkflowEngine


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApplicationContainer":
        """Container with its own engine; used by tests and tooling."""
        engine = build_engine(settings)
        return cls(settings=settings, engine=engine, session_factory=build_session_factory(engine))

    def workflow_engine(self) -> BorrowWorkflowEngine:
        return BorrowWorkflowEngine(self.session_factory, self.settings)

    async def dispose(self) -> None:
        await self.engine.dispose()


@lru_cache()
def get_container() -> ApplicationContainer:
    """Process-wide container sharing the module-level engine."""
    return ApplicationContainer(
        settings=get_settings(),
        engine=get_engine(),
        session_factory=get_session_factory(),
    )


__all__ = ["ApplicationContainer", "get_container"]
