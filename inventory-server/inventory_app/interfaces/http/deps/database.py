"""Database and container dependency providers."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.container import ApplicationContainer
from inventory_app.infrastructure.database.session import claim_write_lock

READ_ONLY_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


def get_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


async def get_db_session(
    request: Request,
    container: ApplicationContainer = Depends(get_container),
) -> AsyncGenerator[AsyncSession, None]:
    async with container.session_factory() as session:
        try:
            if request.method not in READ_ONLY_METHODS:
                await claim_write_lock(session)
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


__all__ = ["get_container", "get_db_session"]
