from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inventory_app import __version__
from inventory_app.api import create_api_router
from inventory_app.core.config import Settings, get_settings
from inventory_app.core.container import ApplicationContainer, get_container
from inventory_app.core.logging import configure_logging
from inventory_app.infrastructure.database import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: ApplicationContainer = app.state.container
    configure_logging(container.settings)
    await init_db(container.engine)
    yield
    await container.dispose()


def create_app(settings: Optional[Settings] = None, container: Optional[ApplicationContainer] = None) -> FastAPI:
    if container is None:
        container = ApplicationContainer.from_settings(settings) if settings is not None else get_container()
    settings = container.settings

    app = FastAPI(
        title=settings.project_name,
        description="Asset inventory and borrow-request service",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", summary="Liveness probe")
    async def health():
        return {"status": "ok", "version": __version__}

    return app


app = create_app()
