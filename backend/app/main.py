"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, get_settings
from app.infrastructure.database import Base, create_engine, create_session_factory
from app.infrastructure.logging.log_config import setup_logging
from app.infrastructure.memory.in_memory_store import InMemoryServiceRequestStore
from app.infrastructure.storage.local_object_storage import LocalObjectStorage
from app.presentation.api.endpoints.objects import serving_router
from app.presentation.api.exception_handlers import register_exception_handlers
from app.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


def _configure_storage(app: FastAPI, settings: Settings) -> None:
    """Build the store selected by ``storage_backend`` and the attachment storage.

    Both live on ``app.state`` for the lifetime of the application and are
    handed to request handlers through the dependencies module.
    """
    app.state.settings = settings
    app.state.engine = None
    app.state.session_factory = None
    app.state.memory_store = None

    if settings.storage_backend == "memory":
        app.state.memory_store = InMemoryServiceRequestStore()
    else:
        engine = create_engine(settings.database_url)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)

    app.state.object_storage = LocalObjectStorage(
        upload_dir=settings.upload_dir,
        public_base_url=settings.public_base_url,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables, ensure the upload directory."""
    settings: Settings = app.state.settings
    setup_logging(settings)

    # 1. Create database tables (database backend only)
    engine = app.state.engine
    if engine is not None:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database ready (%s)", engine.url.render_as_string(hide_password=True))
    else:
        logger.warning("Using the in-memory store — records are lost on restart")

    # 2. Ensure upload directory exists
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    yield

    # Shutdown
    if engine is not None:
        await engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    _configure_storage(app, settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Mount API routes, then object serving at the root
    app.include_router(api_router)
    app.include_router(serving_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
