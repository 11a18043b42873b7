"""
Application factory and entrypoint.

    uvicorn warehouse_catalog.main:create_app --factory
    # or
    python -m warehouse_catalog.main
"""
import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.error_handlers import register_exception_handlers
from .api.v1 import api_router
from .config.settings import Settings, get_settings
from .core.logging import RequestIDMiddleware, setup_logging
from .database.session import Database
from .services.catalog import build_item_service, build_warehouse_service
from .utils.metadata import get_project_version

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
    *,
    configure_logging: bool = True,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: defaults to `get_settings()` (environment / .env).
        database: an existing handle to use. When omitted the app builds one from
            settings and disposes it at shutdown; an injected handle is left to its owner.
        configure_logging: apply the dictConfig from settings.
    """
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings)

    owns_database = database is None
    if database is None:
        database = Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("app.startup", extra={"env": settings.ENV, "version": app.state.version})
        yield
        if owns_database:
            await database.dispose()
        logger.info("app.shutdown")

    version = get_project_version()
    app = FastAPI(title="Warehouse Catalog API", version=version, lifespan=lifespan)

    app.state.settings = settings
    app.state.database = database
    app.state.version = version
    app.state.started_at = time.monotonic()
    app.state.warehouse_service = build_warehouse_service(database, default_actor_id=settings.DEFAULT_ACTOR_ID)
    app.state.item_service = build_item_service(database, default_actor_id=settings.DEFAULT_ACTOR_ID)

    # Middleware added last runs first: request id is set before anything logs.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)
    return app


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "warehouse_catalog.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,  # logging is configured by create_app
    )


if __name__ == "__main__":
    run()
