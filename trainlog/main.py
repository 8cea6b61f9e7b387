"""
FastAPI application factory.

Creates and configures the FastAPI application instance.  Startup activates
the store (cloud when available, local otherwise) and schedules the local to
cloud migration as a background task; requests are served while it runs.
The runtime favorites and settings stores bind once the task finishes, so
their default settings record never pre-empts migrated settings.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from trainlog.api.v1.router import api_router
from trainlog.catalog import ExerciseCatalog
from trainlog.core.config import Settings, settings
from trainlog.core.flags import SQLFlagStore
from trainlog.core.logging import configure_logging
from trainlog.db.provider import ContainerProvider
from trainlog.services.favorites_service import ExerciseFavoritesStore
from trainlog.services.settings_service import UserSettingsStore
from trainlog.services.sync_status_service import SyncStatusStore

logger = logging.getLogger(__name__)


async def _migrate_then_bind(app: FastAPI, provider: ContainerProvider, session) -> None:
    report = await provider.migrate_local_store_to_cloud_if_needed()
    app.state.favorites.bind(session)
    app.state.user_settings.bind(session)
    app.state.migration_report = report


def create_app(config: Optional[Settings] = None) -> FastAPI:
    config = config or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(config.LOG_LEVEL)

        flags = SQLFlagStore(config.defaults_path, echo=config.DEBUG)
        provider = ContainerProvider.from_settings(config, flags)
        container = await provider.activate()
        logger.info("Active store: %s", container)

        app.state.provider = provider
        app.state.catalog = ExerciseCatalog.from_json(config.EXERCISE_CATALOG_PATH)
        app.state.favorites = ExerciseFavoritesStore(flags)
        app.state.user_settings = UserSettingsStore(flags)
        app.state.migration_report = None

        session = container.session()
        app.state.migration_task = asyncio.create_task(_migrate_then_bind(app, provider, session))

        app.state.sync_status = SyncStatusStore(provider.account_checker, config.ACCOUNT_STATUS_TIMEOUT_SECONDS)
        await app.state.sync_status.refresh()

        try:
            yield
        finally:
            if not app.state.migration_task.done():
                logger.info("Waiting for the store migration to finish")
            await app.state.migration_task
            session.close()
            provider.close()
            flags.close()

    app = FastAPI(
        title=config.PROJECT_NAME,
        version=config.VERSION,
        description="Workout log with local to cloud store migration.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan)

    # Include API router
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        """Root endpoint - health check."""
        return {
            "message": "TrainLog API",
            "version": config.VERSION,
            "status": "healthy"
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        store_kind = app.state.provider.store_kind
        return {
            "status": "healthy",
            "service": "trainlog-api",
            "version": config.VERSION,
            "store": store_kind.value if store_kind else None
        }

    @app.get("/info")
    async def info():
        return {
            "project name": config.PROJECT_NAME,
            "version": config.VERSION,
            "store": app.state.provider.store_kind,
            "migration": app.state.provider.migrator.state if app.state.provider.migrator else None
        }

    return app


app = create_app()
