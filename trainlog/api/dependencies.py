"""
Shared API dependencies.

The application lifespan puts the provider, the runtime stores and the
catalog on ``app.state``; these dependencies hand them to endpoints.
"""

from typing import Generator

from fastapi import HTTPException, Request, status
from sqlmodel import Session

from trainlog.catalog import ExerciseCatalog
from trainlog.db.provider import ContainerProvider
from trainlog.services.favorites_service import ExerciseFavoritesStore
from trainlog.services.settings_service import UserSettingsStore
from trainlog.services.sync_status_service import SyncStatusStore


def get_provider(request: Request) -> ContainerProvider:
    return request.app.state.provider


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency for endpoints that need their own session on the active store.

    Yields:
        SQLModel Session instance
    """
    container = get_provider(request).container
    if container is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="No active store")
    with container.session() as session:
        yield session


def get_favorites_store(request: Request) -> ExerciseFavoritesStore:
    return request.app.state.favorites


def get_settings_store(request: Request) -> UserSettingsStore:
    return request.app.state.user_settings


def get_sync_status_store(request: Request) -> SyncStatusStore:
    return request.app.state.sync_status


def get_catalog(request: Request) -> ExerciseCatalog:
    return request.app.state.catalog
