"""
Cloud sync endpoints.
"""

from fastapi import APIRouter, Depends, Request

from trainlog.api.dependencies import get_provider, get_sync_status_store
from trainlog.db.provider import ContainerProvider
from trainlog.schemas.sync import MigrationReportResponse, SyncStatusResponse
from trainlog.services.sync_status_service import SyncStatusStore
from trainlog.sync.migration import MigrationState

router = APIRouter()


def _to_response(store: SyncStatusStore, provider: ContainerProvider) -> SyncStatusResponse:
    return SyncStatusResponse(status=store.status, availability=store.availability, store_kind=provider.store_kind,
                              last_updated_at=store.last_updated_at)


@router.get("/status", summary="Current sync status.", response_model=SyncStatusResponse)
async def get_sync_status(store: SyncStatusStore = Depends(get_sync_status_store),
                          provider: ContainerProvider = Depends(get_provider)):
    return _to_response(store, provider)


@router.post("/refresh", summary="Re-check the cloud account status.", response_model=SyncStatusResponse)
async def refresh_sync_status(store: SyncStatusStore = Depends(get_sync_status_store),
                              provider: ContainerProvider = Depends(get_provider)):
    await store.refresh()
    return _to_response(store, provider)


@router.get("/migration", summary="Outcome of this launch's local to cloud migration.",
            response_model=MigrationReportResponse)
async def get_migration(request: Request, provider: ContainerProvider = Depends(get_provider)):
    report = request.app.state.migration_report
    if report is None:
        # still running
        return MigrationReportResponse(state=provider.migrator.state if provider.migrator else MigrationState.IDLE)
    return MigrationReportResponse(state=report.state, workouts=report.workouts, favorites=report.favorites,
                                   settings=report.settings, failed_step=report.failed_step, error=report.error)
