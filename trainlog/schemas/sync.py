"""
Sync status and migration API schemas.
"""

import datetime
from typing import Optional

from pydantic import BaseModel

from trainlog.db.container import StoreKind
from trainlog.services.sync_status_service import SyncStatus
from trainlog.sync.account import Availability
from trainlog.sync.migration import MigrationState


class SyncStatusResponse(BaseModel):
    status: SyncStatus
    availability: Availability
    store_kind: StoreKind
    last_updated_at: Optional[datetime.datetime]


class MigrationReportResponse(BaseModel):
    state: MigrationState
    workouts: int = 0
    favorites: int = 0
    settings: bool = False
    failed_step: Optional[str] = None
    error: Optional[str] = None
