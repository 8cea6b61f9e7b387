"""
Cloud sync status.

Turns the cloud account status into the status shown to the user.
"""

import datetime
import logging
from enum import Enum
from typing import Optional

from trainlog.models.base import utcnow
from trainlog.sync.account import (
    DEFAULT_TIMEOUT_SECONDS,
    AccountStatus,
    AccountStatusChecker,
    Availability,
    availability_for,
    fetch_account_status,
)

logger = logging.getLogger(__name__)


class SyncStatus(str, Enum):
    CHECKING = "checking"
    SYNCED = "synced"
    LOCAL_ONLY = "localOnly"
    ERROR = "error"


_STATUS = {
    Availability.AVAILABLE: SyncStatus.SYNCED,
    Availability.NO_ACCOUNT: SyncStatus.LOCAL_ONLY,
    Availability.RESTRICTED: SyncStatus.LOCAL_ONLY,
    Availability.UNKNOWN: SyncStatus.ERROR,
}


class SyncStatusStore:
    """Current sync status, refreshed on demand."""

    def __init__(self, checker: AccountStatusChecker, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.checker = checker
        self.timeout = timeout

        self.status = SyncStatus.CHECKING
        self.availability = Availability.UNKNOWN
        self.last_updated_at: Optional[datetime.datetime] = None
        self._refreshing = False

    async def refresh(self) -> None:
        """Re-query the account status.  Overlapping calls are dropped."""
        if self._refreshing:
            return
        self._refreshing = True
        self.status = SyncStatus.CHECKING
        try:
            self.apply(await fetch_account_status(self.checker, self.timeout))
        finally:
            self.last_updated_at = utcnow()
            self._refreshing = False

    def apply(self, account_status: Optional[AccountStatus]) -> None:
        self.availability = availability_for(account_status)
        self.status = _STATUS[self.availability]
        logger.debug("Sync status %s (availability %s)", self.status.value, self.availability.value)
