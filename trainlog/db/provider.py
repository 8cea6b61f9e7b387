"""
Active store provider.

Decides once per launch which store the application runs on:

1. ask for the cloud account status (bounded by a timeout);
2. if available, try the cloud store;
3. otherwise, or if the cloud store fails to open, use the local store;
4. if the local store fails too, startup aborts with ``FatalStoreError``.

When the cloud store wins, the legacy local store is migrated into it.
"""

import logging
from typing import Optional

from trainlog.core.config import Settings
from trainlog.core.flags import FlagStore
from trainlog.db.container import (
    Opened,
    OpenAttempt,
    StoreContainer,
    StoreKind,
    StoreLocation,
    attempt_open,
    select_store,
)
from trainlog.sync.account import (
    DEFAULT_TIMEOUT_SECONDS,
    AccountStatus,
    AccountStatusChecker,
    DatabaseAccountStatus,
    StaticAccountStatus,
    fetch_account_status,
)
from trainlog.sync.migration import LocalToCloudMigrator, MigrationReport

logger = logging.getLogger(__name__)


class ContainerProvider:
    """Owns the active store container for the process lifetime."""

    def __init__(self, local_location: StoreLocation, cloud_location: Optional[StoreLocation], flags: FlagStore,
                 account_checker: AccountStatusChecker, account_timeout: float = DEFAULT_TIMEOUT_SECONDS,
                 echo: bool = False):
        self.local_location = local_location
        self.cloud_location = cloud_location
        self.flags = flags
        self.account_checker = account_checker
        self.account_timeout = account_timeout
        self.echo = echo

        self.account_status: Optional[AccountStatus] = None
        self.container: Optional[StoreContainer] = None
        self.migrator: Optional[LocalToCloudMigrator] = None

    @classmethod
    def from_settings(cls, config: Settings, flags: FlagStore) -> "ContainerProvider":
        local_location = StoreLocation.sqlite(StoreKind.LOCAL, config.local_store_path)

        cloud_location = None
        if config.CLOUD_SYNC_ENABLED:
            if config.CLOUD_DATABASE_URL:
                cloud_location = StoreLocation(StoreKind.CLOUD, config.CLOUD_DATABASE_URL)
            else:
                cloud_location = StoreLocation.sqlite(StoreKind.CLOUD, config.cloud_store_path)

        if config.CLOUD_ACCOUNT_STATUS is not None:
            checker: AccountStatusChecker = StaticAccountStatus(config.CLOUD_ACCOUNT_STATUS)
        elif cloud_location is not None:
            checker = DatabaseAccountStatus(cloud_location.url)
        else:
            checker = StaticAccountStatus(AccountStatus.NO_ACCOUNT)

        return cls(local_location, cloud_location, flags, checker,
                   account_timeout=config.ACCOUNT_STATUS_TIMEOUT_SECONDS, echo=config.DEBUG)

    @property
    def store_kind(self) -> Optional[StoreKind]:
        return self.container.kind if self.container else None

    async def activate(self) -> StoreContainer:
        """
        Open the active store.  Repeated calls return the same container.

        Raises:
            FatalStoreError: If no store can be opened
        """
        if self.container is not None:
            return self.container

        cloud_attempt: Optional[OpenAttempt] = None
        if self.cloud_location is not None:
            self.account_status = await fetch_account_status(self.account_checker, self.account_timeout)
            if self.account_status is AccountStatus.AVAILABLE:
                cloud_attempt = attempt_open(self.cloud_location, echo=self.echo)
            else:
                status = self.account_status.value if self.account_status else "unknown"
                logger.info("Cloud account status is %s, using the local store", status)

        local_attempt: Optional[OpenAttempt] = None
        if not isinstance(cloud_attempt, Opened):
            local_attempt = attempt_open(self.local_location, echo=self.echo)

        self.container = select_store(cloud_attempt, local_attempt)
        self.migrator = LocalToCloudMigrator(self.container, self.local_location, self.flags, echo=self.echo)
        return self.container

    async def migrate_local_store_to_cloud_if_needed(self) -> Optional[MigrationReport]:
        """Run the local to cloud migration in the background; None before activation."""
        if self.migrator is None:
            return None
        return await self.migrator.run_in_background()

    def close(self) -> None:
        if self.container is not None:
            self.container.dispose()
            self.container = None
