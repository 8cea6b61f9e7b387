"""
Local to cloud store migration.

Runs once per launch when the active store is the cloud store::

    IDLE -> CHECK_FLAG -> OPENING -> RECONCILING -> COMMITTING -> DONE
                 |            |            |              |
              SKIPPED       FAILED       FAILED         FAILED

``SKIPPED`` covers both "already migrated" and "no local store on disk";
in the latter case the flag is set so later launches stop looking.
``FAILED`` leaves the flag unset, so the next launch retries.  Retrying is
safe because every reconciliation step is a set difference by identity.

Failures are logged and reported, never raised.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from trainlog.core.exceptions import StoreOpenError
from trainlog.core.flags import MIGRATE_LOCAL_STORE_TO_CLOUD, FlagStore
from trainlog.db.container import StoreContainer, StoreKind, StoreLocation, open_store
from trainlog.sync.reconcile import reconcile_favorites, reconcile_settings, reconcile_workouts

logger = logging.getLogger(__name__)


class MigrationState(str, Enum):
    IDLE = "idle"
    CHECK_FLAG = "check_flag"
    OPENING = "opening"
    RECONCILING = "reconciling"
    COMMITTING = "committing"
    DONE = "done"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class MigrationReport:
    """Outcome of one migration run."""

    state: MigrationState
    workouts: int = 0
    favorites: int = 0
    settings: bool = False
    failed_step: Optional[str] = None
    error: Optional[str] = None


# Fixed order; settings last since it checks whether the destination has any settings
_STEPS = (
    ("workouts", reconcile_workouts),
    ("favorites", reconcile_favorites),
    ("settings", reconcile_settings),
)


class LocalToCloudMigrator:
    """Pulls the legacy local store into the active cloud store."""

    def __init__(self, active: StoreContainer, legacy_location: StoreLocation, flags: FlagStore,
                 flag_key: str = MIGRATE_LOCAL_STORE_TO_CLOUD, echo: bool = False):
        self.active = active
        self.legacy_location = legacy_location
        self.flags = flags
        self.flag_key = flag_key
        self.echo = echo

        self.state = MigrationState.IDLE
        self.report: Optional[MigrationReport] = None
        self._started = False

    def run(self) -> MigrationReport:
        """
        Migrate if needed.  Only the first call per instance does any work.

        Returns:
            Report of the run (or of the earlier run on repeated calls)
        """
        if self.active.kind is not StoreKind.CLOUD:
            return MigrationReport(state=self.state)
        if self._started:
            return self.report or MigrationReport(state=self.state)
        self._started = True

        self.report = self._migrate()
        return self.report

    async def run_in_background(self) -> MigrationReport:
        """Run the migration in a worker thread, off the event loop."""
        return await asyncio.to_thread(self.run)

    def _migrate(self) -> MigrationReport:
        self.state = MigrationState.CHECK_FLAG
        if self.flags.get(self.flag_key):
            return self._finish(MigrationReport(state=MigrationState.SKIPPED))

        if not self.legacy_location.exists():
            logger.info("No local store at %s, nothing to migrate", self.legacy_location.path)
            self.flags.set(self.flag_key)
            return self._finish(MigrationReport(state=MigrationState.SKIPPED))

        self.state = MigrationState.OPENING
        try:
            legacy = open_store(self.legacy_location, echo=self.echo)
        except StoreOpenError as exc:
            logger.error("Local store open error: %s", exc)
            return self._fail(MigrationReport(state=MigrationState.FAILED), "open", exc)

        try:
            return self._reconcile(legacy)
        finally:
            legacy.dispose()

    def _reconcile(self, legacy: StoreContainer) -> MigrationReport:
        report = MigrationReport(state=MigrationState.RECONCILING)

        with legacy.session() as source, self.active.session() as destination:
            self.state = MigrationState.RECONCILING
            for step, reconcile in _STEPS:
                try:
                    setattr(report, step, reconcile(source, destination))
                except SQLAlchemyError as exc:
                    logger.error("Local to cloud migration error in %s step: %s", step, exc)
                    destination.rollback()
                    return self._fail(report, step, exc)

            self.state = MigrationState.COMMITTING
            try:
                destination.commit()
            except SQLAlchemyError as exc:
                logger.error("Local to cloud migration commit error: %s", exc)
                destination.rollback()
                return self._fail(report, "commit", exc)

        self.flags.set(self.flag_key)
        report.state = MigrationState.DONE
        logger.info("Local to cloud migration done: %d workout(s), %d favorite(s), settings %s",
                    report.workouts, report.favorites, "copied" if report.settings else "kept")
        return self._finish(report)

    def _fail(self, report: MigrationReport, step: str, exc: Exception) -> MigrationReport:
        report.state = MigrationState.FAILED
        report.failed_step = step
        report.error = str(exc)
        return self._finish(report)

    def _finish(self, report: MigrationReport) -> MigrationReport:
        self.state = report.state
        return report
