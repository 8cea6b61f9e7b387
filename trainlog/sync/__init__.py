"""Local/cloud store reconciliation and migration."""

from trainlog.sync.account import AccountStatus, Availability, fetch_account_status
from trainlog.sync.migration import LocalToCloudMigrator, MigrationReport, MigrationState
from trainlog.sync.reconcile import collapse_settings, reconcile_favorites, reconcile_settings, reconcile_workouts

__all__ = [
    "AccountStatus",
    "Availability",
    "fetch_account_status",
    "LocalToCloudMigrator",
    "MigrationReport",
    "MigrationState",
    "collapse_settings",
    "reconcile_favorites",
    "reconcile_settings",
    "reconcile_workouts",
]
