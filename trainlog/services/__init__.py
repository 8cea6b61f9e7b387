"""Runtime stores and business logic services."""

from trainlog.services.favorites_service import ExerciseFavoritesStore
from trainlog.services.settings_service import UserSettingsStore
from trainlog.services.sync_status_service import SyncStatus, SyncStatusStore
from trainlog.services.workout_service import WorkoutService

__all__ = [
    "ExerciseFavoritesStore",
    "UserSettingsStore",
    "SyncStatus",
    "SyncStatusStore",
    "WorkoutService",
]
