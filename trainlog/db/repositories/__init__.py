"""Database repositories."""

from trainlog.db.repositories.favorite_exercise import FavoriteExerciseRepository
from trainlog.db.repositories.user_settings import UserSettingsRepository
from trainlog.db.repositories.workout import WorkoutRepository

__all__ = [
    "WorkoutRepository",
    "FavoriteExerciseRepository",
    "UserSettingsRepository",
]
