"""SQLModel store models."""

from trainlog.models.favorite_exercise import FavoriteExercise
from trainlog.models.user_settings import UserSettings, WeightUnit
from trainlog.models.workout import ExerciseSet, Workout

# Tables every data store (local and cloud) is created with
STORE_TABLES = [
    Workout.__table__,
    ExerciseSet.__table__,
    FavoriteExercise.__table__,
    UserSettings.__table__,
]

__all__ = [
    "Workout",
    "ExerciseSet",
    "FavoriteExercise",
    "UserSettings",
    "WeightUnit",
    "STORE_TABLES",
]
