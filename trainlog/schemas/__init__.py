"""Pydantic schemas for API request/response validation."""

from trainlog.schemas.favorites import FavoritesResponse, FavoritesUpdate, FavoriteToggleResponse
from trainlog.schemas.user_settings import UserSettingsResponse, UserSettingsUpdate
from trainlog.schemas.workout import ExerciseSetCreate, ExerciseSetResponse, WorkoutDayUpdate, WorkoutResponse

__all__ = [
    "FavoritesResponse",
    "FavoritesUpdate",
    "FavoriteToggleResponse",
    "UserSettingsResponse",
    "UserSettingsUpdate",
    "ExerciseSetCreate",
    "ExerciseSetResponse",
    "WorkoutDayUpdate",
    "WorkoutResponse",
]
