"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from trainlog.api.v1.endpoints import exercises, favorites, sync, user_settings, workouts

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    favorites.router, prefix="/favorites", tags=["Favorite exercises"]
)
api_router.include_router(
    user_settings.router, prefix="/settings", tags=["Settings"]
)
api_router.include_router(
    sync.router, prefix="/sync", tags=["Cloud sync"]
)
api_router.include_router(
    workouts.router, prefix="/workouts", tags=["Workouts"]
)
api_router.include_router(
    exercises.router, prefix="/exercises", tags=["Exercise catalog"]
)
