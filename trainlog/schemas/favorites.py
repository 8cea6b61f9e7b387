"""
Favorite exercise API schemas.
"""

from pydantic import BaseModel


class FavoritesResponse(BaseModel):
    exercise_ids: list[str]


class FavoritesUpdate(BaseModel):
    """Replaces the whole favorite set."""

    exercise_ids: list[str]


class FavoriteToggleResponse(BaseModel):
    exercise_id: str
    is_favorite: bool
