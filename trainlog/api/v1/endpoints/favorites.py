"""
Favorite exercise endpoints.

Async on purpose: the favorites store is only touched from the event loop.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from trainlog.api.dependencies import get_catalog, get_favorites_store
from trainlog.catalog import ExerciseCatalog
from trainlog.schemas.favorites import FavoritesResponse, FavoritesUpdate, FavoriteToggleResponse
from trainlog.services.favorites_service import ExerciseFavoritesStore

router = APIRouter()


@router.get("", summary="List favorite exercise ids.", response_model=FavoritesResponse)
async def list_favorites(store: ExerciseFavoritesStore = Depends(get_favorites_store)):
    return FavoritesResponse(exercise_ids=sorted(store.favorite_ids))


@router.put("", summary="Replace the favorite exercise ids.", response_model=FavoritesResponse)
async def replace_favorites(data: FavoritesUpdate, store: ExerciseFavoritesStore = Depends(get_favorites_store)):
    store.update(data.exercise_ids)
    return FavoritesResponse(exercise_ids=sorted(store.favorite_ids))


@router.post("/{exercise_id}/toggle", summary="Toggle an exercise as favorite.",
             response_model=FavoriteToggleResponse)
async def toggle_favorite(exercise_id: str, store: ExerciseFavoritesStore = Depends(get_favorites_store),
                          catalog: ExerciseCatalog = Depends(get_catalog)):
    if exercise_id not in catalog:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown exercise: '{exercise_id}'")
    return FavoriteToggleResponse(exercise_id=exercise_id, is_favorite=store.toggle(exercise_id))
