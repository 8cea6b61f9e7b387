"""
Exercise catalog endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from trainlog.api.dependencies import get_catalog
from trainlog.catalog import ExerciseCatalog, ExerciseDefinition

router = APIRouter()


@router.get("", summary="List the exercise catalog.", response_model=list[ExerciseDefinition])
def list_exercises(catalog: ExerciseCatalog = Depends(get_catalog)):
    return catalog.all()


@router.get("/{exercise_id}", summary="Get one exercise.", response_model=ExerciseDefinition)
def get_exercise(exercise_id: str, catalog: ExerciseCatalog = Depends(get_catalog)):
    exercise = catalog.get(exercise_id)
    if not exercise:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown exercise: '{exercise_id}'")
    return exercise
