"""
Workout log endpoints.

One workout per calendar day, addressed by its date.
"""

import datetime

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlmodel import Session

from trainlog.api.dependencies import get_catalog, get_db
from trainlog.catalog import ExerciseCatalog
from trainlog.schemas.workout import WorkoutDayUpdate, WorkoutResponse
from trainlog.services.workout_service import WorkoutService

router = APIRouter()


@router.get("/{date}", summary="Get the workout logged on a date.", response_model=WorkoutResponse)
def get_workout(date: datetime.date, db: Session = Depends(get_db)):
    workout = WorkoutService(db).get_day(date)
    if not workout:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No workout on {date}")
    return workout


@router.put("/{date}", summary="Replace the sets logged on a date.", response_model=WorkoutResponse,
            responses={204: {"description": "No sets left; the day's workout was removed."}})
def save_workout(date: datetime.date, data: WorkoutDayUpdate, db: Session = Depends(get_db),
                 catalog: ExerciseCatalog = Depends(get_catalog)):
    workout = WorkoutService(db, catalog).save_day(date, data)
    if workout is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return workout
