"""
Workout log API schemas.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from trainlog.models.user_settings import WeightUnit


class ExerciseSetCreate(BaseModel):
    """One logged set.  ``weight`` is in the unit of the enclosing request."""

    exercise_id: str = Field(..., min_length=1, max_length=100)
    weight: float = Field(0.0, ge=0)
    reps: int = Field(0, ge=0)
    duration_seconds: Optional[int] = Field(None, ge=0)
    rpe: Optional[float] = Field(None, ge=0, le=10)


class WorkoutDayUpdate(BaseModel):
    """Replaces everything logged on one day.  An empty ``sets`` list deletes the day's workout."""

    note: Optional[str] = Field(None, max_length=1000)
    unit: WeightUnit = WeightUnit.KG
    sets: list[ExerciseSetCreate] = Field(default_factory=list)


class ExerciseSetResponse(BaseModel):
    id: str
    exercise_id: str
    weight: float
    reps: int
    duration_seconds: Optional[int]
    rpe: Optional[float]
    position: int
    created_at: datetime.datetime

    class Config:
        from_attributes = True


class WorkoutResponse(BaseModel):
    id: str
    date: datetime.datetime
    note: str
    sets: list[ExerciseSetResponse]

    class Config:
        from_attributes = True
