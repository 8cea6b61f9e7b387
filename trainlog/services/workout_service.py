"""
Workout log service.

Saves what was logged on one calendar day.  There is at most one workout
per day: saving replaces the sets of the day's workout, creates the
workout when the day has none, and deletes it when no sets are left.
"""

import datetime
from typing import Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from trainlog.catalog import ExerciseCatalog
from trainlog.db.repositories.workout import WorkoutRepository
from trainlog.models.workout import ExerciseSet, Workout
from trainlog.schemas.workout import WorkoutDayUpdate


def start_of_day(day: datetime.date) -> datetime.datetime:
    """Midnight at the start of ``day``; the grouping key of workouts."""
    return datetime.datetime.combine(day, datetime.time.min)


class WorkoutService:
    """Service for the day-based workout log."""

    def __init__(self, session: Session, catalog: Optional[ExerciseCatalog] = None):
        self.session = session
        self.repository = WorkoutRepository(session)
        self.catalog = catalog

    def get_day(self, day: datetime.date) -> Optional[Workout]:
        start = start_of_day(day)
        return self.repository.get_in_range(start, start + datetime.timedelta(days=1))

    def save_day(self, day: datetime.date, data: WorkoutDayUpdate) -> Optional[Workout]:
        """
        Replace the sets logged on ``day``.

        Args:
            day: Calendar day
            data: Sets (weights in ``data.unit``) and optional note

        Returns:
            The day's workout, or None when it was deleted or never existed

        Raises:
            HTTPException: If a set references an exercise missing from the catalog
        """
        if self.catalog is not None:
            unknown = sorted({entry.exercise_id for entry in data.sets} - self.catalog.ids())
            if unknown:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                                    detail=f"Unknown exercise: {', '.join(unknown)}")

        existing = self.get_day(day)

        if not data.sets:
            if existing:
                self.repository.delete(existing)
                self.session.commit()
            return None

        sets = [
            ExerciseSet(exercise_id=entry.exercise_id, weight=data.unit.to_kilograms(entry.weight), reps=entry.reps,
                        duration_seconds=entry.duration_seconds, rpe=entry.rpe, position=position)
            for position, entry in enumerate(data.sets)
        ]

        if existing:
            existing.sets = sets
            if data.note is not None:
                existing.note = data.note
            workout = existing
        else:
            workout = Workout(date=start_of_day(day), note=data.note or "", sets=sets)
        self.repository.add(workout)

        self.session.commit()
        self.session.refresh(workout)
        return workout
