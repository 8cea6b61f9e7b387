"""
Workout repository.

Handles database operations for Workout and its sets.  Writes are staged on
the session; the caller decides when to commit.
"""

import datetime
from typing import Optional

from sqlmodel import Session, select

from trainlog.models.workout import Workout


class WorkoutRepository:
    """Repository for Workout database operations."""

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    def get_all(self) -> list[Workout]:
        """
        Get all workouts, oldest first.

        Returns:
            List of workouts
        """
        statement = select(Workout).order_by(Workout.date)
        return list(self.session.exec(statement).all())

    def get_ids(self) -> set[str]:
        """
        Get the ids of every workout in the store.

        Returns:
            Set of workout ids
        """
        return set(self.session.exec(select(Workout.id)).all())

    def get_by_id(self, workout_id: str) -> Optional[Workout]:
        return self.session.get(Workout, workout_id)

    def get_in_range(self, start: datetime.datetime, end: datetime.datetime) -> Optional[Workout]:
        """
        Get the first workout with ``start <= date < end``.

        Args:
            start: Range start (inclusive)
            end: Range end (exclusive)

        Returns:
            Workout if found, None otherwise
        """
        statement = (select(Workout).where(Workout.date >= start, Workout.date < end).order_by(Workout.date))
        return self.session.exec(statement).first()

    def add(self, workout: Workout) -> None:
        self.session.add(workout)

    def delete(self, workout: Workout) -> None:
        self.session.delete(workout)
