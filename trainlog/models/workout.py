"""
Workout and exercise set models.

A workout owns its sets: deleting the workout deletes them.  Both ids are
stable and are carried over unchanged when a workout is copied between
stores, so later reconciliation runs recognise records already copied.
"""

import datetime
from typing import List, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, SQLModel

from trainlog.models.base import new_id, utcnow


class Workout(SQLModel, table=True):
    """All sets logged on one calendar day.

    At most one workout exists per day; ``WorkoutService`` enforces it, the
    table does not.
    """

    __tablename__ = "workouts"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    date: datetime.datetime = Field(sa_type=DateTime, nullable=False, index=True)
    note: str = Field(default="", max_length=1000)

    sets: List["ExerciseSet"] = Relationship(
        back_populates="workout",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "ExerciseSet.position"},
    )


class ExerciseSet(SQLModel, table=True):
    """A single set.  ``weight`` is always stored in kilograms."""

    __tablename__ = "exercise_sets"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    workout_id: Optional[str] = Field(default=None, foreign_key="workouts.id", index=True)

    # Key into the read-only exercise catalog
    exercise_id: str = Field(nullable=False, max_length=100, index=True)

    weight: float = Field(default=0.0, nullable=False)
    reps: int = Field(default=0, nullable=False)
    duration_seconds: Optional[int] = Field(default=None)
    rpe: Optional[float] = Field(default=None)

    # Order within the workout
    position: int = Field(default=0, nullable=False)

    created_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime)

    workout: Optional[Workout] = Relationship(back_populates="sets")
