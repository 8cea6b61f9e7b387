"""
Favorite exercise model.

Identity is the exercise id, not the surrogate ``id``: at most one row per
exercise id (enforced by a unique constraint).
"""

import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from trainlog.models.base import new_id, utcnow


class FavoriteExercise(SQLModel, table=True):
    __tablename__ = "favorite_exercises"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    exercise_id: str = Field(nullable=False, unique=True, index=True, max_length=100)
    created_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime)
