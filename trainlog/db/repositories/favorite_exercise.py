"""
Favorite exercise repository.
"""

from typing import Optional

from sqlmodel import Session, select

from trainlog.models.favorite_exercise import FavoriteExercise


class FavoriteExerciseRepository:
    """Repository for FavoriteExercise database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_all(self) -> list[FavoriteExercise]:
        statement = select(FavoriteExercise).order_by(FavoriteExercise.created_at)
        return list(self.session.exec(statement).all())

    def get_exercise_ids(self) -> set[str]:
        return set(self.session.exec(select(FavoriteExercise.exercise_id)).all())

    def get_by_exercise_id(self, exercise_id: str) -> Optional[FavoriteExercise]:
        statement = select(FavoriteExercise).where(FavoriteExercise.exercise_id == exercise_id)
        return self.session.exec(statement).first()

    def add(self, favorite: FavoriteExercise) -> None:
        self.session.add(favorite)

    def delete(self, favorite: FavoriteExercise) -> None:
        self.session.delete(favorite)
