"""
Favorite exercises store.

Keeps the set of favorite exercise ids in memory, bound to one session on
the active store.  Mutations update the cache and write through at once;
when the write fails the cache is reloaded from the store.

On first bind it also imports the legacy favorites (a JSON list of exercise
ids kept under ``favoriteExerciseIDs``), exactly once.
"""

import logging
from typing import Iterable, Optional

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from trainlog.core.flags import LEGACY_FAVORITE_EXERCISE_IDS, MIGRATE_FAVORITE_EXERCISE_IDS, FlagStore
from trainlog.db.repositories.favorite_exercise import FavoriteExerciseRepository
from trainlog.models.favorite_exercise import FavoriteExercise

logger = logging.getLogger(__name__)

_LEGACY_IDS = TypeAdapter(list[str])


def decode_legacy_ids(raw: Optional[str]) -> set[str]:
    """Decode the legacy favorites blob; anything unreadable counts as empty."""
    if not raw:
        return set()
    try:
        return set(_LEGACY_IDS.validate_json(raw))
    except ValidationError:
        logger.warning("Ignoring unreadable legacy favorites blob")
        return set()


class ExerciseFavoritesStore:
    """In-memory favorite ids with write-through to the bound session."""

    def __init__(self, flags: FlagStore):
        self.flags = flags
        self.favorite_ids: set[str] = set()
        self.session: Optional[Session] = None

    def bind(self, session: Session) -> None:
        """Bind to ``session``; binding the session already bound does nothing."""
        if self.session is session:
            return
        self.session = session
        self._migrate_legacy_if_needed()
        self.reload()

    def is_favorite(self, exercise_id: str) -> bool:
        return exercise_id in self.favorite_ids

    def toggle(self, exercise_id: str) -> bool:
        """
        Flip the favorite state of an exercise.

        Returns:
            Whether the exercise is a favorite afterwards
        """
        if self.session is None:
            return self.is_favorite(exercise_id)

        repository = FavoriteExerciseRepository(self.session)
        record = repository.get_by_exercise_id(exercise_id)
        if record:
            repository.delete(record)
            self.favorite_ids.discard(exercise_id)
        else:
            repository.add(FavoriteExercise(exercise_id=exercise_id))
            self.favorite_ids.add(exercise_id)

        self._save_or_reload()
        return self.is_favorite(exercise_id)

    def update(self, exercise_ids: Iterable[str]) -> None:
        """Replace the favorite set with ``exercise_ids``."""
        ids = set(exercise_ids)
        if self.session is None:
            self.favorite_ids = ids
            return

        repository = FavoriteExerciseRepository(self.session)
        for exercise_id in sorted(ids - self.favorite_ids):
            repository.add(FavoriteExercise(exercise_id=exercise_id))
        for exercise_id in sorted(self.favorite_ids - ids):
            record = repository.get_by_exercise_id(exercise_id)
            if record:
                repository.delete(record)

        self.favorite_ids = ids
        self._save_or_reload()

    def reload(self) -> None:
        if self.session is None:
            return
        try:
            self.favorite_ids = FavoriteExerciseRepository(self.session).get_exercise_ids()
        except SQLAlchemyError as exc:
            logger.error("FavoriteExercise load error: %s", exc)
            self.session.rollback()
            self.favorite_ids = set()

    def _save_or_reload(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            logger.error("FavoriteExercise save error: %s", exc)
            self.session.rollback()
            self.reload()

    def _migrate_legacy_if_needed(self) -> None:
        if self.flags.get(MIGRATE_FAVORITE_EXERCISE_IDS):
            return

        legacy_ids = decode_legacy_ids(self.flags.get_string(LEGACY_FAVORITE_EXERCISE_IDS))
        if not legacy_ids:
            self.flags.set(MIGRATE_FAVORITE_EXERCISE_IDS)
            return

        repository = FavoriteExerciseRepository(self.session)
        try:
            for exercise_id in sorted(legacy_ids - repository.get_exercise_ids()):
                repository.add(FavoriteExercise(exercise_id=exercise_id))
            self.session.commit()
        except SQLAlchemyError as exc:
            # flag stays unset, the next bind retries
            logger.error("FavoriteExercise migration error: %s", exc)
            self.session.rollback()
            return

        self.flags.set(MIGRATE_FAVORITE_EXERCISE_IDS)
