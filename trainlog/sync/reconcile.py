"""
Union-by-identity reconciliation between two stores.

Each ``reconcile_*`` function copies the source records the destination
does not have yet and returns how much it staged.  Nothing is committed
here: the caller commits the destination once, after every step ran.

Identity is what makes the copy safe to repeat:

* workouts and sets keep their ids across stores;
* favorites are identified by exercise id (a fresh surrogate id is fine);
* settings are only copied into a destination that has none.
"""

import logging
from typing import Optional

from sqlmodel import Session

from trainlog.db.repositories import FavoriteExerciseRepository, UserSettingsRepository, WorkoutRepository
from trainlog.models import ExerciseSet, FavoriteExercise, UserSettings, Workout

logger = logging.getLogger(__name__)


def copy_workout(workout: Workout) -> Workout:
    """Deep-copy a workout and its sets, preserving every id."""
    sets = [
        ExerciseSet(
            id=exercise_set.id,
            exercise_id=exercise_set.exercise_id,
            weight=exercise_set.weight,
            reps=exercise_set.reps,
            duration_seconds=exercise_set.duration_seconds,
            rpe=exercise_set.rpe,
            position=exercise_set.position,
            created_at=exercise_set.created_at,
        )
        for exercise_set in workout.sets
    ]
    return Workout(id=workout.id, date=workout.date, note=workout.note, sets=sets)


def reconcile_workouts(source: Session, destination: Session) -> int:
    """
    Copy the source workouts whose id is absent from the destination.

    An empty source returns before the destination is queried.

    Returns:
        Number of workouts staged in the destination
    """
    source_workouts = WorkoutRepository(source).get_all()
    if not source_workouts:
        return 0

    repository = WorkoutRepository(destination)
    existing_ids = repository.get_ids()

    copied = 0
    for workout in source_workouts:
        if workout.id in existing_ids:
            continue
        repository.add(copy_workout(workout))
        copied += 1
    return copied


def reconcile_favorites(source: Session, destination: Session) -> int:
    """
    Copy the source favorites whose exercise id is absent from the destination.

    Returns:
        Number of favorites staged in the destination
    """
    source_favorites = FavoriteExerciseRepository(source).get_all()
    if not source_favorites:
        return 0

    repository = FavoriteExerciseRepository(destination)
    existing_ids = repository.get_exercise_ids()

    copied = 0
    for favorite in source_favorites:
        if favorite.exercise_id in existing_ids:
            continue
        repository.add(FavoriteExercise(exercise_id=favorite.exercise_id, created_at=favorite.created_at))
        existing_ids.add(favorite.exercise_id)
        copied += 1
    return copied


def reconcile_settings(source: Session, destination: Session) -> bool:
    """
    Seed the destination settings from the most recent source record.

    Existing destination settings always win: if the destination has any
    settings record nothing is written.

    Returns:
        True when a settings record was staged
    """
    candidates = UserSettingsRepository(source).get_all_by_recency()
    if not candidates:
        return False

    repository = UserSettingsRepository(destination)
    if repository.exists_any():
        return False

    candidate = candidates[0]
    repository.add(UserSettings(id=candidate.id, weight_unit_raw=candidate.weight_unit_raw,
                                updated_at=candidate.updated_at))
    return True


def collapse_settings(session: Session) -> Optional[UserSettings]:
    """
    Keep the most recently updated settings record and delete the others.

    The deletes are staged; the caller commits.

    Returns:
        The canonical record, or None when the store has no settings
    """
    repository = UserSettingsRepository(session)
    records = repository.get_all_by_recency()
    if not records:
        return None

    primary, *duplicates = records
    for duplicate in duplicates:
        repository.delete(duplicate)
    if duplicates:
        logger.info("Collapsed %d duplicate settings record(s), kept %s", len(duplicates), primary.id)
    return primary
