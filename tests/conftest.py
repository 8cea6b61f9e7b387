"""Shared fixtures: real SQLite stores under ``tmp_path`` and an in-memory flag store."""

import datetime

import pytest

from trainlog.core.flags import MemoryFlagStore
from trainlog.db.container import StoreKind, StoreLocation, open_store
from trainlog.models import ExerciseSet, Workout


@pytest.fixture
def flags():
    return MemoryFlagStore()


@pytest.fixture
def local_location(tmp_path):
    return StoreLocation.sqlite(StoreKind.LOCAL, tmp_path / "TrainLog.store")


@pytest.fixture
def cloud_location(tmp_path):
    return StoreLocation.sqlite(StoreKind.CLOUD, tmp_path / "TrainLogCloud.store")


@pytest.fixture
def local_store(local_location):
    container = open_store(local_location)
    yield container
    container.dispose()


@pytest.fixture
def cloud_store(cloud_location):
    container = open_store(cloud_location)
    yield container
    container.dispose()


@pytest.fixture
def local_session(local_store):
    with local_store.session() as session:
        yield session


@pytest.fixture
def cloud_session(cloud_store):
    with cloud_store.session() as session:
        yield session


def make_workout(workout_id, day, sets=(), note=""):
    """Build a workout; ``sets`` holds ``(set_id, exercise_id, weight, reps)`` tuples."""
    return Workout(
        id=workout_id,
        date=datetime.datetime.combine(day, datetime.time.min),
        note=note,
        sets=[
            ExerciseSet(id=set_id, exercise_id=exercise_id, weight=weight, reps=reps, position=position)
            for position, (set_id, exercise_id, weight, reps) in enumerate(sets)
        ],
    )
