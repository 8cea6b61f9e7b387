"""Tests for union-by-identity reconciliation and settings collapse."""

import datetime
from unittest import mock

from conftest import make_workout
from sqlmodel import Session, select

from trainlog.models import ExerciseSet, FavoriteExercise, UserSettings, Workout
from trainlog.sync.reconcile import (
    collapse_settings,
    copy_workout,
    reconcile_favorites,
    reconcile_settings,
    reconcile_workouts,
)

T1 = datetime.datetime(2024, 1, 1, 8, 0)
T2 = datetime.datetime(2024, 3, 1, 8, 0)
T3 = datetime.datetime(2024, 6, 1, 8, 0)


def _all(session, model):
    return list(session.exec(select(model)).all())


# ======================================================================
# Workouts
# ======================================================================


class TestReconcileWorkouts:
    def test_copies_missing_workout_with_ids(self, local_session, cloud_session):
        local_session.add(make_workout("w1", datetime.date(2024, 1, 1), [("s1", "bench", 60, 5)]))
        local_session.commit()

        assert reconcile_workouts(local_session, cloud_session) == 1
        cloud_session.commit()

        workouts = _all(cloud_session, Workout)
        assert [w.id for w in workouts] == ["w1"]
        assert len(workouts[0].sets) == 1
        exercise_set = workouts[0].sets[0]
        assert exercise_set.id == "s1"
        assert exercise_set.exercise_id == "bench"
        assert exercise_set.weight == 60
        assert exercise_set.reps == 5

    def test_empty_source_never_touches_destination(self, local_session):
        destination = mock.Mock(spec=Session)
        assert reconcile_workouts(local_session, destination) == 0
        assert destination.method_calls == []

    def test_union_by_id(self, local_session, cloud_session):
        local_session.add(make_workout("w1", datetime.date(2024, 1, 1), [("s1", "bench", 60, 5)]))
        local_session.add(make_workout("w2", datetime.date(2024, 1, 2), note="local note"))
        local_session.commit()
        cloud_session.add(make_workout("w2", datetime.date(2024, 1, 2), note="cloud note"))
        cloud_session.add(make_workout("w3", datetime.date(2024, 1, 3)))
        cloud_session.commit()

        assert reconcile_workouts(local_session, cloud_session) == 1
        cloud_session.commit()

        workouts = {w.id: w for w in _all(cloud_session, Workout)}
        assert set(workouts) == {"w1", "w2", "w3"}
        assert workouts["w2"].note == "cloud note"

    def test_second_run_copies_nothing(self, local_session, cloud_session):
        local_session.add(make_workout("w1", datetime.date(2024, 1, 1), [("s1", "bench", 60, 5)]))
        local_session.commit()

        reconcile_workouts(local_session, cloud_session)
        cloud_session.commit()
        assert reconcile_workouts(local_session, cloud_session) == 0
        cloud_session.commit()

        assert len(_all(cloud_session, Workout)) == 1
        assert len(_all(cloud_session, ExerciseSet)) == 1


class TestCopyWorkout:
    def test_preserves_every_set_attribute(self, local_session):
        created = datetime.datetime(2024, 1, 1, 9, 30)
        workout = Workout(id="w1", date=T1, note="heavy day", sets=[
            ExerciseSet(id="s1", exercise_id="squat", weight=100.0, reps=3, duration_seconds=None, rpe=9.0,
                        position=0, created_at=created),
            ExerciseSet(id="s2", exercise_id="plank", weight=0.0, reps=0, duration_seconds=60, rpe=None,
                        position=1, created_at=created),
        ])
        local_session.add(workout)
        local_session.commit()

        copy = copy_workout(workout)

        assert copy is not workout
        assert (copy.id, copy.date, copy.note) == ("w1", T1, "heavy day")
        assert [s.id for s in copy.sets] == ["s1", "s2"]
        squat, plank = copy.sets
        assert (squat.weight, squat.reps, squat.rpe, squat.created_at) == (100.0, 3, 9.0, created)
        assert (plank.duration_seconds, plank.position) == (60, 1)


# ======================================================================
# Favorites
# ======================================================================


class TestReconcileFavorites:
    def test_adds_missing_and_keeps_existing_record(self, local_session, cloud_session):
        local_session.add(FavoriteExercise(exercise_id="bench", created_at=T1))
        local_session.add(FavoriteExercise(exercise_id="squat", created_at=T1))
        local_session.commit()
        existing = FavoriteExercise(id="cloud-squat", exercise_id="squat", created_at=T2)
        cloud_session.add(existing)
        cloud_session.commit()

        assert reconcile_favorites(local_session, cloud_session) == 1
        cloud_session.commit()

        favorites = {f.exercise_id: f for f in _all(cloud_session, FavoriteExercise)}
        assert set(favorites) == {"bench", "squat"}
        assert favorites["squat"].id == "cloud-squat"
        assert favorites["bench"].created_at == T1

    def test_empty_source_never_touches_destination(self, local_session):
        destination = mock.Mock(spec=Session)
        assert reconcile_favorites(local_session, destination) == 0
        assert destination.method_calls == []


# ======================================================================
# Settings
# ======================================================================


class TestReconcileSettings:
    def test_copies_most_recent_into_empty_destination(self, local_session, cloud_session):
        local_session.add(UserSettings(id="old", weight_unit_raw="kg", updated_at=T1))
        local_session.add(UserSettings(id="new", weight_unit_raw="lb", updated_at=T2))
        local_session.commit()

        assert reconcile_settings(local_session, cloud_session) is True
        cloud_session.commit()

        records = _all(cloud_session, UserSettings)
        assert [(r.id, r.weight_unit_raw, r.updated_at) for r in records] == [("new", "lb", T2)]

    def test_existing_destination_settings_win(self, local_session, cloud_session):
        local_session.add(UserSettings(id="local", weight_unit_raw="lb", updated_at=T3))
        local_session.commit()
        cloud_session.add(UserSettings(id="cloud", weight_unit_raw="kg", updated_at=T1))
        cloud_session.commit()

        assert reconcile_settings(local_session, cloud_session) is False
        cloud_session.commit()

        records = _all(cloud_session, UserSettings)
        assert [(r.id, r.weight_unit_raw) for r in records] == [("cloud", "kg")]

    def test_empty_source_is_noop(self, local_session, cloud_session):
        assert reconcile_settings(local_session, cloud_session) is False
        assert _all(cloud_session, UserSettings) == []


class TestCollapseSettings:
    def test_keeps_most_recent(self, cloud_session):
        cloud_session.add(UserSettings(id="a", weight_unit_raw="kg", updated_at=T1))
        cloud_session.add(UserSettings(id="b", weight_unit_raw="lb", updated_at=T2))
        cloud_session.commit()

        primary = collapse_settings(cloud_session)
        cloud_session.commit()

        assert primary.id == "b"
        records = _all(cloud_session, UserSettings)
        assert [(r.id, r.updated_at) for r in records] == [("b", T2)]

    def test_many_duplicates(self, cloud_session):
        for index, updated_at in enumerate([T2, T1, T3, T1]):
            cloud_session.add(UserSettings(id=f"s{index}", updated_at=updated_at))
        cloud_session.commit()

        primary = collapse_settings(cloud_session)
        cloud_session.commit()

        assert primary.updated_at == T3
        assert len(_all(cloud_session, UserSettings)) == 1

    def test_single_record_untouched(self, cloud_session):
        cloud_session.add(UserSettings(id="only", updated_at=T1))
        cloud_session.commit()

        assert collapse_settings(cloud_session).id == "only"
        assert len(_all(cloud_session, UserSettings)) == 1

    def test_empty_store(self, cloud_session):
        assert collapse_settings(cloud_session) is None
