"""Tests for the read-only exercise catalog."""

import json

import pytest
from pydantic import ValidationError

from trainlog.catalog import ExerciseCatalog, ExerciseDefinition


@pytest.fixture
def catalog():
    return ExerciseCatalog.from_json()


class TestBundledCatalog:
    def test_not_empty(self, catalog):
        assert len(catalog) >= 10

    def test_contains_core_lifts(self, catalog):
        for exercise_id in ["bench", "squat", "deadlift", "overhead_press"]:
            assert exercise_id in catalog

    def test_ids_unique(self, catalog):
        assert len(catalog.ids()) == len(catalog)

    def test_sorted_by_name(self, catalog):
        names = [exercise.name for exercise in catalog.all()]
        assert names == sorted(names)


class TestLookup:
    def test_get(self, catalog):
        bench = catalog.get("bench")
        assert isinstance(bench, ExerciseDefinition)
        assert bench.muscle_group == "chest"

    def test_get_unknown(self, catalog):
        assert catalog.get("moon_press") is None

    def test_display_name(self, catalog):
        assert catalog.display_name("bench") == "Bench Press"
        assert catalog.display_name("bench", japanese=True) == "ベンチプレス"
        assert catalog.display_name("moon_press") == "moon_press"

    def test_entries_are_read_only(self, catalog):
        with pytest.raises(ValidationError):
            catalog.get("bench").name = "Renamed"


class TestFromJson:
    def test_custom_file(self, tmp_path):
        path = tmp_path / "exercises.json"
        path.write_text(json.dumps([
            {"id": "curl", "name": "Curl", "muscle_group": "arms", "equipment": "dumbbell"},
        ]))
        catalog = ExerciseCatalog.from_json(path)
        assert catalog.ids() == {"curl"}
        assert catalog.display_name("curl", japanese=True) == "Curl"

    def test_malformed_entry(self, tmp_path):
        path = tmp_path / "exercises.json"
        path.write_text(json.dumps([{"id": "curl"}]))
        with pytest.raises(ValidationError):
            ExerciseCatalog.from_json(path)
