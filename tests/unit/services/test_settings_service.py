"""Tests for the user settings store."""

import datetime

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from trainlog.core.flags import LEGACY_WEIGHT_UNIT, MIGRATE_USER_SETTINGS
from trainlog.models import UserSettings, WeightUnit
from trainlog.services.settings_service import UserSettingsStore

T1 = datetime.datetime(2024, 1, 1, 8, 0)
T2 = datetime.datetime(2024, 3, 1, 8, 0)


def _records(session):
    return list(session.exec(select(UserSettings)).all())


@pytest.fixture
def store(flags):
    return UserSettingsStore(flags)


class TestWeightUnit:
    def test_from_raw(self):
        assert WeightUnit.from_raw("lb") is WeightUnit.LB
        assert WeightUnit.from_raw("stone") is WeightUnit.KG
        assert WeightUnit.from_raw(None) is WeightUnit.KG

    def test_to_kilograms(self):
        assert WeightUnit.KG.to_kilograms(60) == 60
        assert WeightUnit.LB.to_kilograms(100) == pytest.approx(45.359237)


# ======================================================================
# Loading
# ======================================================================


class TestLoad:
    def test_empty_store_gets_default_record(self, store, flags, local_session):
        store.bind(local_session)

        assert store.weight_unit is WeightUnit.KG
        assert [r.weight_unit_raw for r in _records(local_session)] == ["kg"]
        assert flags.get(MIGRATE_USER_SETTINGS) is True

    def test_seeds_from_legacy_value(self, store, flags, local_session):
        flags.set_string(LEGACY_WEIGHT_UNIT, "lb")

        store.bind(local_session)

        assert store.weight_unit is WeightUnit.LB
        assert [r.weight_unit_raw for r in _records(local_session)] == ["lb"]

    def test_legacy_value_used_only_once(self, store, flags, local_session):
        flags.set(MIGRATE_USER_SETTINGS)
        flags.set_string(LEGACY_WEIGHT_UNIT, "lb")

        store.bind(local_session)

        assert store.weight_unit is WeightUnit.KG

    def test_existing_record_beats_legacy(self, store, flags, local_session):
        local_session.add(UserSettings(id="current", weight_unit_raw="kg", updated_at=T1))
        local_session.commit()
        flags.set_string(LEGACY_WEIGHT_UNIT, "lb")

        store.bind(local_session)

        assert store.weight_unit is WeightUnit.KG
        assert [r.id for r in _records(local_session)] == ["current"]
        assert flags.get(MIGRATE_USER_SETTINGS) is True

    def test_duplicates_collapse_on_load(self, store, local_session):
        local_session.add(UserSettings(id="older", weight_unit_raw="kg", updated_at=T1))
        local_session.add(UserSettings(id="newer", weight_unit_raw="lb", updated_at=T2))
        local_session.commit()

        store.bind(local_session)

        assert store.weight_unit is WeightUnit.LB
        assert [(r.id, r.updated_at) for r in _records(local_session)] == [("newer", T2)]

    def test_unknown_unit_is_normalized(self, store, local_session):
        local_session.add(UserSettings(id="odd", weight_unit_raw="stone", updated_at=T1))
        local_session.commit()

        store.bind(local_session)

        record = _records(local_session)[0]
        assert store.weight_unit is WeightUnit.KG
        assert record.weight_unit_raw == "kg"
        assert record.updated_at > T1

    def test_rebinding_same_session_is_noop(self, store, local_session):
        store.bind(local_session)
        record = _records(local_session)[0]
        record.weight_unit_raw = "lb"
        local_session.add(record)
        local_session.commit()

        store.bind(local_session)
        assert store.weight_unit is WeightUnit.KG


# ======================================================================
# Updating
# ======================================================================


class TestUpdate:
    def test_update_writes_through(self, store, local_session):
        store.bind(local_session)
        before = store.updated_at

        store.update_weight_unit(WeightUnit.LB)

        records = _records(local_session)
        assert [r.weight_unit_raw for r in records] == ["lb"]
        assert records[0].updated_at >= before
        assert store.weight_unit is WeightUnit.LB

    def test_same_unit_is_noop(self, store, local_session, monkeypatch):
        store.bind(local_session)
        monkeypatch.setattr(local_session, "commit", lambda: pytest.fail("unexpected commit"))
        store.update_weight_unit(WeightUnit.KG)

    def test_unbound_update_only_changes_cache(self, store):
        store.update_weight_unit(WeightUnit.LB)
        assert store.weight_unit is WeightUnit.LB
        assert store.settings is None

    def test_write_failure_reloads_from_store(self, store, local_session, monkeypatch):
        store.bind(local_session)
        original_commit = local_session.commit
        calls = []

        def fail_once():
            calls.append(1)
            if len(calls) == 1:
                raise OperationalError("COMMIT", {}, Exception("database is locked"))
            original_commit()

        monkeypatch.setattr(local_session, "commit", fail_once)
        store.update_weight_unit(WeightUnit.LB)

        assert store.weight_unit is WeightUnit.KG
        assert [r.weight_unit_raw for r in _records(local_session)] == ["kg"]

    def test_unwritable_store_keeps_last_stored_unit(self, store, local_session, monkeypatch):
        store.bind(local_session)
        record_id = store.settings.id
        original_commit = local_session.commit

        def always_fail():
            raise OperationalError("COMMIT", {}, Exception("attempt to write a readonly database"))

        monkeypatch.setattr(local_session, "commit", always_fail)
        store.update_weight_unit(WeightUnit.LB)

        assert store.weight_unit is WeightUnit.KG
        assert store.settings is not None
        assert store.settings.id == record_id

        monkeypatch.setattr(local_session, "commit", original_commit)
        store.update_weight_unit(WeightUnit.LB)

        assert [(r.id, r.weight_unit_raw) for r in _records(local_session)] == [(record_id, "lb")]
        assert store.weight_unit is WeightUnit.LB

    def test_load_without_changes_does_not_commit(self, store, local_session, monkeypatch):
        store.bind(local_session)
        monkeypatch.setattr(local_session, "commit", lambda: pytest.fail("unexpected commit"))

        store.load()

        assert store.weight_unit is WeightUnit.KG
