"""
Tests for snapshot persistence and the state container.

Covered:
  - absent / ok / failed load results
  - seed fallback on empty and malformed stores
  - save(load()) round-trip is byte-identical
  - camelCase JSON format, legacy "ts" actions
  - container: lazy load, save on replace, no save on no-op
"""
from __future__ import annotations

import json

from ltos.db.base import SessionLocal
from ltos.models.kv_entry import KeyValueEntry
from ltos.schemas.snapshot import Action, Snapshot
from ltos.services import mutations
from ltos.services.calendar import start_of_day
from ltos.services.container import SnapshotContainer
from ltos.services.store import LoadResult, load_or_seed

from conftest import NOW


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _raw(key: str) -> str | None:
    db = SessionLocal()
    try:
        row = db.get(KeyValueEntry, key)
        return row.value if row else None
    finally:
        db.close()


def _put_raw(key: str, value: str) -> None:
    db = SessionLocal()
    try:
        db.merge(KeyValueEntry(key=key, value=value))
        db.commit()
    finally:
        db.close()


class RecordingStore:
    """In-memory store counting saves."""

    def __init__(self, snapshot: Snapshot | None = None):
        self.snapshot = snapshot
        self.saves = 0

    def load(self) -> LoadResult:
        if self.snapshot is None:
            return LoadResult.absent()
        return LoadResult.ok(self.snapshot)

    def save(self, snapshot: Snapshot) -> None:
        self.snapshot = snapshot
        self.saves += 1


# ---------------------------------------------------------------------------
# SqlSnapshotStore
# ---------------------------------------------------------------------------

class TestLoad:
    def test_empty_store_is_absent(self, store):
        result = store.load()
        assert not result.is_ok
        assert result.error is None

    def test_save_then_load(self, store, snapshot):
        snap = mutations.log_action(snapshot, "health", "ran 5k", NOW)
        store.save(snap)
        result = store.load()
        assert result.is_ok
        assert result.snapshot == snap

    def test_invalid_json_is_failed(self, store):
        _put_raw(store.key, "{not json")
        result = store.load()
        assert not result.is_ok
        assert result.error.code == "MALFORMED_SNAPSHOT"
        assert "schema error" in result.error.reason

    def test_schema_violation_is_failed(self, store, snapshot):
        doc = json.loads(snapshot.to_json())
        doc["heat"] = {"2026-10-19": 7}
        _put_raw(store.key, json.dumps(doc))
        assert not store.load().is_ok

    def test_wrong_container_type_is_failed(self, store):
        _put_raw(store.key, json.dumps({"cycleStart": 0, "goals": "none"}))
        assert not store.load().is_ok

    def test_cycle_start_beyond_datetime_range_is_failed(self, store, snapshot):
        doc = json.loads(snapshot.to_json())
        doc["cycleStart"] = 10**15
        _put_raw(store.key, json.dumps(doc))
        result = store.load()
        assert not result.is_ok
        assert result.error.code == "MALFORMED_SNAPSHOT"

    def test_action_timestamp_beyond_datetime_range_is_failed(self, store, snapshot):
        doc = json.loads(snapshot.to_json())
        doc["actions"] = {"health": [{"timestamp": -(10**15), "note": "walked"}]}
        _put_raw(store.key, json.dumps(doc))
        assert not store.load().is_ok

    def test_missing_fields_take_defaults(self, store):
        _put_raw(store.key, json.dumps({"cycleStart": start_of_day(NOW)}))
        snap = store.load().snapshot
        assert snap.mantra == "I act as my future self, today."
        assert [g.id for g in snap.goals] == ["g1", "g2", "g3"]
        assert snap.heat == {}

    def test_legacy_ts_actions(self, store, snapshot):
        doc = json.loads(snapshot.to_json())
        doc["actions"] = {"health": [{"ts": NOW, "note": "walked"}]}
        _put_raw(store.key, json.dumps(doc))
        snap = store.load().snapshot
        assert snap.actions["health"] == [Action(timestamp=NOW, note="walked")]

        store.save(snap)
        saved = json.loads(_raw(store.key))
        assert saved["actions"]["health"] == [{"timestamp": NOW, "note": "walked"}]


class TestFormat:
    def test_camel_case_document(self, store, snapshot):
        store.save(snapshot)
        doc = json.loads(_raw(store.key))
        assert set(doc) == {
            "themeDark", "mantra", "cycleStart", "goals",
            "rituals", "actions", "heat", "resilience",
        }
        assert set(doc["resilience"]) == {"fears", "counterMoves", "emergency"}
        assert doc["cycleStart"] == start_of_day(NOW)
        assert doc["goals"][0] == {"id": "g1", "text": "Health: 10k steps daily", "done": False}

    def test_day_keys_and_levels(self, store, snapshot):
        snap = mutations.toggle_ritual_item(snapshot, "morning", "gratitude", NOW)
        store.save(snap)
        doc = json.loads(_raw(store.key))
        assert doc["rituals"] == {"2026-10-19": {"morning": {"gratitude": True}, "evening": {}}}
        assert doc["heat"] == {"2026-10-19": 1}

    def test_round_trip_is_byte_identical(self, store, snapshot):
        snap = mutations.toggle_ritual_item(snapshot, "evening", "wins", NOW)
        snap = mutations.log_action(snap, "relationships", "called mom", NOW)
        snap = mutations.set_resilience_field(snap, "fears", "losing focus")
        store.save(snap)
        first = _raw(store.key)

        store.save(store.load().snapshot)
        assert _raw(store.key) == first

    def test_overwrites_previous_value(self, store, snapshot):
        store.save(snapshot)
        store.save(mutations.set_mantra(snapshot, "new"))
        assert store.load().snapshot.mantra == "new"


class TestLoadOrSeed:
    def test_seeds_and_saves_on_first_run(self, store):
        snap = load_or_seed(store, NOW)
        assert snap.cycle_start == start_of_day(NOW)
        assert snap.theme_dark is True
        assert store.load().snapshot == snap

    def test_malformed_store_replaced_by_seed(self, store):
        _put_raw(store.key, "[]")
        snap = load_or_seed(store, NOW)
        assert snap.goals[0].id == "g1"
        assert store.load().is_ok

    def test_out_of_range_instant_replaced_by_seed(self, store, snapshot):
        doc = json.loads(snapshot.to_json())
        doc["cycleStart"] = 10**15
        _put_raw(store.key, json.dumps(doc))
        snap = load_or_seed(store, NOW)
        assert snap.cycle_start == start_of_day(NOW)
        assert store.load().snapshot == snap

    def test_existing_snapshot_returned(self, store, snapshot):
        stored = mutations.set_mantra(snapshot, "stay the course")
        store.save(stored)
        assert load_or_seed(store, NOW + 10_000_000) == stored


# ---------------------------------------------------------------------------
# SnapshotContainer
# ---------------------------------------------------------------------------

class TestContainer:
    def test_lazy_load_seeds_once(self, clock):
        backing = RecordingStore()
        c = SnapshotContainer(backing, clock)
        assert backing.saves == 0
        first = c.get()
        assert backing.saves == 1
        assert c.get() is first

    def test_apply_saves_new_value(self, clock, snapshot):
        backing = RecordingStore(snapshot)
        c = SnapshotContainer(backing, clock)
        result = c.apply(mutations.log_action, "health", "ran 5k", clock())
        assert backing.saves == 1
        assert backing.snapshot is result
        assert c.get() is result

    def test_noop_intent_does_not_save(self, clock, snapshot):
        backing = RecordingStore(snapshot)
        c = SnapshotContainer(backing, clock)
        assert c.apply(mutations.log_action, "health", "   ", clock()) is snapshot
        assert c.apply(mutations.set_goal_done, "missing", True) is snapshot
        assert backing.saves == 0

    def test_state_survives_new_container(self, store, clock):
        SnapshotContainer(store, clock).apply(mutations.set_mantra, "persisted")
        assert SnapshotContainer(store, clock).get().mantra == "persisted"
