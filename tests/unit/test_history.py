from __future__ import annotations

import json

import pytest

from mockbanker.domain.models import HistoryEntry
from mockbanker.history import HISTORY_KEY, ActivityHistoryLog
from mockbanker.infrastructure.kv_store import InMemoryStore, JsonFileStore

HISTORY_LIMIT = 50


def _entry(n: int) -> HistoryEntry:
    return HistoryEntry(
        id=str(n),
        timestamp=n,
        category="IBAN",
        country_or_label="DE",
        count=1,
        raw_values=[f"value-{n}"],
    )


class TestLoad:
    def test_missing_key_loads_empty(self, history_log):
        assert history_log.load() == []

    @pytest.mark.parametrize("blob", ["", "not json", "{}", '[{"id": 1}]', '[{"id": "x", "timestamp": -1}]'])
    def test_malformed_blob_loads_empty(self, blob):
        log = ActivityHistoryLog(InMemoryStore({HISTORY_KEY: blob}))
        assert log.load() == []

    def test_reads_original_key_names(self):
        blob = json.dumps(
            [{"id": "9", "timestamp": 1, "category": "LEI", "country": "Random", "count": 2, "results": ["A"]}]
        )
        (entry,) = ActivityHistoryLog(InMemoryStore({HISTORY_KEY: blob})).load()
        assert entry.country_or_label == "Random"
        assert entry.raw_values == ["A"]


class TestAppend:
    def test_newest_first_and_persisted(self, history_log, store):
        history_log.append(_entry(1))
        history_log.append(_entry(2))

        assert [e.id for e in history_log.entries] == ["2", "1"]
        persisted = json.loads(store.get(HISTORY_KEY))
        assert [item["id"] for item in persisted] == ["2", "1"]
        assert set(persisted[0]) == {"id", "timestamp", "category", "country", "count", "results"}

    def test_fifty_one_appends_drop_the_oldest(self, history_log):
        for n in range(51):
            history_log.append(_entry(n))

        entries = history_log.load()
        assert len(entries) == HISTORY_LIMIT
        assert entries[0].id == "50"
        assert "0" not in {e.id for e in entries}

    def test_length_never_exceeds_limit(self, store):
        log = ActivityHistoryLog(store, limit=3)
        for n in range(10):
            entries = log.append(_entry(n))
            assert len(entries) <= 3
            assert entries[0].id == str(n)

    def test_limit_above_fifty_is_capped(self, store):
        log = ActivityHistoryLog(store, limit=70)
        for n in range(60):
            log.append(_entry(n))

        assert log.limit == HISTORY_LIMIT
        assert len(json.loads(store.get(HISTORY_KEY))) == HISTORY_LIMIT

    def test_append_rereads_store_last_writer_wins(self, store):
        first = ActivityHistoryLog(store)
        second = ActivityHistoryLog(store)

        first.append(_entry(1))
        second.append(_entry(2))

        assert [e.id for e in first.load()] == ["2", "1"]

    def test_append_replaces_malformed_blob(self, store):
        store.set(HISTORY_KEY, "garbage")
        log = ActivityHistoryLog(store)

        log.append(_entry(1))

        assert [e.id for e in log.load()] == ["1"]


def test_record_stamps_id_and_time(history_log):
    entry = history_log.record("Passport", "EE", 3, ["A", "B"])

    assert entry.id == "entry-1"
    assert entry.timestamp == 1_000
    assert entry.count == 3
    assert history_log.load()[0] == entry


def test_record_default_ids_are_unique(store):
    log = ActivityHistoryLog(store)
    ids = {log.record("IBAN", "Random", 1, []).id for _ in range(20)}
    assert len(ids) == 20


def test_clear_then_load_is_empty(history_log, store):
    history_log.record("IBAN", "DE", 1, ["x"])

    history_log.clear()

    assert history_log.entries == []
    assert store.get(HISTORY_KEY) is None
    assert history_log.load() == []


def test_file_backed_history_survives_new_instance(tmp_path):
    ActivityHistoryLog(JsonFileStore(tmp_path)).record("VAT", "DE", 1, ["DE123"])

    (entry,) = ActivityHistoryLog(JsonFileStore(tmp_path)).load()
    assert entry.raw_values == ["DE123"]
