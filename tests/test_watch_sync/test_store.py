"""Tests for key-value stores and the ledger / authorization cache on top."""

from __future__ import annotations

import json

import pytest

from watch_sync.ledger import AUTHORIZED_KEY, SENT_IDS_KEY, AuthorizationCache, SentIdLedger
from watch_sync.store import InMemoryStore, JsonFileStore, StoreError


class TestInMemoryStore:
    def test_get_default(self):
        assert InMemoryStore().get("missing", 5) == 5

    def test_put_get(self):
        store = InMemoryStore()
        store.put("k", [1, 2])
        assert store.get("k") == [1, 2]


class TestJsonFileStore:
    def test_missing_file_reads_default(self, tmp_path):
        store = JsonFileStore(tmp_path / "state.json")
        assert store.get("k") is None

    def test_put_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "state.json"
        JsonFileStore(path).put("a", True)
        JsonFileStore(path).put("b", ["x"])
        reread = JsonFileStore(path)
        assert reread.get("a") is True
        assert reread.get("b") == ["x"]
        assert json.loads(path.read_text()) == {"a": True, "b": ["x"]}

    def test_no_temp_files_left(self, tmp_path):
        path = tmp_path / "state.json"
        JsonFileStore(path).put("a", 1)
        assert [p.name for p in tmp_path.iterdir()] == ["state.json"]

    def test_non_object_file_rejected(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("[1, 2]")
        with pytest.raises(StoreError, match="JSON object"):
            JsonFileStore(path).get("a")

    def test_corrupt_file_raises_store_error(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{not json")
        with pytest.raises(StoreError, match="Corrupt state file"):
            JsonFileStore(path).get("a")


class TestSentIdLedger:
    def test_empty(self):
        assert SentIdLedger(InMemoryStore()).get() == set()

    def test_round_trip_sorted_list(self):
        store = InMemoryStore()
        ledger = SentIdLedger(store)
        ledger.put({"b", "a"})
        assert store.get(SENT_IDS_KEY) == ["a", "b"]
        assert ledger.get() == {"a", "b"}

    def test_ignores_non_string_entries(self):
        store = InMemoryStore({SENT_IDS_KEY: ["a", 3, None]})
        assert SentIdLedger(store).get() == {"a"}

    @pytest.mark.parametrize("stored", ["w-1", 7, {"w-1": True}])
    def test_non_list_value_is_empty(self, stored):
        store = InMemoryStore({SENT_IDS_KEY: stored})
        assert SentIdLedger(store).get() == set()

    def test_string_value_not_split_on_rewrite(self):
        store = InMemoryStore({SENT_IDS_KEY: "w-1"})
        ledger = SentIdLedger(store)
        ledger.put(ledger.get() | {"w-1"})
        assert store.get(SENT_IDS_KEY) == ["w-1"]

    def test_custom_key(self):
        store = InMemoryStore()
        SentIdLedger(store, key="other").put({"z"})
        assert store.get("other") == ["z"]
        assert store.get(SENT_IDS_KEY) is None


class TestAuthorizationCache:
    def test_defaults_false(self):
        assert AuthorizationCache(InMemoryStore()).get() is False

    def test_put(self):
        store = InMemoryStore()
        cache = AuthorizationCache(store)
        cache.put(True)
        assert cache.get() is True
        assert store.get(AUTHORIZED_KEY) is True

    def test_truthy_non_bool_is_not_authorized(self):
        assert AuthorizationCache(InMemoryStore({AUTHORIZED_KEY: "yes"})).get() is False
