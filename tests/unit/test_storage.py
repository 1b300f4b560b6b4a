"""Unit tests for the device-local key-value stores."""

import json

import pytest

from masal.core.quota import QuotaLedger
from masal.core.storage import JsonFileStore, MemoryStore


class TestMemoryStore:
    def test_missing_key_reads_none(self):
        assert MemoryStore().get("masal_quota") is None

    def test_set_get_delete(self):
        store = MemoryStore()
        store.set("k", "v")
        assert store.get("k") == "v"
        store.delete("k")
        assert store.get("k") is None
        store.delete("k")  # deleting twice is fine

    def test_snapshot_is_a_copy(self):
        store = MemoryStore({"a": "1"})
        snapshot = store.snapshot()
        snapshot["a"] = "2"
        assert store.get("a") == "1"


class TestJsonFileStore:
    @pytest.fixture
    def path(self, tmp_path):
        return tmp_path / "nested" / "local_storage.json"

    def test_missing_file_reads_none(self, path):
        assert JsonFileStore(path).get("masal_quota") is None

    def test_persists_across_instances(self, path):
        JsonFileStore(path).set("masal_promo_used", "true")

        assert JsonFileStore(path).get("masal_promo_used") == "true"
        assert json.loads(path.read_text(encoding="utf-8")) == {"masal_promo_used": "true"}
        assert not path.with_suffix(".json.tmp").exists()

    def test_delete(self, path):
        store = JsonFileStore(path)
        store.set("a", "1")
        store.set("b", "2")

        store.delete("a")

        assert store.get("a") is None
        assert store.get("b") == "2"

    @pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
    def test_unreadable_file_reads_as_empty(self, path, content):
        path.parent.mkdir(parents=True)
        path.write_text(content, encoding="utf-8")

        store = JsonFileStore(path)

        assert store.get("masal_quota") is None
        store.set("masal_quota", "x")
        assert store.get("masal_quota") == "x"

    def test_ledger_state_survives_restart(self, path, clock):
        """A new session on the same device sees the credit already used."""
        QuotaLedger(JsonFileStore(path), clock=clock, limit=1).decrement_quota()

        status = QuotaLedger(JsonFileStore(path), clock=clock, limit=1).check_quota()

        assert status.remaining == 0
        assert status.reset_time is not None
