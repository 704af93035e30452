"""Unit tests for the cache stores and cache keys."""

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from pi_hierarchy.cache.store import CACHE_STORE_VERSION, InMemoryCacheStore, JsonFileCacheStore
from pi_hierarchy.models.hierarchy import cache_key


class TestCacheKey:
    """Tests for cache_key."""

    def test_namespaces_are_independent(self):
        assert cache_key("epics", "PI 1", "Squad A") == "epics::PI 1::Squad A"
        assert cache_key("projects", "PI 1", "Squad A") == "projects::PI 1::Squad A"


class TestInMemoryCacheStore:
    """Tests for InMemoryCacheStore."""

    def test_miss_returns_none(self):
        assert InMemoryCacheStore().get("epics::a::b") is None

    def test_set_overwrites(self):
        store = InMemoryCacheStore()
        store.set("k", [1])
        store.set("k", [2])

        assert store.get("k") == [2]
        assert len(store) == 1

    def test_initial_entries(self):
        store = InMemoryCacheStore({"k": []})

        assert "k" in store
        assert store.get("k") == []


class TestJsonFileCacheStore:
    """Tests for JsonFileCacheStore."""

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "cache" / "store.json"
        JsonFileCacheStore(path).set("epics::PI::S", [{"EpicKey": "E1", "POLProjectKey": None}])

        reopened = JsonFileCacheStore(path)

        assert reopened.get("epics::PI::S") == [{"EpicKey": "E1", "POLProjectKey": None}]
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["version"] == CACHE_STORE_VERSION

    def test_missing_file_is_empty(self, tmp_path):
        store = JsonFileCacheStore(tmp_path / "absent.json")

        assert store.get("anything") is None
        assert not (tmp_path / "absent.json").exists()

    def test_corrupt_file_treated_as_empty(self, tmp_path, caplog):
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")

        with caplog.at_level(logging.ERROR):
            store = JsonFileCacheStore(path)
            assert store.get("k") is None

        assert "Failed to load cache file" in caplog.text

        store.set("k", [])
        assert JsonFileCacheStore(path).get("k") == []

    @pytest.mark.parametrize("content", [
        "[]",
        '"x"',
        "null",
        '{"version": 1, "entries": []}',
        '{"version": 1}',
    ])
    def test_wrong_shape_treated_as_empty(self, tmp_path, caplog, content):
        path = tmp_path / "store.json"
        path.write_text(content, encoding="utf-8")

        with caplog.at_level(logging.ERROR):
            store = JsonFileCacheStore(path)
            assert store.get("k") is None

        assert "Failed to load cache file" in caplog.text

        store.set("k", [])
        assert JsonFileCacheStore(path).get("k") == []

    def test_set_leaves_no_temp_file(self, tmp_path):
        path = tmp_path / "store.json"

        JsonFileCacheStore(path).set("k", [1])

        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]

    def test_failed_write_keeps_previous_file(self, tmp_path):
        path = tmp_path / "store.json"
        store = JsonFileCacheStore(path)
        store.set("k", [1])
        before = path.read_text(encoding="utf-8")

        with patch.object(Path, "replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                store.set("k2", [2])

        assert path.read_text(encoding="utf-8") == before
        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]
