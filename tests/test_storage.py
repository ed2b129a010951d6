"""Tests for storage backends and snapshot binding"""
import json
import os
import pytest

from storefront import config
from storefront.errors import StorageError
from storefront.storage import (
    MemoryKeyValueStore,
    JsonFileKeyValueStore,
    JsonSnapshotStorage,
    MemorySnapshotStorage,
    StorageKeys,
    get_default_store,
    reset_default_store,
)


@pytest.fixture
def file_store(tmp_path):
    return JsonFileKeyValueStore(str(tmp_path / "state" / "storage.json"))


@pytest.fixture
def fresh_default_store():
    reset_default_store()
    yield
    reset_default_store()


class TestMemoryKeyValueStore:
    """Tests for the in-memory backend."""

    def test_get_set_delete(self):
        store = MemoryKeyValueStore()

        assert store.get("k") is None
        store.set("k", "v")
        assert store.get("k") == "v"
        store.delete("k")
        assert store.get("k") is None

    def test_delete_missing_key(self):
        """Test deleting an absent key does nothing."""
        MemoryKeyValueStore().delete("missing")

    def test_initial_values(self):
        store = MemoryKeyValueStore({"a": "1"})

        assert "a" in store


class TestJsonFileKeyValueStore:
    """Tests for the file backend."""

    def test_creates_directory_on_write(self, file_store):
        """Test parent directories are created on first write."""
        file_store.set(StorageKeys.CART, "[]")

        assert os.path.exists(file_store.path)
        assert file_store.get(StorageKeys.CART) == "[]"

    def test_missing_file_reads_empty(self, file_store):
        assert file_store.get("anything") is None

    def test_keys_are_independent(self, file_store):
        """Test writing one key keeps the others."""
        file_store.set("a", "1")
        file_store.set("b", "2")
        file_store.delete("a")

        assert file_store.get("a") is None
        assert file_store.get("b") == "2"

    def test_shared_path_last_write_wins(self, tmp_path):
        """Test two stores on one file see each other's latest write."""
        path = str(tmp_path / "storage.json")
        first = JsonFileKeyValueStore(path)
        second = JsonFileKeyValueStore(path)

        first.set(StorageKeys.CART, "[1]")
        second.set(StorageKeys.CART, "[2]")

        assert first.get(StorageKeys.CART) == "[2]"

    def test_malformed_file_reads_empty(self, tmp_path):
        """Test a damaged file is treated as empty."""
        path = tmp_path / "storage.json"
        path.write_text("{broken", encoding="utf-8")

        store = JsonFileKeyValueStore(str(path))

        assert store.get(StorageKeys.CART) is None

    def test_non_object_file_reads_empty(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("[1, 2]", encoding="utf-8")

        assert JsonFileKeyValueStore(str(path)).get("k") is None

    def test_non_string_values_ignored(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text(json.dumps({"a": 1, "b": "ok"}), encoding="utf-8")

        store = JsonFileKeyValueStore(str(path))

        assert store.get("a") is None
        assert store.get("b") == "ok"

    def test_write_failure_raises_storage_error(self, tmp_path):
        """Test an unwritable location raises StorageError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = JsonFileKeyValueStore(str(blocker / "storage.json"))

        with pytest.raises(StorageError):
            store.set("k", "v")


class TestJsonSnapshotStorage:
    """Tests for the snapshot binding."""

    def test_round_trip(self, kv_store):
        storage = JsonSnapshotStorage(kv_store, StorageKeys.CART)

        storage.save([{"quantity": 1, "name": "Kurta ৳"}])

        assert storage.load() == [{"quantity": 1, "name": "Kurta ৳"}]

    def test_missing_key(self, kv_store):
        assert JsonSnapshotStorage(kv_store, StorageKeys.CART).load() is None

    def test_corrupt_value_is_deleted(self, kv_store):
        """Test undecodable content is dropped and reported as missing."""
        kv_store.set(StorageKeys.CART, "not-json")
        storage = JsonSnapshotStorage(kv_store, StorageKeys.CART)

        assert storage.load() is None
        assert kv_store.get(StorageKeys.CART) is None

    def test_deeply_nested_value_is_deleted(self, kv_store):
        """Test JSON nested past the decoder's limit is treated as corrupt."""
        kv_store.set(StorageKeys.CART, "[" * 100000 + "]" * 100000)
        storage = JsonSnapshotStorage(kv_store, StorageKeys.CART)

        assert storage.load() is None
        assert kv_store.get(StorageKeys.CART) is None

    def test_clear(self, kv_store):
        storage = JsonSnapshotStorage(kv_store, StorageKeys.WISHLIST)
        storage.save([])

        storage.clear()

        assert kv_store.get(StorageKeys.WISHLIST) is None

    def test_on_file_store(self, file_store):
        """Test the binding works over the file backend."""
        storage = JsonSnapshotStorage(file_store, StorageKeys.CART)
        storage.save([{"quantity": 2}])

        reopened = JsonSnapshotStorage(JsonFileKeyValueStore(file_store.path), StorageKeys.CART)

        assert reopened.load() == [{"quantity": 2}]


class TestMemorySnapshotStorage:
    """Tests for the in-memory snapshot fake."""

    def test_counts_saves(self):
        storage = MemorySnapshotStorage()

        storage.save([])
        storage.save([1])

        assert storage.saves == 2
        assert storage.load() == [1]

    def test_corrupt_raw(self):
        assert MemorySnapshotStorage("{oops").load() is None

    def test_deeply_nested_raw(self):
        assert MemorySnapshotStorage("[" * 100000 + "]" * 100000).load() is None


class TestDefaultStore:
    """Tests for get_default_store."""

    def test_memory_backend(self, monkeypatch, fresh_default_store):
        monkeypatch.setattr(config, "STOREFRONT_STORAGE", "memory")

        store = get_default_store()

        assert isinstance(store, MemoryKeyValueStore)
        assert get_default_store() is store

    def test_file_backend(self, monkeypatch, tmp_path, fresh_default_store):
        path = str(tmp_path / "storage.json")
        monkeypatch.setattr(config, "STOREFRONT_STORAGE", "file")
        monkeypatch.setattr(config, "STOREFRONT_STORAGE_PATH", path)

        store = get_default_store()

        assert isinstance(store, JsonFileKeyValueStore)
        assert store.path == path

    def test_unknown_backend(self, monkeypatch, fresh_default_store):
        monkeypatch.setattr(config, "STOREFRONT_STORAGE", "redis")

        with pytest.raises(ValueError):
            get_default_store()
