"""Tests for key-value store backends."""

import sqlite3

import pytest
from unittest.mock import patch

from phonebook.errors import (
    ConfigurationError,
    StorageQuotaExceededError,
    StorageReadError,
    StorageWriteError,
)
from phonebook.persistence import (
    InMemoryStore,
    JsonFileStore,
    SqliteStore,
    create_store,
)


class TestInMemoryStore:
    """Test InMemoryStore class."""

    def test_get_missing_key(self):
        assert InMemoryStore().get("absent") is None

    def test_set_get_remove(self):
        store = InMemoryStore()
        store.set("k", "v")
        assert store.get("k") == "v"
        assert "k" in store

        store.remove("k")
        assert store.get("k") is None
        assert "k" not in store

    def test_remove_missing_is_noop(self):
        InMemoryStore().remove("absent")

    def test_quota_exceeded(self):
        """Test writes over the quota raise and keep the previous value."""
        store = InMemoryStore(quota_bytes=10)
        store.set("k", "1234")

        with pytest.raises(StorageQuotaExceededError) as exc_info:
            store.set("k", "x" * 20)

        assert exc_info.value.quota_bytes == 10
        assert exc_info.value.required_bytes == 21
        assert isinstance(exc_info.value, StorageWriteError)
        assert store.get("k") == "1234"

    def test_quota_counts_replaced_value_once(self):
        """Test replacing a key does not double count its old value."""
        store = InMemoryStore(quota_bytes=10)
        store.set("k", "123456789")
        store.set("k", "987654321")
        assert store.used_bytes() == 10

    def test_initial_data(self):
        store = InMemoryStore(initial={"k": "v"})
        assert store.get("k") == "v"


class TestJsonFileStore:
    """Test JsonFileStore class."""

    def test_missing_file_reads_as_empty(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "store.json"))
        assert store.get("k") is None

    def test_persists_across_instances(self, tmp_path):
        path = str(tmp_path / "nested" / "store.json")
        JsonFileStore(path).set("k", "[1,2]")

        assert JsonFileStore(path).get("k") == "[1,2]"

    def test_multiple_keys(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "store.json"))
        store.set("a", "1")
        store.set("b", "2")
        store.remove("a")

        assert store.get("a") is None
        assert store.get("b") == "2"

    def test_no_temp_files_left(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "store.json"))
        store.set("k", "v")
        assert not list(tmp_path.glob("*.tmp"))

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json")

        with pytest.raises(StorageReadError):
            JsonFileStore(str(path)).get("k")

    def test_non_object_document(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2]")

        with pytest.raises(StorageReadError):
            JsonFileStore(str(path)).get("k")

    def test_non_string_value(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text('{"k": 5}')

        with pytest.raises(StorageReadError):
            JsonFileStore(str(path)).get("k")

    def test_write_failure(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "store.json"))

        with patch("phonebook.persistence.file_store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StorageWriteError):
                store.set("k", "v")

        assert store.get("k") is None
        assert not list(tmp_path.glob("*.tmp"))


class TestSqliteStore:
    """Test SqliteStore class."""

    def setup_method(self):
        self.key = "phonebook-context-key"

    def test_init_database(self, tmp_path):
        db_path = tmp_path / "test.db"
        SqliteStore(str(db_path))

        with sqlite3.connect(db_path) as conn:
            tables = [row[0] for row in conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            )]
        assert "kv_store" in tables

    def test_set_get_replace_remove(self, tmp_path):
        store = SqliteStore(str(tmp_path / "test.db"))
        assert store.get(self.key) is None

        store.set(self.key, "[]")
        store.set(self.key, "[1]")
        assert store.get(self.key) == "[1]"
        assert store.get_updated_at(self.key) is not None

        store.remove(self.key)
        assert store.get(self.key) is None
        assert store.get_updated_at(self.key) is None

    def test_persists_across_instances(self, tmp_path):
        db_path = str(tmp_path / "test.db")
        SqliteStore(db_path).set(self.key, "value")
        assert SqliteStore(db_path).get(self.key) == "value"

    def test_read_error(self, tmp_path):
        store = SqliteStore(str(tmp_path / "test.db"))

        with patch("phonebook.persistence.sqlite_store.sqlite3.connect",
                   side_effect=sqlite3.OperationalError("locked")):
            with pytest.raises(StorageReadError):
                store.get(self.key)

    def test_write_error(self, tmp_path):
        store = SqliteStore(str(tmp_path / "test.db"))

        with patch("phonebook.persistence.sqlite_store.sqlite3.connect",
                   side_effect=sqlite3.OperationalError("readonly")):
            with pytest.raises(StorageWriteError):
                store.set(self.key, "[]")


class TestCreateStore:
    """Test store construction from config."""

    def test_memory_default(self):
        store = create_store({})
        assert isinstance(store, InMemoryStore)
        assert store.quota_bytes is None

    def test_memory_with_quota(self):
        store = create_store({"backend": "memory", "quota_bytes": 100})
        assert store.quota_bytes == 100

    def test_file(self, tmp_path):
        store = create_store({"backend": "file", "path": str(tmp_path / "s.json")})
        assert isinstance(store, JsonFileStore)

    def test_sqlite(self, tmp_path):
        store = create_store({"backend": "sqlite", "path": str(tmp_path / "s.db")})
        assert isinstance(store, SqliteStore)

    def test_unknown_backend(self):
        with pytest.raises(ConfigurationError):
            create_store({"backend": "redis"})
