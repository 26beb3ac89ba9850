"""Build a store from the ``storage`` configuration section."""

from typing import Any

from ..errors import ConfigurationError
from .base import KeyValueStore
from .file_store import JsonFileStore
from .memory_store import InMemoryStore
from .sqlite_store import SqliteStore

DEFAULT_FILE_PATH = "phonebook.json"
DEFAULT_DB_PATH = "phonebook.db"


def create_store(storage: dict[str, Any]) -> KeyValueStore:
    """
    Create the backend named by ``storage["backend"]``.

    Args:
        storage: Merged ``storage`` config section

    Returns:
        A ready-to-use store

    Raises:
        ConfigurationError: If the backend name is unknown
    """
    backend = storage.get("backend", "memory")

    if backend == "memory":
        return InMemoryStore(quota_bytes=storage.get("quota_bytes"))
    if backend == "file":
        return JsonFileStore(storage.get("path") or DEFAULT_FILE_PATH)
    if backend == "sqlite":
        return SqliteStore(storage.get("path") or DEFAULT_DB_PATH)

    raise ConfigurationError(
        f"Unknown storage backend: {backend!r}",
        context={"backend": backend},
    )
