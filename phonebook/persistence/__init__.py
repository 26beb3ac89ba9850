"""
String key-value stores used to persist the phone book between sessions.
"""
from .base import KeyValueStore
from .factory import create_store
from .file_store import JsonFileStore
from .memory_store import InMemoryStore
from .sqlite_store import SqliteStore

__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "JsonFileStore",
    "SqliteStore",
    "create_store",
]
