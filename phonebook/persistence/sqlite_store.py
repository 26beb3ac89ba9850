"""SQLite-backed key-value store."""

import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..errors import StorageReadError, StorageWriteError
from ..logging.config import get_storage_logger
from .base import KeyValueStore


class SqliteStore(KeyValueStore):
    """Single-table SQLite store; one connection per operation."""

    def __init__(self, db_path: str = "phonebook.db"):
        self.db_path = Path(db_path)
        self.logger = get_storage_logger(__name__)
        self._lock = threading.Lock()

        self._init_database()

    def _init_database(self) -> None:
        """Initialize database schema."""
        try:
            with self._get_connection() as conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                """)
                conn.commit()
        except sqlite3.Error as e:
            raise StorageWriteError(
                f"Could not initialize store: {e}",
                operation="init",
                target=str(self.db_path),
            ) from e

    @contextmanager
    def _get_connection(self):
        """Get database connection, rolling back on error."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            self.logger.error("Database error", db_path=str(self.db_path), error=str(e))
            raise
        finally:
            if conn:
                conn.close()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            try:
                with self._get_connection() as conn:
                    row = conn.execute(
                        "SELECT value FROM kv_store WHERE key = ?", (key,)
                    ).fetchone()
            except sqlite3.Error as e:
                raise StorageReadError(f"Failed to read {key!r}: {e}", target=str(self.db_path)) from e
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            try:
                with self._get_connection() as conn:
                    conn.execute("""
                        INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                        ON CONFLICT(key) DO UPDATE SET
                            value = excluded.value,
                            updated_at = excluded.updated_at
                    """, (key, value, datetime.now(timezone.utc).isoformat()))
                    conn.commit()
            except sqlite3.Error as e:
                raise StorageWriteError(f"Failed to write {key!r}: {e}", target=str(self.db_path)) from e

    def remove(self, key: str) -> None:
        with self._lock:
            try:
                with self._get_connection() as conn:
                    conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
                    conn.commit()
            except sqlite3.Error as e:
                raise StorageWriteError(
                    f"Failed to remove {key!r}: {e}",
                    operation="remove",
                    target=str(self.db_path),
                ) from e

    def get_updated_at(self, key: str) -> Optional[str]:
        """ISO timestamp of the last write to key, or None if absent."""
        with self._lock:
            try:
                with self._get_connection() as conn:
                    row = conn.execute(
                        "SELECT updated_at FROM kv_store WHERE key = ?", (key,)
                    ).fetchone()
            except sqlite3.Error as e:
                raise StorageReadError(f"Failed to read {key!r}: {e}", target=str(self.db_path)) from e
        return row[0] if row else None
