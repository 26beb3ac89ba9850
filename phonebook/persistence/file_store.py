"""JSON-file backed store."""

import fcntl
import os
import tempfile
from pathlib import Path
from typing import Optional

import orjson

from ..errors import StorageReadError, StorageWriteError
from .base import KeyValueStore


class JsonFileStore(KeyValueStore):
    """
    Keeps all keys in one JSON object file.

    Writes go to a temporary file in the same directory and replace the
    target, so a crash mid-write leaves the previous document intact.
    An exclusive lock on a sidecar ``.lock`` file serializes writers.
    """

    def __init__(self, path: str, create_dirs: bool = True):
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")
        if create_dirs:
            self.path.parent.mkdir(parents=True, exist_ok=True)

    def get(self, key: str) -> Optional[str]:
        value = self._read_document().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageReadError(
                f"Value under {key!r} is not a string",
                target=str(self.path),
            )
        return value

    def set(self, key: str, value: str) -> None:
        with self._locked():
            document = self._read_document()
            document[key] = value
            self._write_document(document)

    def remove(self, key: str) -> None:
        with self._locked():
            document = self._read_document()
            if key in document:
                del document[key]
                self._write_document(document)

    def _read_document(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            raise StorageReadError(f"File system error: {e}", target=str(self.path)) from e
        if not raw.strip():
            return {}
        try:
            document = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise StorageReadError(f"Store file is not valid JSON: {e}", target=str(self.path)) from e
        if not isinstance(document, dict):
            raise StorageReadError("Store file must hold a JSON object", target=str(self.path))
        return document

    def _write_document(self, document: dict) -> None:
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(orjson.dumps(document, option=orjson.OPT_INDENT_2))
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageWriteError(f"File system error: {e}", target=str(self.path)) from e

    def _locked(self):
        return _FileLock(self.lock_path)


class _FileLock:
    """Exclusive advisory lock held for the duration of a with-block."""

    def __init__(self, path: Path):
        self.path = path
        self._handle = None

    def __enter__(self):
        try:
            self._handle = open(self.path, "a")
            fcntl.flock(self._handle.fileno(), fcntl.LOCK_EX)
        except OSError as e:
            if self._handle:
                self._handle.close()
                self._handle = None
            raise StorageWriteError(f"Could not lock store: {e}", target=str(self.path)) from e
        return self

    def __exit__(self, exc_type, exc, tb):
        fcntl.flock(self._handle.fileno(), fcntl.LOCK_UN)
        self._handle.close()
        self._handle = None
        return False
