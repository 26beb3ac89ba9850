"""In-process store with an optional byte quota."""

from typing import Optional

from ..errors import StorageQuotaExceededError
from .base import KeyValueStore


class InMemoryStore(KeyValueStore):
    """Dict-backed store. Sizes are counted over UTF-8 encoded keys and values."""

    def __init__(self, quota_bytes: Optional[int] = None,
                 initial: Optional[dict[str, str]] = None):
        self.quota_bytes = quota_bytes
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            required = self._size_without(key) + _byte_size(key) + _byte_size(value)
            if required > self.quota_bytes:
                raise StorageQuotaExceededError(
                    f"Writing {key!r} needs {required} bytes, quota is {self.quota_bytes}",
                    quota_bytes=self.quota_bytes,
                    required_bytes=required,
                    target=key,
                )
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def used_bytes(self) -> int:
        return self._size_without(None)

    def _size_without(self, skip: Optional[str]) -> int:
        return sum(
            _byte_size(k) + _byte_size(v)
            for k, v in self._data.items()
            if k != skip
        )


def _byte_size(text: str) -> int:
    return len(text.encode("utf-8"))
