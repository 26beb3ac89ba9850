"""Base class for string key-value stores."""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Minimal get/set/remove store keyed by strings.

    ``get`` returns None for a missing key. Backends raise StorageReadError
    or StorageWriteError (from phonebook.errors) when the underlying
    medium fails.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete key; no-op when absent."""
        pass

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
