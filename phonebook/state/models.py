"""
State machine data models for the phone book controller.

This module defines the machine's states and events, its immutable
context and the store binding that persistence actions run against.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from ..config.defaults import DEFAULT_STORAGE_KEY
from ..data.models import SEED_ENTRIES, PhoneBookEntry
from ..persistence.base import KeyValueStore


class PhoneBookState(str, Enum):
    """Machine states. There is no terminal state."""
    IDLE = "idle"
    READY = "ready"
    RUNNING = "running"


class EventType(str, Enum):
    """Events accepted by the machine."""
    READ = "READ"
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    RESET = "RESET"
    FINISH = "FINISH"


PAYLOAD_EVENTS = frozenset({EventType.CREATE, EventType.UPDATE, EventType.DELETE})


@dataclass(frozen=True)
class PhoneBookEvent:
    """A dispatched event. CREATE, UPDATE and DELETE carry exactly one entry."""
    type: EventType
    phone_book_entry: Optional[PhoneBookEntry] = None

    def __post_init__(self):
        object.__setattr__(self, "type", EventType(self.type))
        if self.type in PAYLOAD_EVENTS and self.phone_book_entry is None:
            raise ValueError(f"{self.type.value} event requires a phone book entry")
        if self.phone_book_entry is not None and not isinstance(self.phone_book_entry, PhoneBookEntry):
            raise TypeError(
                f"{self.type.value} payload must be a PhoneBookEntry, "
                f"got {type(self.phone_book_entry).__name__}"
            )
        if self.type not in PAYLOAD_EVENTS and self.phone_book_entry is not None:
            raise ValueError(f"{self.type.value} event takes no payload")

    @classmethod
    def read(cls) -> "PhoneBookEvent":
        return cls(EventType.READ)

    @classmethod
    def create(cls, entry: PhoneBookEntry) -> "PhoneBookEvent":
        return cls(EventType.CREATE, entry)

    @classmethod
    def update(cls, entry: PhoneBookEntry) -> "PhoneBookEvent":
        return cls(EventType.UPDATE, entry)

    @classmethod
    def delete(cls, entry: PhoneBookEntry) -> "PhoneBookEvent":
        return cls(EventType.DELETE, entry)

    @classmethod
    def reset(cls) -> "PhoneBookEvent":
        return cls(EventType.RESET)

    @classmethod
    def finish(cls) -> "PhoneBookEvent":
        return cls(EventType.FINISH)


@dataclass(frozen=True)
class PhoneBookContext:
    """Extended state: the ordered entry list."""
    phone_book_entries: tuple[PhoneBookEntry, ...] = SEED_ENTRIES

    def with_entries(self, entries: Iterable[PhoneBookEntry]) -> "PhoneBookContext":
        """Create new context holding the given entries."""
        if isinstance(entries, tuple):
            return PhoneBookContext(phone_book_entries=entries)
        return PhoneBookContext(phone_book_entries=tuple(entries))


@dataclass(frozen=True)
class StoreBinding:
    """Where and how persistence actions read and write the entry list."""
    store: KeyValueStore
    key: str = DEFAULT_STORAGE_KEY
    seed: tuple[PhoneBookEntry, ...] = SEED_ENTRIES
    collation: str = "unicode"


@dataclass(frozen=True)
class Transition:
    """One row of the transition table."""
    action: str
    target: PhoneBookState
