"""
Phone book controller: a finite state machine over the entry list.

Events are processed one at a time, synchronously. An event that is not in
the transition table for the current state is ignored without touching
state or context, and nothing raised by an action reaches the caller.
Malformed events are rejected when PhoneBookEvent is constructed.
"""

from typing import Any, Callable, Optional, Union

import structlog

from ..config.defaults import DEFAULT_STORAGE_KEY
from ..config.loader import ConfigLoader
from ..config.validation import ConfigValidator
from ..data.models import SEED_ENTRIES, PhoneBookEntry
from ..errors import ConfigurationError, IllegalTransitionError
from ..logging.config import get_state_logger, log_state_transition
from ..persistence.base import KeyValueStore
from ..persistence.factory import create_store
from .models import (
    EventType,
    PhoneBookContext,
    PhoneBookEvent,
    PhoneBookState,
    StoreBinding,
)
from .transitions import ACTIONS, allowed_events, resolve_transition

logger = structlog.get_logger(__name__)
state_logger = get_state_logger(__name__)

Listener = Callable[["PhoneBookController"], None]
EventLike = Union[PhoneBookEvent, EventType, str]


class PhoneBookController:
    """
    Sequences phone book mutations and their persistence.

    idle --READ--> ready --CREATE/UPDATE/DELETE/RESET--> running --FINISH--> idle

    The store is passed in rather than shared globally, so independent
    controllers can use independent stores. Controllers sharing a store and
    key overwrite each other (last write wins).
    """

    def __init__(
        self,
        store: KeyValueStore,
        storage_key: str = DEFAULT_STORAGE_KEY,
        seed: tuple[PhoneBookEntry, ...] = SEED_ENTRIES,
        collation: str = "unicode",
        machine_id: str = "phoneBook",
    ) -> None:
        self.binding = StoreBinding(
            store=store,
            key=storage_key,
            seed=tuple(seed),
            collation=collation,
        )
        self.machine_id = machine_id
        self._state = PhoneBookState.IDLE
        self._context = PhoneBookContext(phone_book_entries=self.binding.seed)
        self._listeners: list[Listener] = []

    @classmethod
    def from_config(
        cls,
        config: Optional[dict[str, Any]] = None,
        config_dir: Optional[str] = None,
    ) -> "PhoneBookController":
        """
        Build a controller and its store from configuration.

        Args:
            config: Merged configuration; loaded via ConfigLoader when omitted
            config_dir: Directory holding phonebook.yaml, used when config is omitted

        Raises:
            ConfigurationError: If the configuration does not validate
        """
        if config is None:
            config = ConfigLoader.create(config_dir).merge_config()

        errors = ConfigValidator.validate_config(config)
        if errors:
            raise ConfigurationError(
                "Invalid phone book configuration: "
                + "; ".join(f"{e.field}: {e.message}" for e in errors),
                errors=errors,
            )

        storage = config.get("storage", {})
        sorting = config.get("sorting", {})
        return cls(
            store=create_store(storage),
            storage_key=storage.get("key", DEFAULT_STORAGE_KEY),
            collation=sorting.get("collation", "unicode"),
        )

    @property
    def state(self) -> PhoneBookState:
        return self._state

    @property
    def context(self) -> PhoneBookContext:
        return self._context

    @property
    def entries(self) -> tuple[PhoneBookEntry, ...]:
        return self._context.phone_book_entries

    def can(self, event_type: Union[EventType, str]) -> bool:
        """Whether an event of this type would be accepted now."""
        try:
            return EventType(event_type) in allowed_events(self._state)
        except ValueError:
            return False

    def snapshot(self) -> dict[str, Any]:
        """State name and wire-form entries, for rendering."""
        return {
            "state": self._state.value,
            "phoneBookEntries": [entry.to_dict() for entry in self.entries],
        }

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call listener with this controller after every accepted transition.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def send(self, event: EventLike) -> PhoneBookState:
        """
        Dispatch one event and return the resulting state.

        Payload-less events may be given by type or name ("READ").
        """
        resolved = self._coerce_event(event)
        if resolved is None:
            return self._state

        try:
            transition = resolve_transition(self._state, resolved.type)
        except IllegalTransitionError:
            return self._state

        from_state = self._state
        self._context = ACTIONS[transition.action](self._context, resolved, self.binding)
        self._state = transition.target

        log_state_transition(
            state_logger,
            machine_id=self.machine_id,
            from_state=from_state.value,
            to_state=self._state.value,
            trigger=resolved.type.value,
            context={"action": transition.action, "entry_count": len(self.entries)},
        )
        self._notify()
        return self._state

    def read(self) -> PhoneBookState:
        return self.send(PhoneBookEvent.read())

    def create(self, entry: PhoneBookEntry) -> PhoneBookState:
        return self.send(PhoneBookEvent.create(entry))

    def update(self, entry: PhoneBookEntry) -> PhoneBookState:
        return self.send(PhoneBookEvent.update(entry))

    def delete(self, entry: PhoneBookEntry) -> PhoneBookState:
        return self.send(PhoneBookEvent.delete(entry))

    def reset(self) -> PhoneBookState:
        return self.send(PhoneBookEvent.reset())

    def finish(self) -> PhoneBookState:
        return self.send(PhoneBookEvent.finish())

    def _coerce_event(self, event: EventLike) -> Optional[PhoneBookEvent]:
        if isinstance(event, PhoneBookEvent):
            return event
        try:
            return PhoneBookEvent(EventType(event))
        except ValueError:
            # Unknown names and payload events without an entry are ignored
            return None

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.error(
                    "Phone book listener failed",
                    machine_id=self.machine_id,
                    error=str(e),
                    exc_info=True,
                )

    def __repr__(self) -> str:
        return (
            f"PhoneBookController(state={self._state.value!r}, "
            f"entries={len(self.entries)}, key={self.binding.key!r})"
        )
