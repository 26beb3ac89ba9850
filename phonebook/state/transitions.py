"""
Transition table and action handlers for the phone book machine.

Every action has the signature ``(context, event, binding) -> context``.
Mutating actions build a new context; the persistence actions catch and log
every failure so that a transition always lands in its target state.
"""

from collections.abc import Mapping
from typing import Callable

import structlog

from ..data.serialization import decode_entries, encode_entries
from ..errors import DataQualityError, IllegalTransitionError
from ..logging.config import get_storage_logger
from .models import (
    EventType,
    PhoneBookContext,
    PhoneBookEvent,
    PhoneBookState,
    StoreBinding,
    Transition,
)

logger = structlog.get_logger(__name__)
storage_logger = get_storage_logger(__name__)

Action = Callable[[PhoneBookContext, PhoneBookEvent, StoreBinding], PhoneBookContext]


def load_entries(
    context: PhoneBookContext,
    event: PhoneBookEvent,
    binding: StoreBinding
) -> PhoneBookContext:
    """
    Replace the context with the persisted entry list, sorted by last name.

    An absent or empty value yields the seed list. Unreadable stores and
    unparsable values are logged and also yield the seed list.
    """
    try:
        raw_data = binding.store.get(binding.key)
    except Exception as e:
        storage_logger.error(
            "Failed to read phone book from store",
            key=binding.key,
            error=str(e),
            error_type=type(e).__name__,
        )
        return context.with_entries(binding.seed)

    if not raw_data:
        return context.with_entries(binding.seed)

    try:
        entries = decode_entries(raw_data, binding.collation)
    except DataQualityError as e:
        storage_logger.error(
            "Stored phone book is malformed, falling back to seed entries",
            key=binding.key,
            error=str(e),
        )
        return context.with_entries(binding.seed)

    return context.with_entries(entries)


def create_entry(
    context: PhoneBookContext,
    event: PhoneBookEvent,
    binding: StoreBinding
) -> PhoneBookContext:
    """Append the event's entry. No re-sort and no id collision check."""
    return context.with_entries(context.phone_book_entries + (event.phone_book_entry,))


def update_entry(
    context: PhoneBookContext,
    event: PhoneBookEvent,
    binding: StoreBinding
) -> PhoneBookContext:
    """Drop entries with the event entry's id, then append it (upsert, moves to tail)."""
    updated = event.phone_book_entry
    remaining = [entry for entry in context.phone_book_entries if entry.id != updated.id]
    remaining.append(updated)
    return context.with_entries(remaining)


def delete_entry(
    context: PhoneBookContext,
    event: PhoneBookEvent,
    binding: StoreBinding
) -> PhoneBookContext:
    """Drop entries with the event entry's id."""
    deleted_id = event.phone_book_entry.id
    return context.with_entries(
        entry for entry in context.phone_book_entries if entry.id != deleted_id
    )


def reset_entries(
    context: PhoneBookContext,
    event: PhoneBookEvent,
    binding: StoreBinding
) -> PhoneBookContext:
    """Replace the context with the seed list."""
    return context.with_entries(binding.seed)


def persist_entries(
    context: PhoneBookContext,
    event: PhoneBookEvent,
    binding: StoreBinding
) -> PhoneBookContext:
    """
    Write the entry list to the store.

    Failures are logged; the in-memory context is returned unchanged either
    way and nothing is retried.
    """
    try:
        binding.store.set(binding.key, encode_entries(context.phone_book_entries))
    except Exception as e:
        storage_logger.error(
            "Failed to write phone book to store",
            key=binding.key,
            entry_count=len(context.phone_book_entries),
            error=str(e),
            error_type=type(e).__name__,
        )
    else:
        logger.debug(
            "Phone book persisted",
            key=binding.key,
            entry_count=len(context.phone_book_entries),
        )
    return context


ACTIONS: Mapping[str, Action] = {
    "load_entries": load_entries,
    "create_entry": create_entry,
    "update_entry": update_entry,
    "delete_entry": delete_entry,
    "reset_entries": reset_entries,
    "persist_entries": persist_entries,
}

TRANSITIONS: Mapping[tuple[PhoneBookState, EventType], Transition] = {
    (PhoneBookState.IDLE, EventType.READ): Transition("load_entries", PhoneBookState.READY),
    (PhoneBookState.READY, EventType.CREATE): Transition("create_entry", PhoneBookState.RUNNING),
    (PhoneBookState.READY, EventType.UPDATE): Transition("update_entry", PhoneBookState.RUNNING),
    (PhoneBookState.READY, EventType.DELETE): Transition("delete_entry", PhoneBookState.RUNNING),
    (PhoneBookState.READY, EventType.RESET): Transition("reset_entries", PhoneBookState.RUNNING),
    (PhoneBookState.RUNNING, EventType.FINISH): Transition("persist_entries", PhoneBookState.IDLE),
}


def resolve_transition(state: PhoneBookState, event_type: EventType) -> Transition:
    """
    Look up the transition for an event in a state.

    Raises:
        IllegalTransitionError: If the event is not accepted in state
    """
    transition = TRANSITIONS.get((state, event_type))
    if transition is None:
        raise IllegalTransitionError(
            f"{event_type.value} is not accepted in state {state.value}",
            current_state=state.value,
            attempted_transition=event_type.value,
        )
    return transition


def allowed_events(state: PhoneBookState) -> list[EventType]:
    """Event types accepted in state, in table order."""
    return [event_type for (from_state, event_type) in TRANSITIONS if from_state == state]
