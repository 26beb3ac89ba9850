"""
Phone book state machine.

Cycles idle → ready → running → idle. Each READ → mutation → FINISH cycle
applies exactly one mutation and persists it once.
"""
from .machine import PhoneBookController
from .models import (
    EventType,
    PhoneBookContext,
    PhoneBookEvent,
    PhoneBookState,
    StoreBinding,
    Transition,
)
from .transitions import TRANSITIONS, allowed_events, resolve_transition

__all__ = [
    "PhoneBookController",
    "PhoneBookState",
    "EventType",
    "PhoneBookEvent",
    "PhoneBookContext",
    "StoreBinding",
    "Transition",
    "TRANSITIONS",
    "allowed_events",
    "resolve_transition",
]
