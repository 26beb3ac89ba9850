"""
System failure error classifications.

Storage backends raise the persistence errors below; the controller logs
them and keeps running with its in-memory state.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for failures outside the data itself."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class StateTransitionError(SystemFailureError):
    """A transition could not be applied to the state machine."""

    def __init__(self, message: str, current_state: Optional[str] = None,
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_transition = attempted_transition


class IllegalTransitionError(StateTransitionError):
    """Event is not accepted in the current state."""


class PersistenceError(SystemFailureError):
    """Key-value store failures."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target


class StorageReadError(PersistenceError):
    """The store could not be read (absent keys are not an error)."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("operation", "get")
        super().__init__(message, **kwargs)


class StorageWriteError(PersistenceError):
    """The store rejected a write."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("operation", "set")
        super().__init__(message, **kwargs)


class StorageQuotaExceededError(StorageWriteError):
    """The write would exceed the store's capacity."""

    def __init__(self, message: str, quota_bytes: Optional[int] = None,
                 required_bytes: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.quota_bytes = quota_bytes
        self.required_bytes = required_bytes


class ConfigurationError(SystemFailureError):
    """Configuration could not be turned into a working controller."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
