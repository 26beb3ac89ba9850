"""
Error classification for the phone book controller.

Storage and parse failures are raised by the data and persistence layers and
caught at the controller's action boundary; none of them reach callers of
``PhoneBookController.send``.
"""

from .data_quality import (
    DataQualityError,
    MalformedEntryError,
)
from .system_failures import (
    SystemFailureError,
    StateTransitionError,
    IllegalTransitionError,
    PersistenceError,
    StorageReadError,
    StorageWriteError,
    StorageQuotaExceededError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MalformedEntryError",
    # System Failures
    "SystemFailureError",
    "StateTransitionError",
    "IllegalTransitionError",
    "PersistenceError",
    "StorageReadError",
    "StorageWriteError",
    "StorageQuotaExceededError",
    "ConfigurationError",
]
