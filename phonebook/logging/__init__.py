"""
Logging configuration and utilities for the phone book controller.
"""
from .config import (
    configure_logging,
    get_logger,
    get_state_logger,
    get_storage_logger,
    log_state_transition,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_state_logger",
    "get_storage_logger",
    "log_state_transition",
]
