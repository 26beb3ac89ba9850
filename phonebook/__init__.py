"""
Phone Book - state-machine controlled contact list

Sequences create/update/delete/reset mutations of an in-memory list of
contact records through an idle → ready → running cycle and persists the
list to a string key-value store on each FINISH.
"""

from typing import Any, Optional

from .config.loader import ConfigLoader
from .data.models import SEED_ENTRIES, PhoneBookEntry
from .logging.config import configure_logging
from .state.machine import PhoneBookController
from .state.models import EventType, PhoneBookEvent, PhoneBookState

__version__ = "0.1.0"
__author__ = "Phone Book Team"

__all__ = [
    "PhoneBookController",
    "PhoneBookEntry",
    "PhoneBookEvent",
    "PhoneBookState",
    "EventType",
    "SEED_ENTRIES",
    "create_controller",
]


def create_controller(
    config_dir: Optional[str] = None,
    overrides: Optional[dict[str, Any]] = None,
    setup_logging: bool = True,
) -> PhoneBookController:
    """
    Load configuration, optionally configure logging, and build a controller.

    Args:
        config_dir: Directory holding phonebook.yaml
        overrides: Highest-precedence configuration values
        setup_logging: Apply the ``logging`` config section via configure_logging

    Raises:
        ConfigurationError: If the merged configuration does not validate
    """
    config = ConfigLoader.create(config_dir).merge_config(overrides)
    controller = PhoneBookController.from_config(config)

    if setup_logging:
        log_config = config.get("logging", {})
        configure_logging(
            level=log_config.get("level", "INFO"),
            format_json=log_config.get("format_json", False),
            include_timestamp=log_config.get("include_timestamp", True),
        )

    return controller
