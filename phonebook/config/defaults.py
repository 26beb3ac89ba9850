"""Default configuration parameters for the phone book controller."""

from dataclasses import dataclass
from typing import Optional

DEFAULT_STORAGE_KEY = "phonebook-context-key"


@dataclass(frozen=True)
class StorageParams:
    """Persistence store parameters."""
    backend: str = "memory"                  # memory | file | sqlite
    key: str = DEFAULT_STORAGE_KEY           # Key the entry list is stored under
    path: Optional[str] = None               # File or database path for file/sqlite
    quota_bytes: Optional[int] = None        # Memory backend capacity, None = unbounded


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False
    include_timestamp: bool = True


@dataclass(frozen=True)
class SortingParams:
    """Last-name ordering parameters."""
    collation: str = "unicode"               # unicode | locale


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    storage: StorageParams
    logging: LoggingParams
    sorting: SortingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        storage=StorageParams(),
        logging=LoggingParams(),
        sorting=SortingParams(),
    )
