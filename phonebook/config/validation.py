"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from ..data.collation import COLLATIONS

STORAGE_BACKENDS = ("memory", "file", "sqlite")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_storage_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate storage parameters."""
        errors = []

        if "backend" in params:
            value = params["backend"]
            if value not in STORAGE_BACKENDS:
                errors.append(ValidationError(
                    field="storage.backend",
                    message=f"Must be one of {', '.join(STORAGE_BACKENDS)}",
                    value=value
                ))

        if "key" in params:
            value = params["key"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field="storage.key",
                    message="Must be a non-empty string",
                    value=value
                ))

        if params.get("path") is not None and not isinstance(params["path"], str):
            errors.append(ValidationError(
                field="storage.path",
                message="Must be a string",
                value=params["path"]
            ))

        if params.get("quota_bytes") is not None:
            value = params["quota_bytes"]
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                errors.append(ValidationError(
                    field="storage.quota_bytes",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        for flag in ("format_json", "include_timestamp"):
            if flag in params and not isinstance(params[flag], bool):
                errors.append(ValidationError(
                    field=f"logging.{flag}",
                    message="Must be a boolean",
                    value=params[flag]
                ))

        return errors

    @staticmethod
    def validate_sorting_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate sorting parameters."""
        errors = []

        if "collation" in params and params["collation"] not in COLLATIONS:
            errors.append(ValidationError(
                field="sorting.collation",
                message=f"Must be one of {', '.join(COLLATIONS)}",
                value=params["collation"]
            ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "storage" in config:
            errors.extend(ConfigValidator.validate_storage_params(config["storage"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        if "sorting" in config:
            errors.extend(ConfigValidator.validate_sorting_params(config["sorting"]))

        return errors
