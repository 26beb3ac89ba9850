"""
Wire serialization for the persisted entry list.

The stored value is a compact JSON array of entry objects.
"""

from collections.abc import Iterable

import orjson

from ..errors import MalformedEntryError
from .collation import sort_records
from .models import PhoneBookEntry


def encode_entries(entries: Iterable[PhoneBookEntry]) -> str:
    """
    Serialize entries to a JSON array string.

    Raises:
        orjson.JSONEncodeError: If a field value cannot be represented in JSON
    """
    return orjson.dumps([entry.to_dict() for entry in entries]).decode("utf-8")


def decode_entries(raw_data: str, collation: str = "unicode") -> list[PhoneBookEntry]:
    """
    Parse a stored JSON array into entries sorted by last name.

    Records are sorted in their raw form so a missing ``lastName`` and an
    explicit null compare differently, then converted to entries.

    Args:
        raw_data: Stored string value
        collation: Collation name passed to sort_records

    Returns:
        Entries in last-name order

    Raises:
        MalformedEntryError: If the value is not a JSON array of objects or
            its last names cannot be turned into sort keys
    """
    try:
        records = orjson.loads(raw_data)
    except orjson.JSONDecodeError as e:
        raise MalformedEntryError(
            f"Invalid JSON: {e}",
            raw_data=raw_data[:200],
            expected_format="json-array",
        ) from e

    if not isinstance(records, list):
        raise MalformedEntryError(
            f"Expected a JSON array, got {type(records).__name__}",
            raw_data=raw_data[:200],
            expected_format="json-array",
        )

    try:
        ordered = sort_records(records, collation)
    except (ValueError, RecursionError) as e:
        raise MalformedEntryError(
            f"Stored last names cannot be ordered: {e}",
            raw_data=raw_data[:200],
            expected_format="json-array",
        ) from e

    return [PhoneBookEntry.from_dict(record) for record in ordered]
