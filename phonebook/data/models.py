"""
Canonical data models for phone book entries.

Entries are immutable value records. The wire format uses camelCase
field names (``firstName``, ``lastName``, ``phoneNumber``).
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Optional

from ..errors import MalformedEntryError
from .collation import sort_entries

WIRE_FIELDS = {
    "id": "id",
    "firstName": "first_name",
    "lastName": "last_name",
    "phoneNumber": "phone_number",
}


@dataclass(frozen=True)
class PhoneBookEntry:
    """One contact record. Ids are caller-assigned and not checked for collisions."""
    id: Optional[int]
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None   # Free-form, never validated

    @classmethod
    def from_dict(cls, data: Any) -> "PhoneBookEntry":
        """
        Build an entry from its wire mapping.

        Missing fields become None so that partially written records still
        load. Unknown keys are ignored.

        Raises:
            MalformedEntryError: If data is not a mapping
        """
        if not isinstance(data, Mapping):
            raise MalformedEntryError(
                f"Expected an entry object, got {type(data).__name__}",
                raw_data=repr(data)[:200],
                expected_format="object",
            )
        return cls(**{attr: data.get(key) for key, attr in WIRE_FIELDS.items()})

    def to_dict(self) -> dict[str, Any]:
        """Wire mapping with None fields omitted."""
        result = {}
        for key, attr in WIRE_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                result[key] = value
        return result

    def with_changes(self, **fields: Any) -> "PhoneBookEntry":
        """Copy of this entry with the given fields replaced."""
        return replace(self, **fields)


def _build_seed() -> tuple[PhoneBookEntry, ...]:
    entries = [
        PhoneBookEntry(1, "Eric", "Elliot", "222-555-6575"),
        PhoneBookEntry(2, "Steve", "Jobs", "220-454-6754"),
        PhoneBookEntry(3, "Fred", "Allen", "210-657-9886"),
        PhoneBookEntry(4, "Steve", "Wozniak", "343-675-8786"),
        PhoneBookEntry(5, "Bill", "Gates", "343-654-9688"),
    ]
    return tuple(sort_entries(entries))


# Sorted by last name once, at import. Shared by reference; never mutate.
SEED_ENTRIES: tuple[PhoneBookEntry, ...] = _build_seed()
