"""
Phone book entry records, seed data, sorting and wire serialization.
"""
from .collation import coerce_sort_text, sort_entries, sort_records
from .models import SEED_ENTRIES, PhoneBookEntry
from .serialization import decode_entries, encode_entries

__all__ = [
    "PhoneBookEntry",
    "SEED_ENTRIES",
    "coerce_sort_text",
    "sort_entries",
    "sort_records",
    "decode_entries",
    "encode_entries",
]
