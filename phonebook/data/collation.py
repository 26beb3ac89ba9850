"""
Last-name ordering for phone book entries.

Comparison values follow JavaScript ``String()`` coercion of the raw field,
so a record with no last name sorts as the text ``"undefined"`` and a JSON
null as ``"null"``. Both sorts are stable.
"""

import locale
import unicodedata
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from .models import PhoneBookEntry

COLLATIONS = ("unicode", "locale")

_MISSING = object()
_END = object()


def coerce_sort_text(value: Any = _MISSING) -> str:
    """Render a raw field value the way JavaScript's String() would."""
    if isinstance(value, (list, tuple)):
        return _join_array(value)
    return _coerce_scalar(value)


def _coerce_scalar(value: Any) -> str:
    if value is _MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        if abs(value) >= 10 ** 21:
            return format_js_number(float(value))
        return str(value)
    if isinstance(value, float):
        return format_js_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return "[object Object]"
    return str(value)


def _join_array(items: Any) -> str:
    # Explicit stack: stored arrays may nest deeper than the recursion limit
    stack = [(iter(items), [])]
    while True:
        iterator, parts = stack[-1]
        item = next(iterator, _END)
        if item is _END:
            stack.pop()
            text = ",".join(parts)
            if not stack:
                return text
            stack[-1][1].append(text)
        elif isinstance(item, (list, tuple)):
            stack.append((iter(item), []))
        else:
            parts.append("" if item is None else _coerce_scalar(item))


def format_js_number(value: float) -> str:
    """
    Format a float as JavaScript's Number.prototype.toString does.

    Integers below 1e21 print without exponent; other values use the
    shortest round-trip digits, switching to exponent form outside
    [1e-6, 1e21).
    """
    if value != value:
        return "NaN"
    if value in (float("inf"), float("-inf")):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if value < 0:
        return "-" + format_js_number(-value)

    _, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = exponent + k    # value == 0.digits * 10**n

    if k <= n <= 21:
        return digits + "0" * (n - k)
    if 0 < n <= 21:
        return digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return "0." + "0" * (-n) + digits

    e = n - 1
    sign = "+" if e >= 0 else "-"
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{mantissa}e{sign}{abs(e)}"


def unicode_collation_key(text: str) -> tuple:
    """
    Locale-independent key close to a default locale comparison.

    Compares base letters case-insensitively first, then accents, then case
    with lowercase ahead of uppercase.
    """
    decomposed = unicodedata.normalize("NFD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (
        base.casefold(),
        decomposed.casefold(),
        tuple(ch.isupper() for ch in base),
    )


def locale_collation_key(text: str) -> str:
    """Key under the process locale. strxfrm cannot take NUL, so NULs are dropped."""
    return locale.strxfrm(text.replace("\x00", ""))


def _key_function(collation: str) -> Callable[[str], Any]:
    if collation == "unicode":
        return unicode_collation_key
    if collation == "locale":
        return locale_collation_key
    raise ValueError(f"Unknown collation: {collation!r}. Expected one of {COLLATIONS}")


def sort_records(records: Iterable[Any], collation: str = "unicode") -> list[Any]:
    """Stable sort of raw decoded records by their ``lastName`` value."""
    key_fn = _key_function(collation)

    def record_key(record: Any) -> Any:
        if isinstance(record, Mapping) and "lastName" in record:
            return key_fn(coerce_sort_text(record["lastName"]))
        return key_fn(coerce_sort_text())

    return sorted(records, key=record_key)


def sort_entries(entries: Iterable["PhoneBookEntry"], collation: str = "unicode") -> list["PhoneBookEntry"]:
    """Stable sort of entries by last name; a None last name sorts as "undefined"."""
    key_fn = _key_function(collation)

    def entry_key(entry: "PhoneBookEntry") -> Any:
        if entry.last_name is None:
            return key_fn(coerce_sort_text())
        return key_fn(coerce_sort_text(entry.last_name))

    return sorted(entries, key=entry_key)
