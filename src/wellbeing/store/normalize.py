"""
Value normalization and comparison used by every store.

The Postgres store compiles the same rules into SQL (lower() on text,
::date on dates); the in-memory store applies them directly.
"""

from datetime import date, datetime
from typing import Any

from wellbeing.store.schema import BOOL, DATE, TEXT, TEXT_ARRAY

TRUE_STRINGS = {"true", "1", "yes", "on"}
FALSE_STRINGS = {"false", "0", "no", "off", ""}


def normalize_date(value: Any) -> date:
    """
    Coerce a date-like value to a calendar date.

    Accepts date, datetime (time of day is dropped) and ISO strings. A string
    longer than ten characters must be a full ISO timestamp; its date is kept.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) > 10:
                return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
            return date.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid date: {value!r}") from None
    raise ValueError(f"Invalid date: {value!r}")


def normalize_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    raise ValueError(f"Invalid boolean: {value!r}")


def normalize_text_array(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        raise ValueError("Expected a list of strings, got a single string")
    return ["" if item is None else str(item) for item in value]


def normalize_value(kind: str, value: Any) -> Any:
    """Coerce a column value to its stored form."""
    if value is None:
        return None
    if kind == DATE:
        return normalize_date(value)
    if kind == BOOL:
        return normalize_bool(value)
    if kind == TEXT_ARRAY:
        return normalize_text_array(value)
    return value


def match_key(kind: str, value: Any) -> Any:
    """Return the value two cells must share to be considered equal."""
    if value is None:
        return None
    if kind == TEXT:
        return str(value).lower()
    if kind == DATE:
        return normalize_date(value)
    if kind == BOOL:
        return normalize_bool(value)
    if kind == TEXT_ARRAY:
        return tuple(normalize_text_array(value))
    return value


def values_equal(kind: str, left: Any, right: Any) -> bool:
    return match_key(kind, left) == match_key(kind, right)


def text_key(value: str) -> str:
    """Case-insensitive key for grouping labels outside the stores."""
    return value.lower()
