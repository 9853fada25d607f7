"""Helpers for reading JSON payloads sent by different clients."""

from typing import Any

from wellbeing.errors import ValidationError

MISSING = object()


def pick(payload: dict, name: str, default: Any = MISSING) -> Any:
    """
    Read a field regardless of key casing.

    The browser UI posts PascalCase keys ("Category") while scripts post
    camelCase ("category"); both resolve to the same field.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Expected a JSON object")

    wanted = name.lower()
    for key, value in payload.items():
        if isinstance(key, str) and key.lower() == wanted:
            return value

    if default is MISSING:
        raise ValidationError(f"Missing field: {name}")
    return default


def require_text(payload: dict, name: str) -> str:
    value = pick(payload, name)
    if not isinstance(value, str):
        raise ValidationError(f"Field {name} must be a string")
    return value


def optional_bool(payload: dict, name: str, default: bool = False) -> bool:
    value = pick(payload, name, None)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValidationError(f"Field {name} must be a boolean")
