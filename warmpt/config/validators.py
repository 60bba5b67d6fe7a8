"""Shared scenario validation helpers."""

from __future__ import annotations

from typing import Any, Mapping, Sequence


def as_mapping(value: Any, context: str) -> dict[str, Any]:
    """Require mapping value."""
    if not isinstance(value, dict):
        raise ValueError(f"{context} must be a mapping.")
    return value


def opt_mapping(value: Any, context: str) -> dict[str, Any]:
    """Return mapping or empty mapping for None."""
    if value is None:
        return {}
    return as_mapping(value, context)


def as_list(value: Any, context: str) -> list[Any]:
    """Require YAML sequence value."""
    if not isinstance(value, list):
        raise ValueError(f"{context} must be a list.")
    return value


def required(mapping: Mapping[str, Any], key: str, context: str) -> Any:
    """Require mapping key existence."""
    if not isinstance(mapping, Mapping):
        raise ValueError(f"{context} must be a mapping.")
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context}.")
    return mapping[key]


def to_float(value: Any, key: str, context: str) -> float:
    """Convert a YAML number to float with contextual error message.

    Booleans and strings are rejected even though Python could coerce them.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{context}.{key} must be a number, got {value!r}.")
    return float(value)


def to_int(value: Any, key: str, context: str) -> int:
    """Convert a YAML integer to int with contextual error message."""
    if isinstance(value, bool):
        raise ValueError(f"{context}.{key} must be an integer, got {value!r}.")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, int):
        raise ValueError(f"{context}.{key} must be an integer, got {value!r}.")
    return value


def to_bool(value: Any, key: str, context: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{context}.{key} must be true or false, got {value!r}.")
    return value


def ensure_choice(name: str, value: str, allowed: Sequence[str]) -> str:
    """Validate a case-sensitive str choice and return it."""
    val = str(value)
    if val not in allowed:
        joined = ", ".join(allowed)
        raise ValueError(f"{name} must be one of: {joined}. Got '{val}'.")
    return val


def ensure_nonnegative(name: str, value: int | float, *, allow_zero: bool = True) -> int | float:
    """Validate scalar non-negativity for already-numeric values."""
    if allow_zero:
        if value < 0:
            raise ValueError(f"{name} must be >= 0, got {value}.")
    elif value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}.")
    return value
