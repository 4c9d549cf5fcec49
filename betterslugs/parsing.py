"""Shared helpers for normalizing configuration and host parameter values."""

from __future__ import annotations


_TRUE_BOOLEAN_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_BOOLEAN_TOKENS = frozenset({"0", "false", "no", "off"})


def normalize_optional_string(value: object) -> str | None:
    """Return a stripped string, or `None` for missing and blank values."""

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def parse_permissive_boolean(value: object) -> bool | None:
    """Parse booleans and boolean-like tokens, returning `None` when unrecognized."""

    if isinstance(value, bool):
        return value

    normalized = normalize_optional_string(value)
    if normalized is None:
        return None

    token = normalized.lower()
    if token in _TRUE_BOOLEAN_TOKENS:
        return True
    if token in _FALSE_BOOLEAN_TOKENS:
        return False
    return None


def parse_seconds(value: object, field_name: str) -> float:
    """Parse a non-negative duration in seconds.

    Args:
        value: Numeric value or numeric text.
        field_name: Field name for an actionable validation error message.

    Raises:
        ValueError: If the value is not a finite non-negative number.
    """

    if isinstance(value, bool):
        raise ValueError(f"`{field_name}` must be a non-negative number of seconds.")
    if isinstance(value, (int, float)):
        parsed = float(value)
    else:
        normalized = normalize_optional_string(value)
        if normalized is None:
            raise ValueError(f"`{field_name}` must be a non-negative number of seconds.")
        try:
            parsed = float(normalized)
        except ValueError as exc:
            raise ValueError(
                f"`{field_name}` must be a non-negative number of seconds."
            ) from exc

    if parsed != parsed or parsed in (float("inf"), float("-inf")) or parsed < 0.0:
        raise ValueError(f"`{field_name}` must be a non-negative number of seconds.")
    return parsed


def coerce_text(value: object) -> str:
    """Convert a raw field value into slug source text.

    Numbers render as text and lists join their text items with spaces.
    Mappings (entry links, rich text, locations), booleans, and `None` carry no
    slug text and map to an empty string.
    """

    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return " ".join(text for text in (coerce_text(item) for item in value) if text)
    return ""
