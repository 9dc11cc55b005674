"""Shared parsing helpers for CLI, YAML, and environment value normalization."""

from __future__ import annotations


def normalize_optional_string(value: object) -> str | None:
    """Normalize an optional value to a stripped non-empty string.

    Args:
        value: Arbitrary input value.

    Returns:
        Stripped string value, or `None` when the value is empty after trimming.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def parse_positive_int(value: object, field_name: str) -> int:
    """Parse a strictly positive integer from a textual or integer value.

    Args:
        value: Raw value, typically a CLI token or YAML scalar.
        field_name: Field name for an actionable validation error message.

    Raises:
        ValueError: If the value is missing, non-numeric, or not positive.
    """

    if isinstance(value, bool):
        raise ValueError(f"`{field_name}` must be a positive integer, got `{value}`.")
    if isinstance(value, int):
        parsed = value
    else:
        normalized = normalize_optional_string(value)
        if normalized is None:
            raise ValueError(f"`{field_name}` requires a value.")
        if not normalized.isascii() or not normalized.isdigit():
            raise ValueError(f"`{field_name}` must be a positive integer, got `{normalized}`.")
        parsed = int(normalized)
    if parsed <= 0:
        raise ValueError(f"`{field_name}` must be a positive integer, got `{parsed}`.")
    return parsed


def parse_optional_positive_int(value: object, field_name: str) -> int | None:
    """Parse an optional positive integer, returning `None` for blank values."""

    if value is None or normalize_optional_string(value) is None:
        return None
    return parse_positive_int(value, field_name)
