"""Shared parsing helpers for configuration value normalization."""

from __future__ import annotations

import math


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


def parse_float(value: object, field_name: str) -> float:
    """Parse a finite float from numeric or textual input.

    Raises:
        ValueError: If the value is a boolean, blank, not numeric, NaN or infinite.
    """

    if isinstance(value, bool):
        raise ValueError(f"`{field_name}` must be a number.")
    if isinstance(value, int | float):
        parsed = float(value)
    else:
        normalized = normalize_optional_string(value)
        if normalized is None:
            raise ValueError(f"`{field_name}` must be a number.")
        try:
            parsed = float(normalized)
        except ValueError as exc:
            raise ValueError(f"`{field_name}` must be a number.") from exc
    if not math.isfinite(parsed):
        raise ValueError(f"`{field_name}` must be a finite number.")
    return parsed

