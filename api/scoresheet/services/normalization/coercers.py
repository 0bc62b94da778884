"""Scalar coercers.

Each coercer is total: it accepts any JSON value and returns a value of
the target type, or None where the caller must decide what rejection
means (drop the field, drop the containing event).
"""

from __future__ import annotations

import re
from typing import Any

from ...models import DEFAULT_POINTS_PER_COLUMN, TEAM_LETTERS, WIDE_POINTS_PER_COLUMN
from .echo import is_key_echo

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def to_text(value: Any) -> str:
    """String form of a JSON scalar. ``None`` is empty, ``7.0`` is ``"7"``."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    try:
        return str(value)
    except ValueError:
        # int too long to render in decimal
        return ""


def parse_leading_int(value: Any) -> int | None:
    """Parse the integer prefix of ``value``'s string form.

    ``"12 pts"`` -> 12, ``"3.9"`` -> 3, ``"abc"`` -> None.
    """
    match = _LEADING_INT.match(to_text(value))
    if match is None:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # Past the interpreter's int digit limit
        return None


def coerce_count(value: Any) -> int:
    """Non-negative integer; unparsable or negative input becomes 0."""
    parsed = parse_leading_int(value)
    if parsed is None or parsed < 0:
        return 0
    return parsed


def coerce_points_per_column(value: Any) -> int:
    if parse_leading_int(value) == WIDE_POINTS_PER_COLUMN:
        return WIDE_POINTS_PER_COLUMN
    return DEFAULT_POINTS_PER_COLUMN


def coerce_team_letter(value: Any) -> str | None:
    letter = to_text(value).upper().strip()
    return letter if letter in TEAM_LETTERS else None


def coerce_text(value: Any) -> str:
    return to_text(value).strip()


def coerce_label(field_name: str, value: Any) -> str | None:
    """Trimmed text, or None when the value is blank or echoes ``field_name``."""
    text = coerce_text(value)
    if is_key_echo(field_name, text):
        return None
    return text
