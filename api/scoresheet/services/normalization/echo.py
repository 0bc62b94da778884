"""Detection of field names echoed back as values.

Vision models asked for a JSON object with known keys sometimes fill a key
they could not read with the key's own name ("teamAName": "team_a_name").
Such values are treated as missing.
"""

from __future__ import annotations

import re
from typing import Any

_CAPITAL = re.compile(r"([A-Z])")


def snake_case(field_name: str) -> str:
    """``teamAName`` -> ``team_a_name``."""
    snake = _CAPITAL.sub(lambda m: "_" + m.group(1).lower(), field_name)
    return snake[1:] if snake.startswith("_") else snake


def is_key_echo(field_name: str, value: Any) -> bool:
    """Return True when ``value`` is empty or merely repeats ``field_name``."""
    if value is None or value == "":
        return True
    text = str(value).strip().lower()
    return text == field_name.lower() or text == snake_case(field_name)
