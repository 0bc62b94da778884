"""Best-effort recovery of a JSON object from model output."""

from __future__ import annotations

import json
import re
from typing import Any

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)
# Greedy: first "{" through last "}"
_OBJECT_SPAN = re.compile(r"\{.*\}", re.DOTALL)


def strip_code_fence(text: str) -> str:
    """Remove a leading ```json and trailing ``` wrapper."""
    return _CODE_FENCE.sub("", text.strip())


def parse_json_response(text: str | None) -> dict[str, Any]:
    """Parse ``text`` as a JSON object.

    Falls back to the outermost brace span when the text has prose around
    the object. Anything that still is not a JSON object yields ``{}``,
    including oversized integer literals and nesting too deep to decode.
    """
    if not text:
        return {}
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        match = _OBJECT_SPAN.search(text)
        if match is None:
            return {}
        try:
            parsed = json.loads(match.group())
        except (ValueError, RecursionError):
            return {}
    return parsed if isinstance(parsed, dict) else {}
