"""Prompts sent to the extraction service.

Both the base instructions and the schema description can be overridden
by files next to the install; unreadable or missing files fall back to the
built-in text.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ...models import COUNTER_KEYS, TEXT_KEYS, MatchRecord

logger = logging.getLogger(__name__)

DEFAULT_EXTRACTION_PROMPT = (
    "Extract basketball match header information and return a JSON object with keys: "
    "teamAName, teamBName, competitionName, date (YYYY-MM-DD), time (HH:MM), place, "
    "referee1, referee2. Use empty string if not found. Return only the JSON."
)

# Keys requested from plain-text documents, which carry no roster grid.
EXTRACTION_KEYS: tuple[str, ...] = (*TEXT_KEYS, *COUNTER_KEYS)


def _read_text(path: Path | None) -> str | None:
    if path is None:
        return None
    try:
        return path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("prompt_override_unreadable", extra={"path": str(path), "error": str(e)})
        return None


class PromptLibrary:
    """Builds the instruction text for each kind of document."""

    def __init__(self, prompt_file: Path | None = None, schema_file: Path | None = None) -> None:
        self.prompt_file = prompt_file
        self.schema_file = schema_file

    def base_instructions(self) -> str:
        return _read_text(self.prompt_file) or DEFAULT_EXTRACTION_PROMPT

    def schema_description(self) -> str:
        override = _read_text(self.schema_file)
        if override:
            return override
        return json.dumps(MatchRecord.model_json_schema(by_alias=True), indent=2)

    def text_prompt(self) -> str:
        """Prompt for documents sent as raw text."""
        return (
            f"{self.base_instructions()}\n\n"
            "Output a JSON object with exactly these keys (and no others): "
            f"{', '.join(EXTRACTION_KEYS)}.\n\n"
            "Return only the JSON object, no markdown or other text. "
            'Use empty string "" only when the value is not visible in the document.'
        )

    def document_prompt(self) -> str:
        """Prompt for images and PDFs, which carry the full scoresheet."""
        return (
            f"{self.base_instructions()}\n\n"
            f"Schema:\n{self.schema_description()}\n\n"
            "Return a single JSON object matching the schema. "
            'Use empty string "" for any value not visible. No other text.'
        )
