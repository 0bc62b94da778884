"""Sinks for raw extraction payloads, kept for debugging prompts."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class ResponseSink(Protocol):
    def record(self, payload: dict[str, Any]) -> None:
        ...


class NullResponseSink:
    def record(self, payload: dict[str, Any]) -> None:
        return None


class ListResponseSink:
    """Keeps every payload in memory."""

    def __init__(self) -> None:
        self.payloads: list[dict[str, Any]] = []

    def record(self, payload: dict[str, Any]) -> None:
        self.payloads.append(payload)


class JsonFileResponseSink:
    """Overwrites one JSON file with the latest payload. Write failures are logged only."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def record(self, payload: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.warning(
                "extraction_response_write_failed",
                extra={"path": str(self.path), "error": str(e)},
            )
