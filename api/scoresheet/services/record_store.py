"""Persistence of match records.

Records are stored one JSON document per match id. The service runs with a
single configured match id, so there is exactly one current record; the
id keeps that a configuration choice rather than a hidden global.

Loading is forgiving about absence (missing file, empty file, or a file that
holds a JSON schema rather than data all mean "no record yet") and strict
about everything else: unreadable files and invalid JSON raise.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Protocol

from ..models import MatchRecord
from .normalization import normalize_record

logger = logging.getLogger(__name__)

_SAFE_MATCH_ID = re.compile(r"^[A-Za-z0-9._-]+$")


class RecordStoreError(Exception):
    """Raised when a stored record cannot be read or written."""
    pass


class RecordStore(Protocol):
    def load(self, match_id: str) -> MatchRecord | None:
        """Return the stored record, or None when nothing is stored yet."""
        ...

    def save(self, match_id: str, record: MatchRecord) -> None:
        ...


def _looks_like_schema(document: Any) -> bool:
    return isinstance(document, dict) and "$schema" in document


class JsonFileRecordStore:
    """Pretty-printed JSON files under ``root``, named ``<match_id>.json``."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def path_for(self, match_id: str) -> Path:
        if not _SAFE_MATCH_ID.match(match_id) or match_id in {".", ".."}:
            raise RecordStoreError(f"Invalid match id: {match_id!r}")
        return self.root / f"{match_id}.json"

    def load(self, match_id: str) -> MatchRecord | None:
        path = self.path_for(match_id)
        try:
            text = path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise RecordStoreError(f"Failed to read {path}: {e}") from e

        if not text:
            return None
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise RecordStoreError(f"Stored record {path} is not valid JSON: {e}") from e

        if _looks_like_schema(document):
            # Left in place and served as defaults until the first real save
            logger.info("record_store_schema_document_ignored", extra={"path": str(path)})
            return MatchRecord()
        # Older files may predate newer fields; normalizing fills them in
        return normalize_record(document)

    def save(self, match_id: str, record: MatchRecord) -> None:
        path = self.path_for(match_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(record.to_wire(), indent=2), encoding="utf-8")
        except OSError as e:
            raise RecordStoreError(f"Failed to write {path}: {e}") from e
        logger.debug("record_saved", extra={"match_id": match_id, "path": str(path)})


class InMemoryRecordStore:
    """Dict-backed store for tests and ephemeral runs."""

    def __init__(self) -> None:
        self.records: dict[str, MatchRecord] = {}

    def load(self, match_id: str) -> MatchRecord | None:
        return self.records.get(match_id)

    def save(self, match_id: str, record: MatchRecord) -> None:
        self.records[match_id] = record


def load_or_default(store: RecordStore, match_id: str) -> MatchRecord:
    """Return the stored record, writing and returning defaults when absent."""
    record = store.load(match_id)
    if record is None:
        record = MatchRecord()
        store.save(match_id, record)
    return record
