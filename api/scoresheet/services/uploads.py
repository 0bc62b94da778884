"""Storage of uploaded scoresheet files."""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_NAME = "scoresheet"
_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9._-]")
_CHUNK_BYTES = 1024 * 1024


class UploadTooLargeError(Exception):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, limit_bytes: int) -> None:
        super().__init__(f"File exceeds the {limit_bytes} byte upload limit")
        self.limit_bytes = limit_bytes


@dataclass(frozen=True)
class StoredUpload:
    path: Path
    original_name: str

    @property
    def stored_name(self) -> str:
        return self.path.name


def sanitize_filename(name: str | None) -> str:
    return _UNSAFE_CHARS.sub("_", name or DEFAULT_UPLOAD_NAME)


def store_upload(
    source: BinaryIO,
    original_name: str | None,
    upload_dir: Path,
    max_bytes: int,
) -> StoredUpload:
    """Copy ``source`` to ``<epoch-ms>-<sanitized name>`` in ``upload_dir``.

    Partially written files are removed when the limit is exceeded.
    """
    upload_dir.mkdir(parents=True, exist_ok=True)
    stored_name = f"{int(time.time() * 1000)}-{sanitize_filename(original_name)}"
    path = upload_dir / stored_name

    written = 0
    try:
        with path.open("wb") as out:
            while chunk := source.read(_CHUNK_BYTES):
                written += len(chunk)
                if written > max_bytes:
                    raise UploadTooLargeError(max_bytes)
                out.write(chunk)
    except UploadTooLargeError:
        path.unlink(missing_ok=True)
        raise

    logger.info("upload_stored", extra={"stored_name": stored_name, "size_bytes": written})
    return StoredUpload(path=path, original_name=original_name or "")
