"""Uploaded scoresheet files as extraction-request parts."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from pathlib import Path
from typing import Any

# Extensions the model reads natively, by MIME type.
INLINE_MIME_TYPES: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "pdf": "application/pdf",
}
FALLBACK_MIME_TYPE = "application/octet-stream"

# Unsupported files are sent as text, truncated to this many bytes.
TEXT_FALLBACK_BYTES = 50_000


def guess_mime_type(path: Path, original_name: str = "") -> str:
    extension = Path(original_name or path.name).suffix.lower().lstrip(".")
    return INLINE_MIME_TYPES.get(extension, FALLBACK_MIME_TYPE)


@dataclass(frozen=True)
class ScoresheetDocument:
    filename: str
    mime_type: str
    data: bytes

    @classmethod
    def from_path(cls, path: Path, original_name: str = "") -> "ScoresheetDocument":
        path = Path(path)
        return cls(
            filename=original_name or path.name,
            mime_type=guess_mime_type(path, original_name),
            data=path.read_bytes(),
        )

    @property
    def is_inline(self) -> bool:
        """True for images and PDFs; everything else goes as text."""
        return self.mime_type != FALLBACK_MIME_TYPE

    def as_text(self) -> str:
        return self.data[:TEXT_FALLBACK_BYTES].decode("utf-8", errors="replace")

    def content_part(self) -> dict[str, Any]:
        if not self.is_inline:
            return {"type": "text", "text": self.as_text()}
        encoded = base64.b64encode(self.data).decode("ascii")
        return {
            "type": "image_url",
            "image_url": {"url": f"data:{self.mime_type};base64,{encoded}"},
        }
