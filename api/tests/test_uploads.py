"""Tests for uploaded file storage."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from scoresheet.services.uploads import UploadTooLargeError, sanitize_filename, store_upload


class TestSanitizeFilename:
    def test_unsafe_characters_are_replaced(self) -> None:
        assert sanitize_filename("my sheet (1).pdf") == "my_sheet__1_.pdf"

    def test_missing_name(self) -> None:
        assert sanitize_filename(None) == "scoresheet"
        assert sanitize_filename("") == "scoresheet"


class TestStoreUpload:
    def test_stores_with_timestamp_prefix(self, tmp_path: Path) -> None:
        stored = store_upload(io.BytesIO(b"pdf bytes"), "game 1.pdf", tmp_path / "uploads", max_bytes=100)

        prefix, _, name = stored.stored_name.partition("-")
        assert prefix.isdigit()
        assert name == "game_1.pdf"
        assert stored.original_name == "game 1.pdf"
        assert stored.path.read_bytes() == b"pdf bytes"

    def test_too_large_is_removed(self, tmp_path: Path) -> None:
        upload_dir = tmp_path / "uploads"
        with pytest.raises(UploadTooLargeError):
            store_upload(io.BytesIO(b"x" * 11), "big.png", upload_dir, max_bytes=10)
        assert list(upload_dir.iterdir()) == []
