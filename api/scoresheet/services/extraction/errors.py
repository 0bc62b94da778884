"""Exceptions raised by the extraction pipeline."""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for failures that leave the stored record untouched."""
    pass


class ExtractionConfigurationError(ExtractionError):
    """Raised when no extraction API key is configured."""
    pass


class ExtractionServiceError(ExtractionError):
    """Raised when the extraction service rejects or fails a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
