"""Fail-fast environment validation for the scoresheet API."""

from __future__ import annotations

import os
from functools import lru_cache

ALLOWED_ENVIRONMENTS = {"development", "staging", "production"}
API_KEY_VARIABLES = ("GEMINI_API_KEY", "GOOGLE_API_KEY")


def _validate_environment_value(environment: str) -> None:
    if environment not in ALLOWED_ENVIRONMENTS:
        allowed = ", ".join(sorted(ALLOWED_ENVIRONMENTS))
        raise RuntimeError(f"ENVIRONMENT must be one of: {allowed}.")


def _has_extraction_key() -> bool:
    return any((os.getenv(name) or "").strip() for name in API_KEY_VARIABLES)


@lru_cache(maxsize=1)
def validate_env() -> None:
    """Validate environment variables before the API starts.

    Outside production a missing extraction key is allowed; uploads then
    fail individually with a configuration error.
    """
    environment = (os.getenv("ENVIRONMENT") or "development").strip()
    _validate_environment_value(environment)

    if environment == "production" and not _has_extraction_key():
        raise RuntimeError("GEMINI_API_KEY (or GOOGLE_API_KEY) is required in production.")
