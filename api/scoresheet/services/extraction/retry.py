"""Retry policy for rate-limited extraction calls."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tenacity import AsyncRetrying, RetryCallState, retry_if_exception, stop_after_attempt, wait_fixed

from .errors import ExtractionServiceError

logger = logging.getLogger(__name__)

_RATE_LIMIT_MARKERS = ("429", "Too Many Requests", "quota")


def is_rate_limited(exc: BaseException) -> bool:
    """True for HTTP 429 responses and quota-exhausted messages."""
    if isinstance(exc, ExtractionServiceError) and exc.status_code == 429:
        return True
    message = str(exc)
    return any(marker in message for marker in _RATE_LIMIT_MARKERS)


def _log_retry(state: RetryCallState) -> None:
    exc = state.outcome.exception() if state.outcome else None
    logger.warning(
        "extraction_rate_limited_retrying",
        extra={
            "attempt": state.attempt_number,
            "sleep_seconds": state.next_action.sleep if state.next_action else None,
            "error": str(exc),
        },
    )


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed-delay retry of rate-limited calls.

    ``max_attempts`` counts the first call, so the default of 2 means one
    retry after ``backoff_seconds``.
    """

    max_attempts: int = 2
    backoff_seconds: float = 42.0

    def retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.backoff_seconds),
            retry=retry_if_exception(is_rate_limited),
            before_sleep=_log_retry,
            reraise=True,
        )
