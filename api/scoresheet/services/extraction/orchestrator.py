"""Extraction orchestrator: uploaded file in, normalized MatchRecord out.

One request per attempt. The reply is unwrapped from code fences, parsed
leniently, written to the response sink as-is, then normalized. Only
rate-limit failures are retried (see ``RetryPolicy``); every other failure
propagates so the caller can report it while keeping the upload.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from ...models import MatchRecord
from ..normalization import is_blank_record, normalize_record
from .client import ExtractionClient
from .documents import ScoresheetDocument
from .parsing import parse_json_response, strip_code_fence
from .prompts import PromptLibrary
from .retry import RetryPolicy
from .sinks import NullResponseSink, ResponseSink

logger = logging.getLogger(__name__)

_RAW_PREVIEW_CHARS = 500


@dataclass
class ExtractionResult:
    record: MatchRecord
    payload: dict[str, Any] = field(default_factory=dict)
    raw_text: str = ""


class ExtractionOrchestrator:
    def __init__(
        self,
        client_factory: Callable[[], ExtractionClient],
        prompts: PromptLibrary,
        retry_policy: RetryPolicy | None = None,
        response_sink: ResponseSink | None = None,
    ) -> None:
        self._client_factory = client_factory
        self.prompts = prompts
        self.retry_policy = retry_policy or RetryPolicy()
        self.response_sink = response_sink or NullResponseSink()

    async def extract(self, path: Path, original_name: str = "") -> ExtractionResult:
        """Run extraction for one uploaded file.

        Raises:
            ExtractionConfigurationError: no API key, raised before any request
            ExtractionServiceError: the service failed (after the rate-limit retry)
        """
        client = self._client_factory()
        document = ScoresheetDocument.from_path(path, original_name)
        logger.info(
            "extraction_starting",
            extra={
                "document": document.filename,
                "mime_type": document.mime_type,
                "size_bytes": len(document.data),
                "model": client.model,
            },
        )

        async for attempt in self.retry_policy.retrying():
            with attempt:
                result = await self._attempt(client, document)

        logger.info(
            "extraction_completed",
            extra={
                "document": document.filename,
                "attempts": attempt.retry_state.attempt_number,
                "score_events": len(result.record.running_score_events),
            },
        )
        return result

    async def _attempt(self, client: ExtractionClient, document: ScoresheetDocument) -> ExtractionResult:
        prompt = self.prompts.document_prompt() if document.is_inline else self.prompts.text_prompt()
        reply = await client.complete(prompt, document.content_part())

        raw_text = strip_code_fence(reply)
        payload = parse_json_response(raw_text)
        self.response_sink.record(payload)

        record = normalize_record(payload)
        if is_blank_record(record) and raw_text:
            logger.warning(
                "extraction_empty",
                extra={"document": document.filename, "raw": raw_text[:_RAW_PREVIEW_CHARS]},
            )
        return ExtractionResult(record=record, payload=payload, raw_text=raw_text)
