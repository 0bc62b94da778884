"""OpenAI-compatible client for the scoresheet extraction model.

The default endpoint is Gemini's OpenAI-compatible API, so the same SDK
talks to either provider by changing EXTRACTION_BASE_URL and the model.
"""

from __future__ import annotations

import logging
from typing import Any

from openai import APIError, APIStatusError, AsyncOpenAI

from ...config import Settings, get_settings
from .errors import ExtractionConfigurationError, ExtractionServiceError

logger = logging.getLogger(__name__)

# Deterministic decoding: the same sheet should extract the same way twice.
EXTRACTION_TEMPERATURE = 0.0
EXTRACTION_TOP_P = 0.2


class ExtractionClient:
    """Sends one prompt plus one document part, returns the reply text."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        openai_client: AsyncOpenAI | None = None,
    ) -> None:
        self.model = model
        self._client = openai_client or AsyncOpenAI(api_key=api_key, base_url=base_url)

    async def complete(self, prompt: str, document_part: dict[str, Any]) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {
                        "role": "user",
                        "content": [{"type": "text", "text": prompt}, document_part],
                    }
                ],
                temperature=EXTRACTION_TEMPERATURE,
                top_p=EXTRACTION_TOP_P,
            )
        except APIStatusError as e:
            raise ExtractionServiceError(str(e), status_code=e.status_code) from e
        except APIError as e:
            raise ExtractionServiceError(str(e)) from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


def get_extraction_client(settings: Settings | None = None) -> ExtractionClient:
    """Build a client from settings. Raises if no API key is configured."""
    settings = settings or get_settings()
    if not settings.extraction_api_key:
        raise ExtractionConfigurationError(
            "GEMINI_API_KEY (or GOOGLE_API_KEY) not set. "
            "Add it to your .env file and restart the server."
        )
    logger.debug("extraction_client_created", extra={"model": settings.extraction_model})
    return ExtractionClient(
        api_key=settings.extraction_api_key,
        model=settings.extraction_model,
        base_url=settings.extraction_base_url,
    )
