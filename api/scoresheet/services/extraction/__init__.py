"""Scoresheet extraction through an external vision model.

Usage:
    orchestrator = ExtractionOrchestrator(
        client_factory=get_extraction_client,
        prompts=PromptLibrary(settings.extraction_prompt_file, settings.schema_file),
        retry_policy=RetryPolicy(backoff_seconds=settings.rate_limit_cooldown_seconds),
        response_sink=JsonFileResponseSink(settings.extraction_response_file),
    )
    result = await orchestrator.extract(path, "sheet.pdf")
"""

from .client import ExtractionClient, get_extraction_client
from .documents import ScoresheetDocument, guess_mime_type
from .errors import ExtractionConfigurationError, ExtractionError, ExtractionServiceError
from .orchestrator import ExtractionOrchestrator, ExtractionResult
from .parsing import parse_json_response, strip_code_fence
from .prompts import PromptLibrary
from .retry import RetryPolicy, is_rate_limited
from .sinks import JsonFileResponseSink, ListResponseSink, NullResponseSink, ResponseSink

__all__ = [
    "ExtractionClient",
    "ExtractionConfigurationError",
    "ExtractionError",
    "ExtractionOrchestrator",
    "ExtractionResult",
    "ExtractionServiceError",
    "JsonFileResponseSink",
    "ListResponseSink",
    "NullResponseSink",
    "PromptLibrary",
    "ResponseSink",
    "RetryPolicy",
    "ScoresheetDocument",
    "get_extraction_client",
    "guess_mime_type",
    "is_rate_limited",
    "parse_json_response",
    "strip_code_fence",
]
