"""Service providers injected into the match-data routes.

Tests swap these through ``app.dependency_overrides``.
"""

from __future__ import annotations

from pathlib import Path

from scoresheet.config import settings
from scoresheet.services.extraction import (
    ExtractionOrchestrator,
    JsonFileResponseSink,
    PromptLibrary,
    RetryPolicy,
    get_extraction_client,
)
from scoresheet.services.record_store import JsonFileRecordStore, RecordStore


def get_record_store() -> RecordStore:
    return JsonFileRecordStore(settings.records_dir)


def get_current_match_id() -> str:
    return settings.current_match_id


def get_upload_dir() -> Path:
    return settings.upload_dir


def get_orchestrator() -> ExtractionOrchestrator:
    return ExtractionOrchestrator(
        client_factory=get_extraction_client,
        prompts=PromptLibrary(settings.extraction_prompt_file, settings.schema_file),
        retry_policy=RetryPolicy(backoff_seconds=settings.rate_limit_cooldown_seconds),
        response_sink=JsonFileResponseSink(settings.extraction_response_file),
    )
