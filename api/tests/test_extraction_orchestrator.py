"""Tests for the extraction orchestrator."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from scoresheet.models import MatchRecord
from scoresheet.services.extraction import (
    ExtractionConfigurationError,
    ExtractionOrchestrator,
    ExtractionServiceError,
    ListResponseSink,
    PromptLibrary,
    RetryPolicy,
)


class _FakeClient:
    """Replays scripted replies; exceptions in the script are raised."""

    model = "fake-model"

    def __init__(self, replies: list[Any]) -> None:
        self._replies = replies
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def complete(self, prompt: str, document_part: dict[str, Any]) -> str:
        self.calls.append((prompt, document_part))
        reply = self._replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply


def _orchestrator(client: _FakeClient, sink: ListResponseSink | None = None) -> ExtractionOrchestrator:
    return ExtractionOrchestrator(
        client_factory=lambda: client,
        prompts=PromptLibrary(),
        retry_policy=RetryPolicy(backoff_seconds=0),
        response_sink=sink,
    )


@pytest.fixture
def image_file(tmp_path: Path) -> Path:
    path = tmp_path / "1700000000000-sheet.png"
    path.write_bytes(b"\x89PNG fake image bytes")
    return path


class TestExtract:
    @pytest.mark.asyncio
    async def test_fenced_reply_is_parsed_and_normalized(self, image_file: Path) -> None:
        reply = '```json\n{"team_a_name": "Lions", "pointsPerColumn": "60", "teamAFoulsPeriod1": -2}\n```'
        client = _FakeClient([reply])
        sink = ListResponseSink()

        result = await _orchestrator(client, sink).extract(image_file, "sheet.png")

        assert result.record.team_a_name == "Lions"
        assert result.record.points_per_column == 60
        assert result.record.team_a_fouls_period1 == 0
        # The sink sees the payload before normalization
        assert sink.payloads == [{"team_a_name": "Lions", "pointsPerColumn": "60", "teamAFoulsPeriod1": -2}]

    @pytest.mark.asyncio
    async def test_image_uses_schema_prompt_and_inline_part(self, image_file: Path) -> None:
        client = _FakeClient(["{}"])
        await _orchestrator(client).extract(image_file, "sheet.png")

        prompt, part = client.calls[0]
        assert "Schema:" in prompt
        assert part["type"] == "image_url"
        assert part["image_url"]["url"].startswith("data:image/png;base64,")

    @pytest.mark.asyncio
    async def test_unknown_type_is_sent_as_text(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("Lions vs Tigers", encoding="utf-8")
        client = _FakeClient(['{"teamAName": "Lions"}'])

        result = await _orchestrator(client).extract(path, "notes.txt")

        prompt, part = client.calls[0]
        assert "exactly these keys" in prompt
        assert part == {"type": "text", "text": "Lions vs Tigers"}
        assert result.record.team_a_name == "Lions"

    @pytest.mark.asyncio
    async def test_text_fallback_is_truncated(self, tmp_path: Path) -> None:
        path = tmp_path / "big.csv"
        path.write_bytes(b"x" * 60_000)
        client = _FakeClient(["{}"])

        await _orchestrator(client).extract(path, "big.csv")

        assert len(client.calls[0][1]["text"]) == 50_000

    @pytest.mark.asyncio
    async def test_unparsable_reply_yields_default_record(
        self, image_file: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        client = _FakeClient(["Sorry, the image is too blurry."])
        sink = ListResponseSink()

        with caplog.at_level(logging.WARNING):
            result = await _orchestrator(client, sink).extract(image_file, "sheet.png")

        assert result.record == MatchRecord()
        assert sink.payloads == [{}]
        assert any(r.getMessage() == "extraction_empty" for r in caplog.records)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "reply",
        [
            '{"finalScoreTeamA": ' + "9" * 5000 + "}",
            "[" * 100_000 + "]" * 100_000,
        ],
    )
    async def test_undecodable_reply_yields_default_record(self, image_file: Path, reply: str) -> None:
        client = _FakeClient([reply])
        sink = ListResponseSink()

        result = await _orchestrator(client, sink).extract(image_file, "sheet.png")

        assert result.record == MatchRecord()
        assert sink.payloads == [{}]
        assert len(client.calls) == 1

    @pytest.mark.asyncio
    async def test_rate_limit_is_retried_once(self, image_file: Path) -> None:
        client = _FakeClient(
            [ExtractionServiceError("429 Too Many Requests", status_code=429), '{"place": "Dome"}']
        )

        result = await _orchestrator(client).extract(image_file, "sheet.png")

        assert len(client.calls) == 2
        assert result.record.place == "Dome"

    @pytest.mark.asyncio
    async def test_second_rate_limit_propagates(self, image_file: Path) -> None:
        error = ExtractionServiceError("quota exceeded", status_code=429)
        client = _FakeClient([error, error])

        with pytest.raises(ExtractionServiceError, match="quota exceeded"):
            await _orchestrator(client).extract(image_file, "sheet.png")
        assert len(client.calls) == 2

    @pytest.mark.asyncio
    async def test_other_failures_propagate_without_retry(self, image_file: Path) -> None:
        client = _FakeClient([ExtractionServiceError("invalid argument", status_code=400), "{}"])

        with pytest.raises(ExtractionServiceError, match="invalid argument"):
            await _orchestrator(client).extract(image_file, "sheet.png")
        assert len(client.calls) == 1

    @pytest.mark.asyncio
    async def test_missing_credentials_fail_before_any_request(self, image_file: Path) -> None:
        def no_client() -> _FakeClient:
            raise ExtractionConfigurationError("GEMINI_API_KEY (or GOOGLE_API_KEY) not set.")

        orchestrator = ExtractionOrchestrator(client_factory=no_client, prompts=PromptLibrary())
        with pytest.raises(ExtractionConfigurationError):
            await orchestrator.extract(image_file, "sheet.png")

    @pytest.mark.asyncio
    async def test_payload_is_returned_raw(self, image_file: Path) -> None:
        payload = {"teamAName": "teamAName", "extra": [1, 2]}
        client = _FakeClient([json.dumps(payload)])

        result = await _orchestrator(client).extract(image_file, "sheet.png")

        assert result.payload == payload
        assert result.record.team_a_name == ""
