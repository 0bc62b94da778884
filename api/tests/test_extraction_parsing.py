"""Tests for recovering JSON objects from model replies."""

from __future__ import annotations

from scoresheet.services.extraction import parse_json_response, strip_code_fence


class TestStripCodeFence:
    def test_json_fence(self) -> None:
        assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self) -> None:
        assert strip_code_fence('```\n{"a": 1}```') == '{"a": 1}'

    def test_no_fence(self) -> None:
        assert strip_code_fence('  {"a": 1}  ') == '{"a": 1}'


class TestParseJsonResponse:
    def test_plain_object(self) -> None:
        assert parse_json_response('{"teamAName": "Lions"}') == {"teamAName": "Lions"}

    def test_object_inside_prose(self) -> None:
        text = 'Here is the data: {"teamAName": "Lions", "nested": {"x": 1}} Hope this helps.'
        assert parse_json_response(text) == {"teamAName": "Lions", "nested": {"x": 1}}

    def test_unrecoverable_text(self) -> None:
        assert parse_json_response("I could not read the sheet.") == {}

    def test_broken_braces(self) -> None:
        assert parse_json_response("{not json}") == {}

    def test_empty(self) -> None:
        assert parse_json_response("") == {}
        assert parse_json_response(None) == {}

    def test_non_object_json(self) -> None:
        assert parse_json_response("[1, 2, 3]") == {}

    def test_integer_literal_past_int_limit(self) -> None:
        assert parse_json_response('{"finalScoreTeamA": ' + "9" * 5000 + "}") == {}

    def test_oversized_literal_inside_prose(self) -> None:
        text = 'Result: {"finalScoreTeamA": ' + "9" * 5000 + "} done"
        assert parse_json_response(text) == {}

    def test_nesting_too_deep(self) -> None:
        assert parse_json_response("[" * 100_000 + "]" * 100_000) == {}
        assert parse_json_response('{"a": ' * 100_000 + "1" + "}" * 100_000) == {}
