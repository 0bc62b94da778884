"""Tests for raw extraction response sinks."""

from __future__ import annotations

import json
from pathlib import Path

from scoresheet.services.extraction import JsonFileResponseSink, ListResponseSink


def test_list_sink_collects_payloads() -> None:
    sink = ListResponseSink()
    sink.record({"teamAName": "Lions"})
    sink.record({})
    assert sink.payloads == [{"teamAName": "Lions"}, {}]


def test_json_file_sink_overwrites(tmp_path: Path) -> None:
    path = tmp_path / "gemini-response.json"
    sink = JsonFileResponseSink(path)
    sink.record({"place": "Dome"})
    sink.record({"place": "Arena"})
    assert json.loads(path.read_text(encoding="utf-8")) == {"place": "Arena"}


def test_json_file_sink_failure_is_not_raised(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")
    sink = JsonFileResponseSink(blocker / "response.json")
    sink.record({"place": "Dome"})
    assert not (blocker / "response.json").exists()
