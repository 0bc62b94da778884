"""Normalizers for the structured parts of a match record.

Rosters, the running score, period scores and per-player overrides all
arrive as loosely shaped JSON. Bad elements are defaulted or dropped one
at a time; a malformed element never discards its siblings.
"""

from __future__ import annotations

from typing import Any

from ...models import (
    MAX_PLAYERS_PER_TEAM,
    MAX_RUNNING_SCORE_POINT,
    PERIODS_PER_GAME,
    PLAYER_KEYS,
    SCORE_EVENT_TYPES,
    TEAM_LETTERS,
    PeriodPoints,
    PlayerRow,
    PlayerScoringOverrides,
    ScoreEvent,
)
from .coercers import coerce_count, coerce_team_letter, coerce_text, parse_leading_int

MAX_CUMULATIVE_LENGTH = 120


# =============================================================================
# ROSTER
# =============================================================================


def normalize_player(raw: Any) -> PlayerRow:
    """Copy the known, non-blank cells of a roster line. Unknown keys are ignored."""
    if not isinstance(raw, dict):
        return PlayerRow()
    cells: dict[str, str] = {}
    for key in PLAYER_KEYS:
        text = coerce_text(raw.get(key))
        if text:
            cells[key] = text
    return PlayerRow.model_validate(cells)


def normalize_roster(raw: Any) -> list[PlayerRow]:
    if not isinstance(raw, list):
        return []
    return [normalize_player(row) for row in raw[:MAX_PLAYERS_PER_TEAM]]


# =============================================================================
# RUNNING SCORE
# =============================================================================


def normalize_score_event(raw: Any) -> ScoreEvent | None:
    """Validate one scoring play; None means the event is dropped."""
    if not isinstance(raw, dict):
        return None

    point = parse_leading_int(raw.get("point"))
    if point is None or not 1 <= point <= MAX_RUNNING_SCORE_POINT:
        return None

    team = coerce_team_letter(raw.get("team"))
    if team is None:
        return None

    event_type = coerce_text(raw.get("type"))
    if event_type not in SCORE_EVENT_TYPES:
        return None

    return ScoreEvent(point=point, team=team, type=event_type, jersey=coerce_text(raw.get("jersey")))


def normalize_score_events(raw: Any) -> list[ScoreEvent]:
    """Drop invalid plays, keep the first play per (point, team), sort by point."""
    if not isinstance(raw, list):
        return []

    events: list[ScoreEvent] = []
    seen: set[tuple[int, str]] = set()
    for item in raw:
        event = normalize_score_event(item)
        if event is None or event.key in seen:
            continue
        seen.add(event.key)
        events.append(event)

    # sorted() is stable, so A and B plays on the same total keep input order
    return sorted(events, key=lambda e: e.point)


# =============================================================================
# NUMERIC SEQUENCES
# =============================================================================


def normalize_period_scores(raw: Any) -> list[int]:
    """Exactly one non-negative score per period; missing periods are 0."""
    if not isinstance(raw, list):
        return [0] * PERIODS_PER_GAME
    return [
        coerce_count(raw[index]) if index < len(raw) else 0
        for index in range(PERIODS_PER_GAME)
    ]


def normalize_cumulative_array(raw: Any, max_length: int = MAX_CUMULATIVE_LENGTH) -> list[int]:
    if not isinstance(raw, list):
        return []
    return [coerce_count(value) for value in raw[:max_length]]


# =============================================================================
# PLAYER SCORING OVERRIDES
# =============================================================================


def _normalize_team_overrides(raw: Any) -> dict[str, PeriodPoints]:
    if not isinstance(raw, dict):
        return {}
    overrides: dict[str, PeriodPoints] = {}
    for jersey, points in raw.items():
        key = coerce_text(jersey)
        # A malformed entry removes the override instead of zeroing it
        if not key or not isinstance(points, dict):
            continue
        overrides[key] = PeriodPoints(
            p1=coerce_count(points.get("p1")),
            p2=coerce_count(points.get("p2")),
            p3=coerce_count(points.get("p3")),
        )
    return overrides


def normalize_scoring_overrides(raw: Any) -> PlayerScoringOverrides:
    if not isinstance(raw, dict):
        return PlayerScoringOverrides()
    team_a, team_b = (_normalize_team_overrides(raw.get(letter)) for letter in TEAM_LETTERS)
    return PlayerScoringOverrides(team_a=team_a, team_b=team_b)
