"""Record normalizer: any JSON value in, a complete MatchRecord out.

Used for both extraction-service output and client edits. The result is
always built from the global defaults plus whatever the input supplies.
"""

from __future__ import annotations

import logging
from typing import Any

from ...models import COUNTER_KEYS, TEXT_KEYS, MatchRecord
from .coercers import coerce_count, coerce_label, coerce_points_per_column, coerce_text
from .composites import (
    normalize_period_scores,
    normalize_roster,
    normalize_score_events,
    normalize_scoring_overrides,
)

logger = logging.getLogger(__name__)

# Accepted spellings per scalar field, tried in order. Only the first alias
# carrying a value is read.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "teamAName": ("teamAName", "team_a_name", "teamA", "team_a"),
    "teamBName": ("teamBName", "team_b_name", "teamB", "team_b"),
    "competitionName": ("competitionName", "competition_name", "competition"),
    "date": ("date",),
    "time": ("time",),
    "place": ("place", "venue", "location"),
    "referee1": ("referee1", "referee_1", "refereeOne"),
    "referee2": ("referee2", "referee_2", "refereeTwo"),
    "teamATimeoutsFirstHalf": ("teamATimeoutsFirstHalf", "team_a_timeouts_first_half"),
    "teamATimeoutsSecondHalf": ("teamATimeoutsSecondHalf", "team_a_timeouts_second_half"),
    "teamATimeoutsExtraPeriods": ("teamATimeoutsExtraPeriods", "team_a_timeouts_extra_periods"),
    "teamAFoulsPeriod1": ("teamAFoulsPeriod1", "team_a_fouls_period_1"),
    "teamAFoulsPeriod2": ("teamAFoulsPeriod2", "team_a_fouls_period_2"),
    "teamAFoulsPeriod3": ("teamAFoulsPeriod3", "team_a_fouls_period_3"),
    "teamAFoulsPeriod4": ("teamAFoulsPeriod4", "team_a_fouls_period_4"),
    "teamBTimeoutsFirstHalf": ("teamBTimeoutsFirstHalf", "team_b_timeouts_first_half"),
    "teamBTimeoutsSecondHalf": ("teamBTimeoutsSecondHalf", "team_b_timeouts_second_half"),
    "teamBTimeoutsExtraPeriods": ("teamBTimeoutsExtraPeriods", "team_b_timeouts_extra_periods"),
    "teamBFoulsPeriod1": ("teamBFoulsPeriod1", "team_b_fouls_period_1"),
    "teamBFoulsPeriod2": ("teamBFoulsPeriod2", "team_b_fouls_period_2"),
    "teamBFoulsPeriod3": ("teamBFoulsPeriod3", "team_b_fouls_period_3"),
    "teamBFoulsPeriod4": ("teamBFoulsPeriod4", "team_b_fouls_period_4"),
}

_COUNTER_SET = frozenset(COUNTER_KEYS)


def _has_value(value: Any) -> bool:
    return value is not None and value != ""


def _pick(raw: dict[str, Any], camel: str, snake: str) -> Any:
    """Value under ``camel`` if it has one, else under ``snake``."""
    value = raw.get(camel)
    return value if _has_value(value) else raw.get(snake)


def _resolve_scalars(raw: dict[str, Any]) -> dict[str, Any]:
    resolved: dict[str, Any] = {}
    for field in (*TEXT_KEYS, *COUNTER_KEYS):
        for alias in FIELD_ALIASES.get(field, (field,)):
            value = raw.get(alias)
            if not _has_value(value):
                continue
            if field in _COUNTER_SET:
                resolved[field] = coerce_count(value)
            else:
                label = coerce_label(field, value)
                if label is not None:
                    resolved[field] = label
                else:
                    logger.debug("field_echo_dropped", extra={"field": field, "alias": alias})
            break
    return resolved


def _resolve_winning_team(raw: dict[str, Any]) -> str:
    for key in ("r3WinningTeamName", "r3_winning_team_name"):
        text = coerce_text(raw.get(key))
        if text:
            return text
    return ""


def normalize_record(raw: Any) -> MatchRecord:
    """Coerce ``raw`` into a fully defaulted MatchRecord. Never raises."""
    if not isinstance(raw, dict):
        raw = {}

    values = _resolve_scalars(raw)
    values.update(
        teamAPlayers=normalize_roster(_pick(raw, "teamAPlayers", "team_a_players")),
        teamBPlayers=normalize_roster(_pick(raw, "teamBPlayers", "team_b_players")),
        runningScoreEvents=normalize_score_events(
            _pick(raw, "runningScoreEvents", "running_score_events")
        ),
        periodScoresTeamA=normalize_period_scores(
            _pick(raw, "periodScoresTeamA", "period_scores_team_a")
        ),
        periodScoresTeamB=normalize_period_scores(
            _pick(raw, "periodScoresTeamB", "period_scores_team_b")
        ),
        finalScoreTeamA=coerce_count(_pick(raw, "finalScoreTeamA", "final_score_team_a")),
        finalScoreTeamB=coerce_count(_pick(raw, "finalScoreTeamB", "final_score_team_b")),
        pointsPerColumn=coerce_points_per_column(
            _pick(raw, "pointsPerColumn", "points_per_column")
        ),
        r2PeriodScoresTeamA=normalize_period_scores(
            _pick(raw, "r2PeriodScoresTeamA", "r2_period_scores_team_a")
        ),
        r2PeriodScoresTeamB=normalize_period_scores(
            _pick(raw, "r2PeriodScoresTeamB", "r2_period_scores_team_b")
        ),
        r3FinalScoreTeamA=coerce_count(_pick(raw, "r3FinalScoreTeamA", "r3_final_score_team_a")),
        r3FinalScoreTeamB=coerce_count(_pick(raw, "r3FinalScoreTeamB", "r3_final_score_team_b")),
        r3WinningTeamName=_resolve_winning_team(raw),
        playerScoringOverrides=normalize_scoring_overrides(
            _pick(raw, "playerScoringOverrides", "player_scoring_overrides")
        ),
    )
    return MatchRecord.model_validate(values)


def is_blank_record(record: MatchRecord) -> bool:
    """True when nothing in ``record`` differs from the defaults."""
    return record == MatchRecord()
