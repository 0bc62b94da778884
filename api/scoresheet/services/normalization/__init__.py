"""Normalization of loosely shaped scoresheet JSON into a MatchRecord.

Every function here is total and side-effect free. Malformed input is
coerced or dropped at the smallest granularity (one field, one array
element, one override entry) and never raises.

Usage:
    from scoresheet.services.normalization import normalize_record

    record = normalize_record(json.loads(model_output))
"""

from .coercers import (
    coerce_count,
    coerce_label,
    coerce_points_per_column,
    coerce_team_letter,
    parse_leading_int,
    to_text,
)
from .composites import (
    normalize_cumulative_array,
    normalize_period_scores,
    normalize_player,
    normalize_roster,
    normalize_score_event,
    normalize_score_events,
    normalize_scoring_overrides,
)
from .echo import is_key_echo, snake_case
from .record import FIELD_ALIASES, is_blank_record, normalize_record

__all__ = [
    "FIELD_ALIASES",
    "coerce_count",
    "coerce_label",
    "coerce_points_per_column",
    "coerce_team_letter",
    "is_blank_record",
    "is_key_echo",
    "normalize_cumulative_array",
    "normalize_period_scores",
    "normalize_player",
    "normalize_record",
    "normalize_roster",
    "normalize_score_event",
    "normalize_score_events",
    "normalize_scoring_overrides",
    "parse_leading_int",
    "snake_case",
    "to_text",
]
