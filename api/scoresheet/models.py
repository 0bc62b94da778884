"""Pydantic models for the canonical match record.

Field aliases are the camelCase names the client and the extraction
service speak. Python code uses the snake_case attribute names.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

MAX_PLAYERS_PER_TEAM = 12
MAX_RUNNING_SCORE_POINT = 120
PERIODS_PER_GAME = 4
DEFAULT_POINTS_PER_COLUMN = 40
WIDE_POINTS_PER_COLUMN = 60

TEAM_LETTERS = ("A", "B")
SCORE_EVENT_TYPES = frozenset({"1", "2", "3"})

# Player row keys in roster column order.
PLAYER_KEYS: tuple[str, ...] = (
    "bipinNo",
    "playerInQuarter1",
    "playerInQuarter2",
    "playerInQuarter3",
    "playerInQuarter4",
    "playerName",
    "kitNo",
    "foul1",
    "foul2",
    "foul3",
    "foul4",
    "foul5",
)

TEXT_KEYS: tuple[str, ...] = (
    "teamAName",
    "teamBName",
    "competitionName",
    "date",
    "time",
    "place",
    "referee1",
    "referee2",
)

COUNTER_KEYS: tuple[str, ...] = (
    "teamATimeoutsFirstHalf",
    "teamATimeoutsSecondHalf",
    "teamATimeoutsExtraPeriods",
    "teamAFoulsPeriod1",
    "teamAFoulsPeriod2",
    "teamAFoulsPeriod3",
    "teamAFoulsPeriod4",
    "teamBTimeoutsFirstHalf",
    "teamBTimeoutsSecondHalf",
    "teamBTimeoutsExtraPeriods",
    "teamBFoulsPeriod1",
    "teamBFoulsPeriod2",
    "teamBFoulsPeriod3",
    "teamBFoulsPeriod4",
)


def _zero_periods() -> list[int]:
    return [0] * PERIODS_PER_GAME


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PlayerRow(_WireModel):
    """One roster line of the scoresheet. Every cell is free text."""

    bipin_no: str = Field("", alias="bipinNo")
    player_in_quarter1: str = Field("", alias="playerInQuarter1")
    player_in_quarter2: str = Field("", alias="playerInQuarter2")
    player_in_quarter3: str = Field("", alias="playerInQuarter3")
    player_in_quarter4: str = Field("", alias="playerInQuarter4")
    player_name: str = Field("", alias="playerName")
    kit_no: str = Field("", alias="kitNo")
    foul1: str = Field("", alias="foul1")
    foul2: str = Field("", alias="foul2")
    foul3: str = Field("", alias="foul3")
    foul4: str = Field("", alias="foul4")
    foul5: str = Field("", alias="foul5")


class ScoreEvent(_WireModel):
    """A scoring play keyed by the cumulative total it reached."""

    point: int = Field(..., ge=1, le=MAX_RUNNING_SCORE_POINT)
    team: str
    type: str  # "1" free throw, "2" field goal, "3" three pointer
    jersey: str = ""

    @property
    def key(self) -> tuple[int, str]:
        return (self.point, self.team)


class PeriodPoints(_WireModel):
    p1: int = Field(0, ge=0)
    p2: int = Field(0, ge=0)
    p3: int = Field(0, ge=0)


class PlayerScoringOverrides(_WireModel):
    """Per-team mapping of jersey number to manually entered points."""

    team_a: dict[str, PeriodPoints] = Field(default_factory=dict, alias="A")
    team_b: dict[str, PeriodPoints] = Field(default_factory=dict, alias="B")


class MatchRecord(_WireModel):
    """The canonical, fully defaulted scoresheet record."""

    team_a_name: str = Field("", alias="teamAName")
    team_b_name: str = Field("", alias="teamBName")
    competition_name: str = Field("", alias="competitionName")
    date: str = Field("", alias="date")
    time: str = Field("", alias="time")
    place: str = Field("", alias="place")
    referee1: str = Field("", alias="referee1")
    referee2: str = Field("", alias="referee2")

    team_a_timeouts_first_half: int = Field(0, ge=0, alias="teamATimeoutsFirstHalf")
    team_a_timeouts_second_half: int = Field(0, ge=0, alias="teamATimeoutsSecondHalf")
    team_a_timeouts_extra_periods: int = Field(0, ge=0, alias="teamATimeoutsExtraPeriods")
    team_a_fouls_period1: int = Field(0, ge=0, alias="teamAFoulsPeriod1")
    team_a_fouls_period2: int = Field(0, ge=0, alias="teamAFoulsPeriod2")
    team_a_fouls_period3: int = Field(0, ge=0, alias="teamAFoulsPeriod3")
    team_a_fouls_period4: int = Field(0, ge=0, alias="teamAFoulsPeriod4")
    team_b_timeouts_first_half: int = Field(0, ge=0, alias="teamBTimeoutsFirstHalf")
    team_b_timeouts_second_half: int = Field(0, ge=0, alias="teamBTimeoutsSecondHalf")
    team_b_timeouts_extra_periods: int = Field(0, ge=0, alias="teamBTimeoutsExtraPeriods")
    team_b_fouls_period1: int = Field(0, ge=0, alias="teamBFoulsPeriod1")
    team_b_fouls_period2: int = Field(0, ge=0, alias="teamBFoulsPeriod2")
    team_b_fouls_period3: int = Field(0, ge=0, alias="teamBFoulsPeriod3")
    team_b_fouls_period4: int = Field(0, ge=0, alias="teamBFoulsPeriod4")

    team_a_players: list[PlayerRow] = Field(
        default_factory=list, max_length=MAX_PLAYERS_PER_TEAM, alias="teamAPlayers"
    )
    team_b_players: list[PlayerRow] = Field(
        default_factory=list, max_length=MAX_PLAYERS_PER_TEAM, alias="teamBPlayers"
    )
    running_score_events: list[ScoreEvent] = Field(
        default_factory=list, alias="runningScoreEvents"
    )

    period_scores_team_a: list[int] = Field(
        default_factory=_zero_periods, min_length=4, max_length=4, alias="periodScoresTeamA"
    )
    period_scores_team_b: list[int] = Field(
        default_factory=_zero_periods, min_length=4, max_length=4, alias="periodScoresTeamB"
    )
    final_score_team_a: int = Field(0, ge=0, alias="finalScoreTeamA")
    final_score_team_b: int = Field(0, ge=0, alias="finalScoreTeamB")
    points_per_column: int = Field(DEFAULT_POINTS_PER_COLUMN, alias="pointsPerColumn")

    r2_period_scores_team_a: list[int] = Field(
        default_factory=_zero_periods, min_length=4, max_length=4, alias="r2PeriodScoresTeamA"
    )
    r2_period_scores_team_b: list[int] = Field(
        default_factory=_zero_periods, min_length=4, max_length=4, alias="r2PeriodScoresTeamB"
    )
    r3_final_score_team_a: int = Field(0, ge=0, alias="r3FinalScoreTeamA")
    r3_final_score_team_b: int = Field(0, ge=0, alias="r3FinalScoreTeamB")
    r3_winning_team_name: str = Field("", alias="r3WinningTeamName")

    player_scoring_overrides: PlayerScoringOverrides = Field(
        default_factory=PlayerScoringOverrides, alias="playerScoringOverrides"
    )

    def to_wire(self) -> dict:
        """Serialize with camelCase keys, as stored and served."""
        return self.model_dump(by_alias=True)


# Every camelCase key of a MatchRecord, in declaration order.
RECORD_KEYS: tuple[str, ...] = tuple(
    field.alias or name for name, field in MatchRecord.model_fields.items()
)
