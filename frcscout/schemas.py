"""Pydantic schemas for scouting records and configuration."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import ALLIANCE_SIZE, MAX_CLIMB_LEVEL, RANKABLE_METRICS


class TeamAverageStats(BaseModel):
    """Season averages for one team at one competition."""

    team_number: int = Field(..., gt=0)
    avg_auto: float | None = None
    avg_teleop_fuel: float | None = None
    avg_teleop: float | None = None
    avg_defense: float | None = None
    avg_speed: float | None = None
    avg_shooting_speed: float | None = None
    avg_climb_level: float | None = Field(None, ge=0, le=MAX_CLIMB_LEVEL)
    auto_climb_rate: float | None = Field(None, ge=0, le=1)
    avg_score: float | None = None
    avg_hopper: float | None = None
    avg_climb: float | None = None
    total_matches: int | None = Field(None, ge=0)
    event_key: str | None = None
    competition_id: str | None = None

    @field_validator('competition_id', mode='before')
    @classmethod
    def coerce_competition_id(cls, v):
        """Datastore ids arrive as integers; keys are compared as strings."""
        if v is None:
            return v
        return str(v)

    def metric(self, name: str) -> float:
        """Return an average by field name, treating a missing value as 0."""
        value = getattr(self, name)
        return value or 0

    model_config = ConfigDict(extra='ignore', frozen=True)


class Match(BaseModel):
    """A scheduled qualification match."""

    id: int | str | None = None
    match_number: int = Field(..., gt=0)
    red_alliance: list[int]
    blue_alliance: list[int]
    red_score: int | None = None
    blue_score: int | None = None
    scouting_report_count: int = Field(default=0, ge=0)

    @field_validator('red_alliance', 'blue_alliance')
    @classmethod
    def validate_alliance(cls, v):
        """Ensure an alliance is exactly three distinct teams."""
        if len(v) != ALLIANCE_SIZE:
            raise ValueError(f'Alliance must have {ALLIANCE_SIZE} teams, got {len(v)}')
        if len(set(v)) != len(v):
            raise ValueError(f'Alliance has duplicate teams: {v}')
        for team in v:
            if team <= 0:
                raise ValueError(f'Invalid team number: {team}')
        return v

    @model_validator(mode='after')
    def validate_no_shared_teams(self):
        """Ensure no team is on both alliances."""
        shared = set(self.red_alliance) & set(self.blue_alliance)
        if shared:
            raise ValueError(f'Teams on both alliances: {sorted(shared)}')
        return self

    @property
    def is_played(self) -> bool:
        """A score of 0 is a real result; only a missing score means unplayed."""
        return self.red_score is not None and self.blue_score is not None

    model_config = ConfigDict(extra='ignore', frozen=True)


class PoolThresholds(BaseModel):
    """Minimum averages a team needs to stay in the draft pool."""

    min_score: float = 0.0
    min_defense: float = 0.0
    min_hopper: float = 0.0
    min_climb: float = 0.0

    model_config = ConfigDict(extra='forbid', frozen=True)


class ScoutingConfig(BaseModel):
    """Analysis settings."""

    feed_limit: int = Field(..., ge=1, le=100)
    variance_tolerance: float = Field(..., ge=0)
    default_sort_metric: str = 'avg_score'
    default_thresholds: PoolThresholds = Field(default_factory=PoolThresholds)
    win_probability_fallback: int = Field(..., ge=0, le=100)

    @field_validator('default_sort_metric')
    @classmethod
    def validate_sort_metric(cls, v):
        """Ensure the default ranking metric is a known average."""
        if v not in RANKABLE_METRICS:
            raise ValueError(f'Invalid sort metric: {v}')
        return v

    model_config = ConfigDict(extra='forbid')
