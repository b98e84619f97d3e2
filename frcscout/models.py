"""Data models for projection and accuracy results."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass
class TeamContribution:
    """Container for one robot's share of an alliance projection."""
    team_number: int
    points: float = 0.0
    breakdown: Dict[str, float] = field(default_factory=dict)
    found_in_stats: bool = False  # Unscouted teams contribute nothing


@dataclass
class AllianceProjection:
    """Projected score for an alliance, with per-team breakdown."""
    teams: Tuple[int, ...]
    total: float = 0.0
    contributions: List[TeamContribution] = field(default_factory=list)
    auto_climb_bonuses: int = 0


@dataclass
class MatchForecast:
    """Pre-match projection for both alliances."""
    match_number: int
    red: AllianceProjection
    blue: AllianceProjection
    red_win_probability: int


@dataclass
class MatchEvaluation:
    """Retrospective grade of a completed match."""
    match_number: int
    red_projected: float
    blue_projected: float
    red_score: float
    blue_score: float
    predicted_winner: str  # 'red', 'blue' or 'tie'
    actual_winner: str
    correct: bool
    variance_abs: float

    @property
    def projected_total(self) -> float:
        return self.red_projected + self.blue_projected

    @property
    def actual_total(self) -> float:
        return self.red_score + self.blue_score

    def within_tolerance(self, tolerance: float) -> bool:
        """Whether the total-points miss is under the given tolerance."""
        return self.variance_abs < tolerance


@dataclass
class AccuracySummary:
    """Aggregate accuracy over a set of graded matches."""
    evaluated: int = 0
    correct: int = 0
    hit_rate: Optional[float] = None  # None until at least one match is graded
    mean_variance: Optional[float] = None
    within_tolerance: int = 0
