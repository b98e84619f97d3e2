"""Alliance score projection and win probability."""

from typing import Iterable, Mapping, Optional, Sequence

from .config import get_win_probability_fallback
from .constants import (
    AUTO_CLIMB_BONUS,
    AUTO_CLIMB_RATE_THRESHOLD,
    CLIMB_LEVEL_POINTS,
    MAX_AUTO_CLIMBERS,
)
from .logging_config import get_logger
from .models import AllianceProjection, MatchForecast, TeamContribution
from .schemas import Match, TeamAverageStats
from .utils import round_half_up

logger = get_logger(__name__)

StatsLookup = Mapping[int, TeamAverageStats]


def index_stats(records: Iterable[TeamAverageStats]) -> dict[int, TeamAverageStats]:
    """Build a team number -> stats lookup from a competition snapshot."""
    return {record.team_number: record for record in records}


def climb_level_points(avg_climb_level: Optional[float]) -> int:
    """
    Endgame climb bonus for an average climb level.

    Scoring:
        - Level rounds half up (0.5 -> 1, 1.5 -> 2, 2.5 -> 3)
        - Level 1: 15 points
        - Level 2: 20 points
        - Level 3: 30 points
        - Anything else: 0 points
    """
    level = round_half_up(avg_climb_level or 0)
    return CLIMB_LEVEL_POINTS.get(level, 0)


def project_team(
    team_number: int,
    stats: Optional[TeamAverageStats],
    auto_climb_available: bool,
) -> TeamContribution:
    """
    Project a single robot's contribution to its alliance.

    Scoring:
        - Auto: average auto points
        - Auto climb: 10 points if auto_climb_rate > 0.5 and the alliance
          still has an auto-climb slot
        - Teleop: average teleop fuel
        - Endgame: climb bonus for the rounded average climb level

    Args:
        team_number: Team being projected
        stats: The team's averages, or None if the team was never scouted
        auto_climb_available: Whether the alliance can still earn an auto-climb bonus

    Returns:
        TeamContribution with points and breakdown
    """
    result = TeamContribution(team_number=team_number)
    if stats is None:
        return result
    result.found_in_stats = True

    points = 0.0
    breakdown = result.breakdown

    auto_pts = stats.avg_auto or 0
    if auto_pts:
        breakdown['auto'] = auto_pts
    points += auto_pts

    climb_rate = stats.auto_climb_rate or 0
    if auto_climb_available and climb_rate > AUTO_CLIMB_RATE_THRESHOLD:
        breakdown['auto_climb'] = AUTO_CLIMB_BONUS
        points += AUTO_CLIMB_BONUS

    teleop_pts = stats.avg_teleop_fuel or 0
    if teleop_pts:
        breakdown['teleop_fuel'] = teleop_pts
    points += teleop_pts

    endgame_pts = climb_level_points(stats.avg_climb_level)
    if endgame_pts:
        breakdown['endgame_climb'] = endgame_pts
    points += endgame_pts

    result.points = points
    return result


def project_alliance(team_numbers: Sequence[int], stats: StatsLookup) -> AllianceProjection:
    """
    Project an alliance's score from its teams' season averages.

    Teams are processed in roster order. Only the first two teams whose
    auto_climb_rate clears the threshold receive the auto-climb bonus.
    Teams without stats contribute zero.

    Args:
        team_numbers: Alliance roster
        stats: Team number -> TeamAverageStats lookup

    Returns:
        AllianceProjection with total and per-team contributions
    """
    projection = AllianceProjection(teams=tuple(team_numbers))

    for team_number in team_numbers:
        team_stats = stats.get(team_number)
        if team_stats is None:
            logger.debug(f'No stats for team {team_number}, projecting 0')

        contribution = project_team(
            team_number,
            team_stats,
            auto_climb_available=projection.auto_climb_bonuses < MAX_AUTO_CLIMBERS,
        )
        if 'auto_climb' in contribution.breakdown:
            projection.auto_climb_bonuses += 1

        projection.contributions.append(contribution)
        projection.total += contribution.points

    return projection


def predict_alliance_score(team_numbers: Sequence[int], stats: StatsLookup) -> float:
    """Projected total score for an alliance."""
    return project_alliance(team_numbers, stats).total


def estimate_win_probability(red_total: float, blue_total: float) -> int:
    """
    Red alliance's chance of winning, as a whole percentage.

    Computed as red / (red + blue) * 100, rounded half up. When the
    combined projection is not positive there is nothing to compare, and
    the configured fallback (50) is returned instead.
    """
    combined = red_total + blue_total
    if combined <= 0:
        return get_win_probability_fallback()
    return round_half_up(red_total / combined * 100)


def forecast_match(match: Match, stats: StatsLookup) -> MatchForecast:
    """Project both alliances of a match and the red win probability."""
    red = project_alliance(match.red_alliance, stats)
    blue = project_alliance(match.blue_alliance, stats)
    return MatchForecast(
        match_number=match.match_number,
        red=red,
        blue=blue,
        red_win_probability=estimate_win_probability(red.total, blue.total),
    )
