"""Team detail radar chart values."""

from .constants import MAX_CLIMB_LEVEL, RADAR_RATING_SCALE
from .schemas import TeamAverageStats


def _percent(value: float, scale: float) -> float:
    return min(max(value / scale * 100, 0.0), 100.0)


def radar_values(stats: TeamAverageStats, max_teleop: float = 1.0) -> dict[str, float]:
    """
    Normalize a team's averages to 0-100 for the radar chart.

    Speed, shooting speed and defense are rated out of 5 and climb out of
    level 3. Teleop is relative to the team's best single-match teleop
    score, since it has no fixed ceiling.

    Args:
        stats: Team averages
        max_teleop: Highest teleop score in the team's scouting reports

    Returns:
        Dict of axis name -> value in [0, 100]
    """
    if max_teleop <= 0:
        max_teleop = 1.0

    return {
        'speed': _percent(stats.metric('avg_speed'), RADAR_RATING_SCALE),
        'shooting_speed': _percent(stats.metric('avg_shooting_speed'), RADAR_RATING_SCALE),
        'teleop': _percent(stats.metric('avg_teleop'), max_teleop),
        'climb': _percent(stats.metric('avg_climb'), MAX_CLIMB_LEVEL),
        'defense': _percent(stats.metric('avg_defense'), RADAR_RATING_SCALE),
    }
