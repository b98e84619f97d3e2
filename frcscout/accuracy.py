"""Retrospective grading of projections against completed matches."""

from typing import Iterable, Optional, Sequence

from .config import get_feed_limit, get_variance_tolerance
from .logging_config import get_logger
from .models import AccuracySummary, MatchEvaluation, MatchForecast
from .prediction import StatsLookup, forecast_match, predict_alliance_score
from .schemas import Match

logger = get_logger(__name__)


def _winner(red: float, blue: float) -> str:
    if red > blue:
        return 'red'
    if blue > red:
        return 'blue'
    return 'tie'


def _as_points(value) -> float:
    """Scores that are missing or not numbers count as 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def evaluate_match(match: Match, stats: StatsLookup) -> MatchEvaluation:
    """
    Grade the engine against a completed match.

    Projections are recomputed from the current stats snapshot, so this is
    a retrospective check rather than a replay of the pre-match forecast.

    A prediction is correct when the projected winner (red, blue or tie)
    matches the actual one.

    Args:
        match: Match with both scores recorded
        stats: Team number -> TeamAverageStats lookup

    Returns:
        MatchEvaluation with correctness and total-points variance

    Raises:
        ValueError: If the match has not been played
    """
    if not match.is_played:
        raise ValueError(f'Match {match.match_number} has no final score')

    red_projected = predict_alliance_score(match.red_alliance, stats)
    blue_projected = predict_alliance_score(match.blue_alliance, stats)
    red_score = _as_points(match.red_score)
    blue_score = _as_points(match.blue_score)

    predicted = _winner(red_projected, blue_projected)
    actual = _winner(red_score, blue_score)
    variance = abs((red_score + blue_score) - (red_projected + blue_projected))

    return MatchEvaluation(
        match_number=match.match_number,
        red_projected=red_projected,
        blue_projected=blue_projected,
        red_score=red_score,
        blue_score=blue_score,
        predicted_winner=predicted,
        actual_winner=actual,
        correct=predicted == actual,
        variance_abs=variance,
    )


def _team_search_matches(match: Match, search: str) -> bool:
    if not search:
        return True
    teams = [*match.red_alliance, *match.blue_alliance]
    return any(search in str(team) for team in teams)


def upcoming_forecasts(
    matches: Iterable[Match],
    stats: StatsLookup,
    search: str = '',
    limit: Optional[int] = None,
) -> list[MatchForecast]:
    """
    Forecasts for the next unplayed matches in qualification order.

    Args:
        matches: All matches for the competition
        stats: Team number -> TeamAverageStats lookup
        search: Optional team number fragment; keeps matches with a team containing it
        limit: Maximum forecasts to return (default: configured feed limit)
    """
    if limit is None:
        limit = get_feed_limit()
    search = search.strip()

    pending = sorted(
        (m for m in matches if not m.is_played and _team_search_matches(m, search)),
        key=lambda m: m.match_number,
    )
    return [forecast_match(m, stats) for m in pending[:limit]]


def accuracy_feed(
    matches: Iterable[Match],
    stats: StatsLookup,
    limit: Optional[int] = None,
) -> list[MatchEvaluation]:
    """
    Evaluations for the most recent completed matches, newest first.

    Only matches with at least one linked scouting report are graded.
    """
    if limit is None:
        limit = get_feed_limit()

    graded = sorted(
        (m for m in matches if m.is_played and m.scouting_report_count > 0),
        key=lambda m: m.match_number,
        reverse=True,
    )
    logger.debug(f'{len(graded)} completed matches with scouting coverage')
    return [evaluate_match(m, stats) for m in graded[:limit]]


def summarize_accuracy(
    evaluations: Sequence[MatchEvaluation],
    tolerance: Optional[float] = None,
) -> AccuracySummary:
    """
    Aggregate hit rate and variance over graded matches.

    Args:
        evaluations: Results from evaluate_match()
        tolerance: Variance counted as a close call (default: configured tolerance)
    """
    if tolerance is None:
        tolerance = get_variance_tolerance()

    summary = AccuracySummary(evaluated=len(evaluations))
    if not evaluations:
        return summary

    summary.correct = sum(1 for e in evaluations if e.correct)
    summary.hit_rate = summary.correct / summary.evaluated
    summary.mean_variance = sum(e.variance_abs for e in evaluations) / summary.evaluated
    summary.within_tolerance = sum(1 for e in evaluations if e.within_tolerance(tolerance))
    return summary
