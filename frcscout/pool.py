"""Draft pool filtering and team rankings."""

from typing import Iterable, Optional, Sequence

import polars as pl

from .config import get_default_sort_metric
from .constants import RANKABLE_METRICS, THRESHOLD_FIELDS
from .picklist import PickListState
from .schemas import PoolThresholds, TeamAverageStats


def _check_metric(metric: str) -> None:
    if metric not in RANKABLE_METRICS:
        raise ValueError(f'Unknown ranking metric: {metric}')


def passes_thresholds(team: TeamAverageStats, thresholds: PoolThresholds) -> bool:
    """Whether every thresholded average meets its minimum (missing averages count as 0)."""
    for threshold_name, metric in THRESHOLD_FIELDS.items():
        if team.metric(metric) < getattr(thresholds, threshold_name):
            return False
    return True


def filter_pool(
    all_stats: Iterable[TeamAverageStats],
    thresholds: Optional[PoolThresholds] = None,
    excluded: Iterable[int] = (),
    sort_by: Optional[str] = None,
) -> list[TeamAverageStats]:
    """
    Teams still available to draft, best first.

    Args:
        all_stats: Every team's averages at the competition
        thresholds: Minimum averages (default: all 0, admitting everyone)
        excluded: Team numbers to drop regardless of thresholds (teams on a pick list)
        sort_by: Average to rank by, descending (default: configured metric, avg_score)

    Returns:
        Remaining teams; ties keep their input order

    Raises:
        ValueError: If sort_by is not a rankable average
    """
    thresholds = thresholds or PoolThresholds()
    sort_by = sort_by or get_default_sort_metric()
    _check_metric(sort_by)
    excluded = set(excluded)

    remaining = [
        team for team in all_stats
        if team.team_number not in excluded and passes_thresholds(team, thresholds)
    ]
    # sorted() is stable, so equal values keep input order
    return sorted(remaining, key=lambda team: team.metric(sort_by), reverse=True)


def filter_pool_for_state(
    all_stats: Iterable[TeamAverageStats],
    thresholds: Optional[PoolThresholds],
    state: PickListState,
    sort_by: Optional[str] = None,
) -> list[TeamAverageStats]:
    """filter_pool() excluding every team on either pick list."""
    return filter_pool(all_stats, thresholds, state.listed_teams(), sort_by)


def search_teams(records: Iterable[TeamAverageStats], query: str) -> list[TeamAverageStats]:
    """Teams whose number contains the query (e.g. '25' matches 254 and 1025)."""
    query = query.strip()
    return [r for r in records if query in str(r.team_number)]


def team_leaderboard(
    records: Sequence[TeamAverageStats],
    sort_by: Optional[str] = None,
    search: str = '',
) -> pl.DataFrame:
    """
    Competition team table, sorted descending by one average.

    Missing values sort as 0 and ties keep input order.

    Args:
        records: Team averages for one competition
        sort_by: Average to sort by (default: configured metric)
        search: Optional team number fragment

    Returns:
        DataFrame with one row per team and a column per average
    """
    sort_by = sort_by or get_default_sort_metric()
    _check_metric(sort_by)

    rows = [r.model_dump(exclude={'competition_id', 'event_key'}) for r in search_teams(records, search)]
    schema = {name: pl.Float64 for name in RANKABLE_METRICS}
    schema['team_number'] = pl.Int64
    schema['total_matches'] = pl.Int64
    df = pl.DataFrame(rows, schema=schema) if rows else pl.DataFrame(schema=schema)

    return df.select(['team_number', *RANKABLE_METRICS]).sort(
        pl.col(sort_by).fill_null(0), descending=True, maintain_order=True
    )
