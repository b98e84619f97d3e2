"""Loading datastore exports of team averages and matches using polars."""

from pathlib import Path
from typing import Any

import polars as pl

from .logging_config import get_logger
from .schemas import Match, TeamAverageStats
from .validators import validate_matches, validate_team_stats

logger = get_logger(__name__)


def _read_table(path: Path | str) -> pl.DataFrame:
    """Read a CSV or JSON (array of objects) export."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f'Export file not found: {path}')

    if path.suffix.lower() == '.csv':
        return pl.read_csv(path)
    if path.suffix.lower() == '.json':
        return pl.read_json(path)
    raise ValueError(f'Unsupported export format: {path.suffix}')


def _parse_alliance(value: Any) -> Any:
    """CSV exports store an alliance as '118 254 1678' or '118,254,1678'."""
    if isinstance(value, str):
        return [int(part) for part in value.replace(',', ' ').split()]
    return value


def load_team_stats(path: Path | str, competition_id: str | None = None) -> list[TeamAverageStats]:
    """
    Load team averages from a datastore export.

    Args:
        path: CSV or JSON export of the team averages view
        competition_id: If given, keep only rows for this competition

    Returns:
        Validated TeamAverageStats records

    Raises:
        FileNotFoundError: If the export doesn't exist
        pydantic.ValidationError: If a row is malformed
    """
    df = _read_table(path)
    if competition_id is not None and 'competition_id' in df.columns:
        df = df.filter(pl.col('competition_id').cast(pl.Utf8) == str(competition_id))

    records = [TeamAverageStats(**row) for row in df.to_dicts()]
    logger.info(f'Loaded averages for {len(records)} teams from {path}')

    for warning in validate_team_stats(records):
        logger.warning(warning)
    return records


def load_matches(path: Path | str) -> list[Match]:
    """
    Load the match schedule from a datastore export.

    Rows carrying a list of linked scouting reports have it reduced to a
    count. Matches are returned in qualification order.

    Raises:
        FileNotFoundError: If the export doesn't exist
        pydantic.ValidationError: If a row is malformed
    """
    df = _read_table(path)

    matches = []
    for row in df.to_dicts():
        row['red_alliance'] = _parse_alliance(row.get('red_alliance'))
        row['blue_alliance'] = _parse_alliance(row.get('blue_alliance'))
        reports = row.pop('scouting_reports', None)
        if row.get('scouting_report_count') is None:
            row['scouting_report_count'] = len(reports) if reports else 0
        matches.append(Match(**row))

    matches.sort(key=lambda m: m.match_number)
    logger.info(f'Loaded {len(matches)} matches from {path}')

    for warning in validate_matches(matches):
        logger.warning(warning)
    return matches
