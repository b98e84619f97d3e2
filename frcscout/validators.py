"""Cross-record validation for stats snapshots, match schedules and pick lists."""

from collections import Counter
from typing import Iterable

from .picklist import PickListState
from .schemas import Match, TeamAverageStats


def validate_team_stats(records: Iterable[TeamAverageStats]) -> list[str]:
    """
    Validate a competition's team averages as a whole.

    Checks:
    - At most one record per team
    - All records belong to the same event

    Args:
        records: TeamAverageStats for one competition

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    records = list(records)

    counts = Counter(r.team_number for r in records)
    duplicates = sorted(team for team, count in counts.items() if count > 1)
    if duplicates:
        errors.append(f'Duplicate stats records for teams: {", ".join(map(str, duplicates))}')

    event_keys = {r.event_key for r in records if r.event_key}
    if len(event_keys) > 1:
        errors.append(f'Stats span multiple events: {", ".join(sorted(event_keys))}')

    return errors


def validate_matches(matches: Iterable[Match]) -> list[str]:
    """
    Validate a competition's match schedule.

    Checks:
    - Match numbers are unique
    - A score is never recorded for only one alliance

    Args:
        matches: Match records for one competition

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    matches = list(matches)

    counts = Counter(m.match_number for m in matches)
    duplicates = sorted(n for n, count in counts.items() if count > 1)
    if duplicates:
        errors.append(f'Duplicate match numbers: {", ".join(map(str, duplicates))}')

    for m in matches:
        if (m.red_score is None) != (m.blue_score is None):
            errors.append(f'Qual {m.match_number} has a score for only one alliance')

    return errors


def validate_pick_list_state(state: PickListState) -> list[str]:
    """
    Check pick-list invariants.

    Checks:
    - No team appears twice on a list
    - No team is on both lists

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    for label, teams in (('first', state.first_pick), ('second', state.second_pick)):
        counts = Counter(teams)
        duplicates = sorted(t for t, count in counts.items() if count > 1)
        if duplicates:
            errors.append(f'{label} pick list has duplicate teams: {", ".join(map(str, duplicates))}')

    overlap = sorted(set(state.first_pick) & set(state.second_pick))
    if overlap:
        errors.append(f'Teams on both pick lists: {", ".join(map(str, overlap))}')

    return errors
