"""Alliance-selection pick lists.

Two ordered, disjoint draft lists (first pick and second pick) plus a set of
teams already claimed in the real draft. Every operation is a pure function
that returns a new PickListState; PickListStore keeps the current state for
one competition and persists it after each change.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Optional, Tuple, Union

from .constants import FIRST_PICK_KEY, PICKED_KEY, SECOND_PICK_KEY
from .logging_config import get_logger
from .storage import KeyValueStore, namespaced_key

logger = get_logger(__name__)


class PickListError(ValueError):
    """Raised when an operation would break the pick-list contract."""


class ListName(str, Enum):
    FIRST = 'first'
    SECOND = 'second'

    @property
    def other(self) -> 'ListName':
        return ListName.SECOND if self is ListName.FIRST else ListName.FIRST


@dataclass(frozen=True)
class PickListState:
    first_pick: Tuple[int, ...] = ()
    second_pick: Tuple[int, ...] = ()
    picked: FrozenSet[int] = frozenset()

    def get(self, name: ListName) -> Tuple[int, ...]:
        return self.first_pick if ListName(name) is ListName.FIRST else self.second_pick

    def with_list(self, name: ListName, teams: Tuple[int, ...]) -> 'PickListState':
        if ListName(name) is ListName.FIRST:
            return replace(self, first_pick=tuple(teams))
        return replace(self, second_pick=tuple(teams))

    def listed_teams(self) -> FrozenSet[int]:
        """Every team on either list."""
        return frozenset(self.first_pick) | frozenset(self.second_pick)

    def is_picked(self, team: int) -> bool:
        return team in self.picked


def _check_team(team: int) -> None:
    if isinstance(team, bool) or not isinstance(team, int) or team <= 0:
        raise PickListError(f'Invalid team number: {team!r}')


def _check_index(index: int, size: int, name: ListName) -> None:
    if isinstance(index, bool) or not isinstance(index, int):
        raise PickListError(f'Invalid index for {name.value} pick list: {index!r}')
    if not 0 <= index < size:
        raise PickListError(f'Index {index} out of range for {name.value} pick list of {size}')


# -----------------------------
# Operations
# -----------------------------

def add_to_list(state: PickListState, team: int, target: ListName) -> PickListState:
    """
    Append a team to the end of a list.

    No-op if the team is already on that list. A team on the other list
    must be moved with move_between_lists() instead.

    Raises:
        PickListError: If the team is invalid or already on the other list
    """
    _check_team(team)
    target = ListName(target)
    if team in state.get(target):
        return state
    if team in state.get(target.other):
        raise PickListError(f'Team {team} is already on the {target.other.value} pick list')
    return state.with_list(target, state.get(target) + (team,))


def remove_from_list(state: PickListState, team: int, source: ListName) -> PickListState:
    """Remove every occurrence of a team from a list. No-op if absent."""
    source = ListName(source)
    teams = state.get(source)
    if team not in teams:
        return state
    return state.with_list(source, tuple(t for t in teams if t != team))


def reorder_within_list(
    state: PickListState, name: ListName, from_index: int, to_index: int
) -> PickListState:
    """
    Move the team at from_index to to_index within the same list.

    Raises:
        PickListError: If either index is out of range
    """
    name = ListName(name)
    teams = list(state.get(name))
    _check_index(from_index, len(teams), name)
    _check_index(to_index, len(teams), name)

    team = teams.pop(from_index)
    teams.insert(to_index, team)
    return state.with_list(name, tuple(teams))


def move_between_lists(
    state: PickListState,
    from_list: ListName,
    from_index: int,
    to_list: ListName,
    to_index: int,
) -> PickListState:
    """
    Move the team at from_index in one list to to_index in the other.

    to_index may equal the destination length to append at the end.

    Raises:
        PickListError: If both lists are the same or an index is out of range
    """
    from_list = ListName(from_list)
    to_list = ListName(to_list)
    if from_list is to_list:
        raise PickListError('Use reorder_within_list() to move a team within one list')

    source = list(state.get(from_list))
    dest = list(state.get(to_list))
    _check_index(from_index, len(source), from_list)
    _check_index(to_index, len(dest) + 1, to_list)

    team = source.pop(from_index)
    if team in dest:
        raise PickListError(f'Team {team} is already on the {to_list.value} pick list')
    dest.insert(to_index, team)

    return state.with_list(from_list, tuple(source)).with_list(to_list, tuple(dest))


def toggle_picked(state: PickListState, team: int) -> PickListState:
    """Mark a team as claimed by an alliance, or clear the mark."""
    _check_team(team)
    return replace(state, picked=state.picked ^ {team})


# -----------------------------
# Operation objects
# -----------------------------

@dataclass(frozen=True)
class AddToList:
    team: int
    target: ListName


@dataclass(frozen=True)
class RemoveFromList:
    team: int
    source: ListName


@dataclass(frozen=True)
class ReorderWithinList:
    name: ListName
    from_index: int
    to_index: int


@dataclass(frozen=True)
class MoveBetweenLists:
    from_list: ListName
    from_index: int
    to_list: ListName
    to_index: int


@dataclass(frozen=True)
class TogglePicked:
    team: int


Operation = Union[AddToList, RemoveFromList, ReorderWithinList, MoveBetweenLists, TogglePicked]


def apply_operation(state: PickListState, operation: Operation) -> PickListState:
    """Apply one user action to a pick-list state."""
    if isinstance(operation, AddToList):
        return add_to_list(state, operation.team, operation.target)
    if isinstance(operation, RemoveFromList):
        return remove_from_list(state, operation.team, operation.source)
    if isinstance(operation, ReorderWithinList):
        return reorder_within_list(state, operation.name, operation.from_index, operation.to_index)
    if isinstance(operation, MoveBetweenLists):
        return move_between_lists(
            state, operation.from_list, operation.from_index, operation.to_list, operation.to_index
        )
    if isinstance(operation, TogglePicked):
        return toggle_picked(state, operation.team)
    raise TypeError(f'Unknown pick-list operation: {operation!r}')


# -----------------------------
# Persistence
# -----------------------------

def state_keys(competition_id: str) -> tuple[str, str, str]:
    """Storage keys for (first pick, second pick, picked) at a competition."""
    return (
        namespaced_key(FIRST_PICK_KEY, competition_id),
        namespaced_key(SECOND_PICK_KEY, competition_id),
        namespaced_key(PICKED_KEY, competition_id),
    )


def _decode_team_list(raw: Optional[str]) -> list[int]:
    """Decode a stored JSON array of team numbers; an absent key is an empty list."""
    if raw is None:
        return []
    value = json.loads(raw)
    if not isinstance(value, list):
        raise ValueError(f'Expected a list of team numbers, got {type(value).__name__}')
    for team in value:
        if isinstance(team, bool) or not isinstance(team, int) or team <= 0:
            raise ValueError(f'Invalid team number in stored list: {team!r}')
    return value


def decode_state(first_raw: Optional[str], second_raw: Optional[str], picked_raw: Optional[str]) -> PickListState:
    """
    Rebuild a PickListState from its three stored values.

    Raises:
        ValueError: If any value is malformed or the lists break the
            distinct/disjoint invariants
    """
    first = _decode_team_list(first_raw)
    second = _decode_team_list(second_raw)
    picked = _decode_team_list(picked_raw)

    if len(set(first)) != len(first) or len(set(second)) != len(second):
        raise ValueError('Stored pick list has duplicate teams')
    overlap = set(first) & set(second)
    if overlap:
        raise ValueError(f'Teams on both stored pick lists: {sorted(overlap)}')

    return PickListState(first_pick=tuple(first), second_pick=tuple(second), picked=frozenset(picked))


def encode_state(state: PickListState) -> tuple[str, str, str]:
    """Serialize a state into its three stored values."""
    return (
        json.dumps(list(state.first_pick)),
        json.dumps(list(state.second_pick)),
        json.dumps(sorted(state.picked)),
    )


def load_state(store: KeyValueStore, competition_id: str) -> PickListState:
    """
    Restore a competition's pick lists.

    Read failures and malformed data yield an empty state rather than an error.
    """
    first_key, second_key, picked_key = state_keys(competition_id)
    try:
        raw = (store.get(first_key), store.get(second_key), store.get(picked_key))
    except Exception as e:
        logger.warning(f'Could not read pick lists for competition {competition_id}: {e}')
        return PickListState()

    try:
        state = decode_state(*raw)
    except (ValueError, TypeError, RecursionError) as e:
        # json.loads raises TypeError for non-strings, RecursionError for deep nesting
        logger.warning(f'Discarding malformed pick lists for competition {competition_id}: {e}')
        return PickListState()

    logger.debug(
        f'Restored pick lists for competition {competition_id}: '
        f'{len(state.first_pick)} first, {len(state.second_pick)} second, {len(state.picked)} picked'
    )
    return state


def save_state(store: KeyValueStore, competition_id: str, state: PickListState) -> bool:
    """
    Persist a competition's pick lists.

    Returns:
        True if all three values were written, False if the store failed
    """
    keys = state_keys(competition_id)
    try:
        for key, value in zip(keys, encode_state(state)):
            store.set(key, value)
    except Exception as e:
        logger.error(f'Could not save pick lists for competition {competition_id}: {e}')
        return False
    return True


@dataclass
class PickListStore:
    """
    Pick lists for the active competition.

    The in-memory state is authoritative for the session. The store is read
    once when a competition is selected and written after every operation.
    """
    store: KeyValueStore
    competition_id: str
    state: PickListState = field(init=False)

    def __post_init__(self):
        self.competition_id = str(self.competition_id)
        self.state = load_state(self.store, self.competition_id)

    def select_competition(self, competition_id: str) -> PickListState:
        """Switch competitions, replacing the current state with the new one's."""
        self.competition_id = str(competition_id)
        self.state = load_state(self.store, self.competition_id)
        return self.state

    def apply(self, operation: Operation) -> PickListState:
        """
        Apply an operation and persist the result.

        Raises:
            PickListError: If the operation is rejected (state is unchanged)
        """
        self.state = apply_operation(self.state, operation)
        save_state(self.store, self.competition_id, self.state)
        return self.state

    def add_to_list(self, team: int, target: ListName) -> PickListState:
        return self.apply(AddToList(team, ListName(target)))

    def remove_from_list(self, team: int, source: ListName) -> PickListState:
        return self.apply(RemoveFromList(team, ListName(source)))

    def reorder_within_list(self, name: ListName, from_index: int, to_index: int) -> PickListState:
        return self.apply(ReorderWithinList(ListName(name), from_index, to_index))

    def move_between_lists(
        self, from_list: ListName, from_index: int, to_list: ListName, to_index: int
    ) -> PickListState:
        return self.apply(MoveBetweenLists(ListName(from_list), from_index, ListName(to_list), to_index))

    def toggle_picked(self, team: int) -> PickListState:
        return self.apply(TogglePicked(team))
