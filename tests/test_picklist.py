"""Unit tests for pick-list operations and the persisted store."""

import json
from unittest.mock import MagicMock

import pytest

from frcscout.picklist import (
    AddToList,
    ListName,
    MoveBetweenLists,
    PickListError,
    PickListState,
    PickListStore,
    ReorderWithinList,
    TogglePicked,
    add_to_list,
    apply_operation,
    load_state,
    move_between_lists,
    remove_from_list,
    reorder_within_list,
    save_state,
    toggle_picked,
)
from frcscout.storage import MemoryStore

FIRST = ListName.FIRST
SECOND = ListName.SECOND


@pytest.fixture
def state():
    return PickListState(first_pick=(254, 118, 1678), second_pick=(971, 2056), picked=frozenset({118}))


class TestAddRemove:
    """Tests for add_to_list and remove_from_list."""

    def test_append(self, state):
        """Test a new team goes to the end of the list."""
        result = add_to_list(state, 33, FIRST)
        assert result.first_pick == (254, 118, 1678, 33)
        assert result.second_pick == state.second_pick

    def test_idempotent(self, state):
        """Test adding twice equals adding once."""
        once = add_to_list(state, 33, SECOND)
        twice = add_to_list(once, 33, SECOND)
        assert twice == once

    def test_reject_team_on_other_list(self, state):
        """Test a team on the other list must be moved, not added."""
        with pytest.raises(PickListError, match='already on the second pick list'):
            add_to_list(state, 971, FIRST)

    @pytest.mark.parametrize('team', [0, -5, True, '254'])
    def test_reject_invalid_team(self, state, team):
        """Test non-positive or non-integer team numbers are rejected."""
        with pytest.raises(PickListError):
            add_to_list(state, team, FIRST)

    def test_accepts_list_name_string(self, state):
        """Test list names may be given as their string value."""
        assert add_to_list(state, 33, 'second').second_pick == (971, 2056, 33)

    def test_remove(self, state):
        """Test removing a team keeps the rest in order."""
        result = remove_from_list(state, 118, FIRST)
        assert result.first_pick == (254, 1678)
        assert result.picked == state.picked  # picked marks are independent

    def test_remove_absent_is_noop(self, state):
        """Test removing a team that is not listed changes nothing."""
        assert remove_from_list(state, 971, FIRST) == state


class TestReorderAndMove:
    """Tests for reorder_within_list and move_between_lists."""

    def test_reorder(self):
        """Test [A, B, C] moving index 0 to 2 gives [B, C, A]."""
        state = PickListState(first_pick=(1, 2, 3))
        assert reorder_within_list(state, FIRST, 0, 2).first_pick == (2, 3, 1)

    def test_reorder_up(self, state):
        """Test moving the last team to the top."""
        assert reorder_within_list(state, FIRST, 2, 0).first_pick == (1678, 254, 118)

    @pytest.mark.parametrize('from_index, to_index', [(3, 0), (0, 3), (-1, 0), (0, -1)])
    def test_reorder_out_of_range(self, state, from_index, to_index):
        """Test out-of-range indices are rejected and state is unchanged."""
        before = state
        with pytest.raises(PickListError, match='out of range'):
            reorder_within_list(state, FIRST, from_index, to_index)
        assert state == before

    @pytest.mark.parametrize('index', [True, 1.0, '1', None])
    def test_reorder_non_integer_index(self, state, index):
        """Test booleans, floats and other non-integers are not indices."""
        with pytest.raises(PickListError, match='Invalid index'):
            reorder_within_list(state, FIRST, index, 0)
        with pytest.raises(PickListError, match='Invalid index'):
            reorder_within_list(state, FIRST, 0, index)

    def test_move_non_integer_index(self, state):
        """Test move_between_lists rejects non-integer indices."""
        with pytest.raises(PickListError, match='Invalid index'):
            move_between_lists(state, FIRST, False, SECOND, 0)
        with pytest.raises(PickListError, match='Invalid index'):
            move_between_lists(state, FIRST, 0, SECOND, 0.0)

    def test_move(self, state):
        """Test moving a team from first pick into second pick."""
        result = move_between_lists(state, FIRST, 1, SECOND, 1)
        assert result.first_pick == (254, 1678)
        assert result.second_pick == (971, 118, 2056)

    def test_move_to_end(self, state):
        """Test the destination length is a valid index (append)."""
        result = move_between_lists(state, SECOND, 0, FIRST, 3)
        assert result.first_pick == (254, 118, 1678, 971)

    def test_move_into_empty_list(self):
        """Test moving into an empty list."""
        state = PickListState(first_pick=(1,))
        result = move_between_lists(state, FIRST, 0, SECOND, 0)
        assert result.first_pick == ()
        assert result.second_pick == (1,)

    def test_move_round_trip(self, state):
        """Test a move followed by its inverse restores both lists."""
        moved = move_between_lists(state, FIRST, 0, SECOND, 2)
        restored = move_between_lists(moved, SECOND, 2, FIRST, 0)
        assert restored == state

    def test_move_out_of_range(self, state):
        """Test invalid source and destination indices."""
        with pytest.raises(PickListError):
            move_between_lists(state, FIRST, 3, SECOND, 0)
        with pytest.raises(PickListError):
            move_between_lists(state, FIRST, 0, SECOND, 3)

    def test_move_same_list_rejected(self, state):
        """Test same-list moves must use reorder."""
        with pytest.raises(PickListError, match='reorder_within_list'):
            move_between_lists(state, FIRST, 0, FIRST, 1)


class TestTogglePicked:
    """Tests for toggle_picked."""

    def test_toggle(self, state):
        """Test toggling adds then removes a picked mark."""
        marked = toggle_picked(state, 254)
        assert marked.is_picked(254)
        assert not toggle_picked(marked, 254).is_picked(254)

    def test_unlisted_team(self, state):
        """Test teams not on a list can still be marked picked."""
        assert toggle_picked(state, 9999).picked == {118, 9999}


class TestApplyOperation:
    """Tests for apply_operation dispatch."""

    def test_dispatch(self, state):
        """Test each operation object reaches its function."""
        result = apply_operation(state, AddToList(33, FIRST))
        result = apply_operation(result, ReorderWithinList(FIRST, 3, 0))
        result = apply_operation(result, MoveBetweenLists(SECOND, 0, FIRST, 1))
        result = apply_operation(result, TogglePicked(118))
        assert result.first_pick == (33, 971, 254, 118, 1678)
        assert result.second_pick == (2056,)
        assert result.picked == frozenset()

    def test_unknown_operation(self, state):
        """Test unknown operations raise TypeError."""
        with pytest.raises(TypeError):
            apply_operation(state, 'drag')


class TestPersistence:
    """Tests for load_state / save_state."""

    def test_keys_and_encoding(self, state):
        """Test values are stored as JSON arrays under per-competition keys."""
        store = MemoryStore()
        assert save_state(store, '42', state) is True
        assert json.loads(store.get('pick_1st_42')) == [254, 118, 1678]
        assert json.loads(store.get('pick_2nd_42')) == [971, 2056]
        assert json.loads(store.get('picked_42')) == [118]

    def test_round_trip(self, state):
        """Test a saved state restores identically."""
        store = MemoryStore()
        save_state(store, '42', state)
        assert load_state(store, '42') == state

    def test_missing_keys_empty(self):
        """Test a competition with nothing saved starts empty."""
        assert load_state(MemoryStore(), '7') == PickListState()

    def test_competitions_isolated(self, state):
        """Test state never leaks between competitions."""
        store = MemoryStore()
        save_state(store, '1', state)
        assert load_state(store, '2') == PickListState()

    @pytest.mark.parametrize(
        'first, second, picked',
        [
            ('[254, "abc"]', '[]', '[]'),
            ('not json', '[]', '[]'),
            ('{"a": 1}', '[]', '[]'),
            ('[254, 254]', '[]', '[]'),
            ('[254]', '[254]', '[]'),
            ('[254]', '[]', '[1.5]'),
            ('[' * 100000 + ']' * 100000, '[]', '[]'),
        ],
    )
    def test_malformed_discarded(self, first, second, picked):
        """Test malformed stored data yields an empty state."""
        store = MemoryStore({'pick_1st_5': first, 'pick_2nd_5': second, 'picked_5': picked})
        assert load_state(store, '5') == PickListState()

    def test_non_string_value_discarded(self):
        """Test a store handing back a non-string value yields an empty state."""
        store = MemoryStore({'pick_1st_5': 254, 'pick_2nd_5': '[]', 'picked_5': '[]'})
        assert load_state(store, '5') == PickListState()
        assert PickListStore(store, '5').state == PickListState()

    def test_read_failure(self):
        """Test a failing store read yields an empty state."""
        store = MagicMock()
        store.get.side_effect = OSError('storage unavailable')
        assert load_state(store, '5') == PickListState()

    def test_write_failure(self, state):
        """Test a failing store write is reported, not raised."""
        store = MagicMock()
        store.set.side_effect = OSError('quota exceeded')
        assert save_state(store, '5', state) is False


class TestPickListStore:
    """Tests for the stateful PickListStore."""

    def test_persists_after_each_operation(self):
        """Test each operation is written through to the store."""
        store = MemoryStore()
        lists = PickListStore(store, 42)
        lists.add_to_list(254, FIRST)
        assert store.get('pick_1st_42') == '[254]'
        lists.add_to_list(118, FIRST)
        lists.reorder_within_list(FIRST, 1, 0)
        assert store.get('pick_1st_42') == '[118, 254]'
        lists.toggle_picked(254)
        assert store.get('picked_42') == '[254]'

    def test_restores_on_creation(self, state):
        """Test a new session picks up saved lists."""
        store = MemoryStore()
        save_state(store, '42', state)
        assert PickListStore(store, '42').state == state

    def test_rejected_operation_leaves_state(self, state):
        """Test a rejected operation changes neither memory nor storage."""
        store = MemoryStore()
        save_state(store, '42', state)
        lists = PickListStore(store, '42')
        with pytest.raises(PickListError):
            lists.reorder_within_list(FIRST, 0, 10)
        assert lists.state == state
        assert load_state(store, '42') == state

    def test_select_competition_replaces_state(self, state):
        """Test switching competitions replaces state wholesale."""
        store = MemoryStore()
        save_state(store, '1', state)
        lists = PickListStore(store, '1')
        lists.select_competition('2')
        assert lists.state == PickListState()
        lists.add_to_list(5, SECOND)
        lists.select_competition('1')
        assert lists.state == state

    def test_write_failure_keeps_memory(self):
        """Test the in-memory state stays authoritative when saving fails."""
        store = MagicMock()
        store.get.return_value = None
        store.set.side_effect = OSError('quota exceeded')
        lists = PickListStore(store, '3')
        lists.add_to_list(254, FIRST)
        assert lists.state.first_pick == (254,)
