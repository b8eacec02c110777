import dataclasses
import pickle

import pytest

from simulator.errors import DuplicateRule, InvalidProgram
from simulator.tape import Direction
from simulator.transition_table import Action, Rule, TransitionTable


def test_lookup_returns_action(copy_rules):
    table = TransitionTable(copy_rules)
    assert table.lookup(0, "1") == Action(1, "0", Direction.RIGHT)
    assert table.lookup(5, "_") == Action(6, "_", Direction.RIGHT)


def test_lookup_missing_pair_returns_none(copy_rules):
    table = TransitionTable(copy_rules)
    assert table.lookup(6, "1") is None
    assert table.lookup(1, "0") is None
    assert table.lookup(99, "_") is None


def test_duplicate_key_rejected():
    rules = [
        Rule(0, "1", 1, "1", Direction.RIGHT),
        Rule(0, "1", 2, "0", Direction.LEFT),
    ]
    with pytest.raises(DuplicateRule) as excinfo:
        TransitionTable(rules)
    assert excinfo.value.state == 0
    assert excinfo.value.symbol == "1"
    assert isinstance(excinfo.value, InvalidProgram)


def test_same_symbol_in_different_states_is_fine():
    table = TransitionTable([
        Rule(0, "1", 1, "1", Direction.RIGHT),
        Rule(1, "1", 0, "1", Direction.RIGHT),
    ])
    assert len(table) == 2
    assert (0, "1") in table
    assert (1, "1") in table
    assert (2, "1") not in table


def test_states_and_symbols(copy_rules):
    table = TransitionTable(copy_rules)
    assert table.states() == {0, 1, 2, 3, 4, 5, 6}
    assert table.symbols() == {"0", "1", "_"}


def test_iterates_in_insertion_order(copy_rules):
    table = TransitionTable(copy_rules)
    assert list(table) == copy_rules


def test_actions_are_immutable(copy_rules):
    action = TransitionTable(copy_rules).lookup(0, "1")
    with pytest.raises(dataclasses.FrozenInstanceError):
        action.next_state = 3


def test_pickles(copy_rules):
    table = TransitionTable(copy_rules)
    restored = pickle.loads(pickle.dumps(table))
    assert restored == table
    assert restored.lookup(2, "_") == table.lookup(2, "_")
