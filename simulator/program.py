import hashlib
import json
from dataclasses import dataclass, field

from simulator.errors import ConflictingStates, EmptyHaltingSet, UnknownInitialState
from simulator.transition_table import TransitionTable


@dataclass(frozen=True)
class Program:
    """A runnable machine: transition table, initial state and halting states.

    Programs are immutable and can be shared between runs and shipped to
    worker processes.
    """

    table: TransitionTable
    initial_state: int
    halting_states: frozenset
    error_states: frozenset = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "halting_states", frozenset(self.halting_states))
        object.__setattr__(self, "error_states", frozenset(self.error_states))
        self._validate()

    def _validate(self):
        if not self.halting_states:
            raise EmptyHaltingSet()

        overlap = self.halting_states & self.error_states
        if overlap:
            raise ConflictingStates(overlap)

        state = self.initial_state
        if isinstance(state, bool) or not isinstance(state, int) or state < 0:
            raise UnknownInitialState(state)
        known = self.table.states() | self.halting_states | self.error_states
        if state not in known:
            raise UnknownInitialState(state)

    @classmethod
    def from_rules(cls, rules, initial_state, halting_states, error_states=()):
        return cls(TransitionTable(rules), initial_state, frozenset(halting_states), frozenset(error_states))

    def to_dict(self):
        return {
            "initial_state": self.initial_state,
            "halting_states": sorted(self.halting_states),
            "error_states": sorted(self.error_states),
            "rules": [
                [rule.state, rule.read, rule.next_state, rule.write, rule.direction.name]
                for rule in self.table
            ],
        }

    def fingerprint(self):
        """Hash the program deterministically, independent of rule order."""
        data = self.to_dict()
        data["rules"] = sorted(data["rules"], key=lambda r: (r[0], str(r[1])))
        program_json = json.dumps(data, sort_keys=True, default=str)
        return hashlib.sha256(program_json.encode("utf-8")).hexdigest()
