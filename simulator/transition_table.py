from dataclasses import dataclass
from types import MappingProxyType

from simulator.errors import DuplicateRule
from simulator.tape import Direction


@dataclass(frozen=True)
class Action:
    next_state: int
    write: object
    direction: Direction


@dataclass(frozen=True)
class Rule:
    """A quintuple: in `state` reading `read`, write, move and go to `next_state`."""

    state: int
    read: object
    next_state: int
    write: object
    direction: Direction

    @property
    def action(self):
        return Action(self.next_state, self.write, self.direction)


class TransitionTable:
    def __init__(self, rules=()):
        transitions = {}
        for rule in rules:
            key = (rule.state, rule.read)
            if key in transitions:
                raise DuplicateRule(rule.state, rule.read)
            transitions[key] = rule
        self._rules = MappingProxyType(transitions)

    def lookup(self, state, symbol):
        """Return the Action for (state, symbol), or None when no rule matches."""
        rule = self._rules.get((state, symbol))
        return rule.action if rule is not None else None

    def states(self):
        """Every state mentioned on either side of a rule."""
        found = set()
        for rule in self._rules.values():
            found.add(rule.state)
            found.add(rule.next_state)
        return found

    def symbols(self):
        found = set()
        for rule in self._rules.values():
            found.add(rule.read)
            found.add(rule.write)
        return found

    def __contains__(self, key):
        return key in self._rules

    def __iter__(self):
        return iter(self._rules.values())

    def __len__(self):
        return len(self._rules)

    def __eq__(self, other):
        if not isinstance(other, TransitionTable):
            return NotImplemented
        return dict(self._rules) == dict(other._rules)

    def __reduce__(self):
        # MappingProxyType does not pickle; rebuild from the rules instead
        return (TransitionTable, (list(self._rules.values()),))
