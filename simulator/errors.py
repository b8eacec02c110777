class InvalidProgram(ValueError):
    """Raised when a transition table or program is structurally invalid."""


class DuplicateRule(InvalidProgram):
    def __init__(self, state, symbol):
        self.state = state
        self.symbol = symbol
        super().__init__(f"Duplicate rule for state {state} reading {symbol!r}")


class UnknownInitialState(InvalidProgram):
    def __init__(self, state):
        self.state = state
        super().__init__(f"Initial state {state!r} is not used by any rule or state declaration")


class EmptyHaltingSet(InvalidProgram):
    def __init__(self):
        super().__init__("Program must declare at least one halting state")


class ConflictingStates(InvalidProgram):
    def __init__(self, states):
        self.states = sorted(states)
        super().__init__(f"States declared both halting and error: {self.states}")
