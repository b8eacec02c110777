from dataclasses import dataclass

from simulator.tape import BLANK, Tape


# === Run Outcomes ===
@dataclass
class Outcome:
    state: int
    steps: int
    tape: Tape

    name = "outcome"

    def to_dict(self):
        return {
            "outcome": self.name,
            "state": self.state,
            "steps": self.steps,
            "head": self.tape.head,
            "tape": self.tape.snapshot(),
        }


@dataclass
class Halted(Outcome):
    name = "halted"


@dataclass
class Rejected(Outcome):
    """The machine entered one of the program's error states."""

    name = "rejected"


@dataclass
class Stuck(Outcome):
    symbol: object = None

    name = "stuck"

    def to_dict(self):
        entry = super().to_dict()
        entry["symbol"] = self.symbol
        return entry


@dataclass
class BudgetExceeded(Outcome):
    name = "budget_exceeded"


@dataclass
class Cancelled(Outcome):
    name = "cancelled"


# === Engine ===
class TuringMachine:
    """Runs a Program against a tape it owns exclusively.

    The configuration is (state, tape). A terminal outcome (halted, rejected,
    stuck) is sticky; budget and cancellation stops are not, so `run` can be
    called again to continue.
    """

    def __init__(self, program, tape=None):
        self.program = program
        self.tape = tape if tape is not None else Tape()
        self.state = program.initial_state
        self.steps = 0
        self.outcome = None

    def _settle(self):
        """Return (terminal outcome, None) or (None, action to apply next)."""
        if self.outcome is not None:
            return self.outcome, None

        program = self.program
        if self.state in program.halting_states:
            self.outcome = Halted(self.state, self.steps, self.tape)
            return self.outcome, None
        if self.state in program.error_states:
            self.outcome = Rejected(self.state, self.steps, self.tape)
            return self.outcome, None

        symbol = self.tape.read()
        action = program.table.lookup(self.state, symbol)
        if action is None:
            self.outcome = Stuck(self.state, self.steps, self.tape, symbol)
            return self.outcome, None
        return None, action

    def _apply(self, action):
        self.tape.write(action.write)
        self.tape.move(action.direction)
        self.state = action.next_state
        self.steps += 1

    def step(self):
        """Apply one transition. Returns the terminal outcome instead when there is one."""
        outcome, action = self._settle()
        if outcome is not None:
            return outcome
        self._apply(action)
        return None

    def run(self, max_steps, cancel=None, on_step=None):
        """Step until a terminal outcome, the step budget, or `cancel.is_set()`.

        `max_steps` counts applied transitions over the machine's lifetime.
        `on_step(machine)` is called after every applied transition.
        """
        if isinstance(max_steps, bool) or not isinstance(max_steps, int) or max_steps < 0:
            raise ValueError(f"max_steps must be a non-negative integer, got {max_steps!r}")

        while True:
            outcome, action = self._settle()
            if outcome is not None:
                return outcome
            if self.steps >= max_steps:
                return BudgetExceeded(self.state, self.steps, self.tape.copy())
            if cancel is not None and cancel.is_set():
                return Cancelled(self.state, self.steps, self.tape.copy())

            self._apply(action)
            if on_step is not None:
                on_step(self)

    def reset(self, tape=None):
        self.tape = tape if tape is not None else Tape(self.tape.blank)
        self.state = self.program.initial_state
        self.steps = 0
        self.outcome = None


def run_program(program, symbols=(), max_steps=10000, blank=BLANK, cancel=None, on_step=None):
    """Run `program` on a fresh tape holding `symbols` from position 0."""
    tape = Tape.from_symbols(symbols, blank)
    return TuringMachine(program, tape).run(max_steps, cancel=cancel, on_step=on_step)
