import os

from simulator.program import Program
from simulator.tape import BLANK, Direction
from simulator.transition_table import Rule

# Program text format:
#   # or / ...         comment
#   +N                 initial state
#   -N                 halting state (repeatable)
#   !N                 error state (repeatable)
#   from,to,read,write,move
COMMENT_PREFIXES = ("#", "/")
BLANK_TOKENS = ("_", " ", "")

MOVES = {
    "r": Direction.RIGHT,
    "l": Direction.LEFT,
    "n": Direction.STAY,
    "_": Direction.STAY,
    "": Direction.STAY,
}


class ParseError(ValueError):
    def __init__(self, line_number, line, reason):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"Line {line_number}: {reason}: {line!r}")


def _parse_state(token, line_number, line):
    token = token.strip()
    if not (token.isascii() and token.isdigit()):
        raise ParseError(line_number, line, f"invalid state {token!r}")
    return int(token)


def _parse_symbol(token, blank, line_number, line):
    token = token.strip()
    if token in BLANK_TOKENS:
        return blank
    if len(token) != 1:
        raise ParseError(line_number, line, f"invalid symbol {token!r}")
    return token


def _parse_move(token, line_number, line):
    move = MOVES.get(token.strip().lower())
    if move is None:
        raise ParseError(line_number, line, f"invalid move {token.strip()!r}")
    return move


def parse_rule(line, line_number=1, blank=BLANK):
    fields = line.split(",")
    if len(fields) != 5:
        raise ParseError(line_number, line, f"expected 5 fields, got {len(fields)}")
    state, next_state, read, write, move = fields
    return Rule(
        state=_parse_state(state, line_number, line),
        read=_parse_symbol(read, blank, line_number, line),
        next_state=_parse_state(next_state, line_number, line),
        write=_parse_symbol(write, blank, line_number, line),
        direction=_parse_move(move, line_number, line),
    )


def parse_program(text, blank=BLANK):
    """Parse program text into a validated Program.

    Malformed lines raise ParseError. Structural problems (duplicate rules,
    empty halting set, ...) raise the simulator's InvalidProgram errors.
    """
    rules = []
    initial_state = None
    halting_states = set()
    error_states = set()

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.rstrip("\r\n")
        if not line.strip() or line.lstrip().startswith(COMMENT_PREFIXES):
            continue

        marker = line.lstrip()[0]
        if marker == "+":
            if initial_state is not None:
                raise ParseError(line_number, line, "initial state declared twice")
            initial_state = _parse_state(line.lstrip()[1:], line_number, line)
        elif marker == "-":
            halting_states.add(_parse_state(line.lstrip()[1:], line_number, line))
        elif marker == "!":
            error_states.add(_parse_state(line.lstrip()[1:], line_number, line))
        else:
            rules.append(parse_rule(line, line_number, blank))

    if initial_state is None:
        raise ParseError(0, "", "missing initial state declaration")

    return Program.from_rules(rules, initial_state, halting_states, error_states)


def load_program(path, blank=BLANK):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Program file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        return parse_program(f.read(), blank)


def parse_tape(text, blank=BLANK):
    """Turn an input string into symbols; '_' and ' ' are blank."""
    return [blank if char in ("_", " ") else char for char in text]


def format_symbols(symbols, blank=BLANK):
    return "".join("_" if symbol == blank else str(symbol) for symbol in symbols)
