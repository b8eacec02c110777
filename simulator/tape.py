from enum import Enum

BLANK = "_"


class Direction(Enum):
    LEFT = -1
    RIGHT = 1
    STAY = 0


class Tape:
    """Unbounded tape stored as a sparse dict of non-blank cells."""

    def __init__(self, blank=BLANK):
        self.blank = blank
        self.cells = {}
        self.head = 0

    @classmethod
    def from_symbols(cls, symbols, blank=BLANK):
        """Place symbols at positions 0..n-1 with the head at 0."""
        tape = cls(blank)
        for position, symbol in enumerate(symbols):
            if symbol != blank:
                tape.cells[position] = symbol
        return tape

    def read(self):
        return self.cells.get(self.head, self.blank)

    def write(self, symbol):
        # Blank cells are dropped so the dict only holds real content
        if symbol == self.blank:
            self.cells.pop(self.head, None)
        else:
            self.cells[self.head] = symbol

    def move(self, direction: Direction):
        self.head += direction.value

    def bounds(self):
        """Lowest and highest non-blank positions, or None for an empty tape."""
        if not self.cells:
            return None
        return min(self.cells), max(self.cells)

    def snapshot(self):
        """Symbols from the lowest to the highest non-blank cell; erased cells at the ends are not included."""
        bounds = self.bounds()
        if bounds is None:
            return []
        low, high = bounds
        return [self.cells.get(pos, self.blank) for pos in range(low, high + 1)]

    def window(self, radius=10):
        """Symbols around the head, as (position, symbol) pairs."""
        bounds = self.bounds()
        if bounds is None:
            low, high = self.head, self.head
        else:
            low, high = min(bounds[0], self.head), max(bounds[1], self.head)
        return [(pos, self.cells.get(pos, self.blank)) for pos in range(low - radius, high + radius + 1)]

    def render(self):
        return "".join(str(symbol) for symbol in self.snapshot())

    def copy(self):
        tape = Tape(self.blank)
        tape.cells = dict(self.cells)
        tape.head = self.head
        return tape

    def __eq__(self, other):
        if not isinstance(other, Tape):
            return NotImplemented
        return (self.cells, self.head, self.blank) == (other.cells, other.head, other.blank)

    def __repr__(self):
        return f"Tape({self.render()!r}, head={self.head})"
