from pathlib import Path

import pytest

from simulator.tape import Direction
from simulator.transition_table import Rule
from tools.program_loader import load_program

PROGRAMS_DIR = Path(__file__).resolve().parent.parent / "programs"

R = Direction.RIGHT
L = Direction.LEFT

# Duplication program: 111 -> 111_111, initial 0, halting 6
COPY_RULES = [
    Rule(0, "0", 0, "0", R),
    Rule(0, "1", 1, "0", R),
    Rule(0, "_", 5, "_", L),
    Rule(1, "1", 1, "1", R),
    Rule(1, "_", 2, "_", R),
    Rule(2, "1", 2, "1", R),
    Rule(2, "_", 3, "1", L),
    Rule(3, "1", 3, "1", L),
    Rule(3, "_", 4, "_", L),
    Rule(4, "1", 4, "1", L),
    Rule(4, "0", 0, "0", R),
    Rule(5, "0", 5, "1", L),
    Rule(5, "_", 6, "_", R),
]


@pytest.fixture
def copy_rules():
    return list(COPY_RULES)


@pytest.fixture
def copy_program_path():
    return str(PROGRAMS_DIR / "copy.tm")


@pytest.fixture
def next_integer_path():
    return str(PROGRAMS_DIR / "next_integer.tm")


@pytest.fixture
def copy_program(copy_program_path):
    return load_program(copy_program_path)
