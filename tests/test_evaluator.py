from simulator.evaluator import evaluate_batch, evaluate_one
from simulator.program import Program
from simulator.tape import BLANK, Direction
from simulator.transition_table import Rule

INPUTS = ["", "1", "11", "111", "1111"]


def test_evaluate_one(copy_program):
    entry = evaluate_one("1", copy_program, 100, BLANK)
    assert entry == {"outcome": "halted", "state": 6, "steps": 8, "head": 0, "tape": ["1", "_", "1"]}


def test_batch_preserves_input_order(copy_program):
    results = evaluate_batch(copy_program, INPUTS, max_steps=10_000)

    assert [entry["outcome"] for entry in results] == ["halted"] * len(INPUTS)
    assert ["".join(entry["tape"]) for entry in results] == ["", "1_1", "11_11", "111_111", "1111_1111"]


def test_parallel_matches_sequential(copy_program):
    sequential = evaluate_batch(copy_program, INPUTS, max_steps=10_000, num_workers=1)
    parallel = evaluate_batch(copy_program, INPUTS, max_steps=10_000, num_workers=2)
    assert parallel == sequential


def test_mixed_outcomes():
    # Halts on a 1, loops forever on a blank
    program = Program.from_rules([
        Rule(0, "1", 1, "1", Direction.STAY),
        Rule(0, BLANK, 0, BLANK, Direction.RIGHT),
        Rule(0, "0", 2, "0", Direction.STAY),
    ], 0, {1})

    results = evaluate_batch(program, ["1", "", "0"], max_steps=50, num_workers=2)

    assert [entry["outcome"] for entry in results] == ["halted", "budget_exceeded", "stuck"]
    assert results[1]["steps"] == 50
    assert results[2]["state"] == 2


def test_empty_batch(copy_program):
    assert evaluate_batch(copy_program, [], max_steps=10) == []
