import multiprocessing
from functools import partial

from simulator.tape import BLANK
from simulator.turing_machine import run_program


def evaluate_one(symbols, program, max_steps, blank):
    """Run one input and return its outcome as a JSON-ready dict."""
    return run_program(program, symbols, max_steps=max_steps, blank=blank).to_dict()


def evaluate_chunk(chunk, program, max_steps, blank):
    return [evaluate_one(symbols, program, max_steps, blank) for symbols in chunk]


def evaluate_batch(program, inputs, max_steps=10000, num_workers=1, blank=BLANK):
    """
    Run `program` once per input tape and return outcome dicts in input order.
    Each run gets its own tape; the program is shared read-only across workers.
    """
    inputs = [list(symbols) for symbols in inputs]
    if not inputs:
        return []

    if num_workers <= 1:
        return evaluate_chunk(inputs, program, max_steps, blank)

    chunk_size = len(inputs) // num_workers + 1
    chunks = [inputs[i:i + chunk_size] for i in range(0, len(inputs), chunk_size)]

    with multiprocessing.Pool(processes=num_workers) as pool:
        chunk_results = pool.map(partial(evaluate_chunk, program=program, max_steps=max_steps, blank=blank), chunks)

    return [entry for chunk in chunk_results for entry in chunk]
