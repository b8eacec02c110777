# tools/run_program.py

import argparse
import json
from pathlib import Path

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from simulator.evaluator import evaluate_batch
from simulator.tape import BLANK, Tape
from simulator.turing_machine import TuringMachine
from tools.program_loader import format_symbols, load_program, parse_tape

console = Console()

OUTCOME_COLORS = {
    "halted": "green",
    "stuck": "red",
    "rejected": "red",
    "budget_exceeded": "yellow",
    "cancelled": "yellow",
}

# === Rendering ===
def render_window(tape, radius=10):
    """Two lines: the symbols around the head and a caret under the head."""
    tape_str = ""
    head_str = ""
    for pos, symbol in tape.window(radius):
        tape_str += f"{format_symbols([symbol], tape.blank)} "
        head_str += "^ " if pos == tape.head else "  "
    return tape_str.rstrip(), head_str.rstrip()

def print_outcome(outcome):
    entry = outcome.to_dict()
    color = OUTCOME_COLORS.get(entry["outcome"], "white")
    console.print(f"[{color}]{entry['outcome'].upper()}[/{color}] after {entry['steps']:,} steps in state {entry['state']}")
    if entry["outcome"] == "stuck":
        console.print(f"  No rule for (state {entry['state']}, symbol {format_symbols([entry['symbol']], outcome.tape.blank)!r})")
    console.print(f"  Tape: {format_symbols(entry['tape'], outcome.tape.blank) or '(blank)'}")
    console.print(f"  Head: {entry['head']}")

def make_tracer(radius=10, log_frequency=None):
    """Step callback that prints the tape window, or a progress line every `log_frequency` steps."""
    def trace(machine):
        if log_frequency:
            if machine.steps % log_frequency == 0:
                console.print(f"[cyan]{machine.steps:,} steps, state {machine.state}[/cyan]")
            return
        tape_str, head_str = render_window(machine.tape, radius)
        console.print(f"[bold]{machine.steps:>6}[/bold] state {machine.state}")
        console.print(tape_str, markup=False, highlight=False)
        console.print(head_str, markup=False, highlight=False)
    return trace

# === Single Run ===
def run_single(program_path, input_text, max_steps=10000, blank=BLANK, trace=False, trace_window=10,
               log_frequency=None, logger=None):
    program = load_program(program_path, blank)
    tape = Tape.from_symbols(parse_tape(input_text, blank), blank)
    machine = TuringMachine(program, tape)

    on_step = None
    if trace:
        on_step = make_tracer(trace_window)
    elif log_frequency:
        on_step = make_tracer(log_frequency=log_frequency)
    outcome = machine.run(max_steps, on_step=on_step)
    print_outcome(outcome)

    if logger is not None:
        entry = {"program": program.fingerprint(), "input": input_text, **outcome.to_dict()}
        logger.log(entry)
        logger.log_outcome(entry)

    return outcome

# === Long-Runner Promotion ===
def promote_long_runner(input_text, pool_file):
    Path(pool_file).parent.mkdir(parents=True, exist_ok=True)
    with open(pool_file, "a", encoding="utf-8") as f:
        f.write(input_text + "\n")

# === Utility Loaders ===
def load_inputs(inputs_file):
    """One input tape per line; blank lines are skipped, '_' and spaces are blank cells."""
    with open(inputs_file, "r", encoding="utf-8") as f:
        inputs = [line.rstrip("\r\n") for line in f if line.strip()]
    return inputs

def load_checkpoint(checkpoint_path):
    if checkpoint_path.exists():
        with open(checkpoint_path, "r", encoding="utf-8") as f:
            checkpoint = json.load(f)
        return checkpoint.get("completed", [])
    return []

def save_checkpoint(completed, checkpoint_path):
    with open(checkpoint_path, "w", encoding="utf-8") as f:
        json.dump({"completed": completed}, f, indent=4)

# === Input Pool Runner ===
def simulate_inputs(program_path, inputs_file, output_name="results", batch_size=256, max_steps=10000,
                    num_workers=1, blank=BLANK, results_root="results", logger=None):
    program = load_program(program_path, blank)
    fingerprint = program.fingerprint()

    pool_name = Path(inputs_file).stem
    results_folder = Path(results_root) / pool_name
    results_folder.mkdir(parents=True, exist_ok=True)
    results_file = results_folder / f"{output_name}.jsonl"
    checkpoint_file = results_folder / f"{output_name}_checkpoint.json"
    long_runners_file = results_folder / "long_runners.txt"

    all_inputs = [(f"IN_{idx:06d}", text) for idx, text in enumerate(load_inputs(inputs_file))]
    completed = load_checkpoint(checkpoint_file)
    done = set(completed)

    pending = [(input_id, text) for input_id, text in all_inputs if input_id not in done]
    console.print(f"[INFO] Loaded {len(all_inputs):,} inputs. {len(pending):,} pending.", markup=False)

    with open(results_file, "a", encoding="utf-8") as results_fh, Progress(
            SpinnerColumn(),
            BarColumn(),
            "[progress.percentage]{task.percentage:>3.0f}%",
            TextColumn("{task.completed}/{task.total} Inputs"),
            TimeElapsedColumn(),
            console=console
    ) as progress:

        task = progress.add_task("[cyan]Simulating...", total=len(pending))

        for batch_start in range(0, len(pending), batch_size):
            batch = pending[batch_start:batch_start + batch_size]
            outcomes = evaluate_batch(
                program,
                [parse_tape(text, blank) for _, text in batch],
                max_steps=max_steps,
                num_workers=num_workers,
                blank=blank
            )

            batch_results = []
            for (input_id, text), outcome in zip(batch, outcomes):
                entry = {"input_id": input_id, "input": text, "program": fingerprint, **outcome}
                batch_results.append(entry)
                completed.append(input_id)

                if entry["outcome"] == "budget_exceeded":
                    promote_long_runner(text, long_runners_file)

            # === BULK WRITE once per batch ===
            for entry in batch_results:
                results_fh.write(json.dumps(entry) + "\n")
            results_fh.flush()

            if logger is not None:
                # Long pools can cross midnight
                logger.rotate()
                logger.log_summary(batch_results)
                for entry in batch_results:
                    logger.log_outcome(entry)

            save_checkpoint(completed, checkpoint_file)
            progress.update(task, advance=len(batch))

    console.print(f"[SUCCESS] All inputs simulated. Results saved to {results_file}", markup=False)
    return results_file

# === CLI ===
def main():
    parser = argparse.ArgumentParser(description="Run a quintuple Turing machine program.")
    parser.add_argument("--program", required=True, help="Path to a .tm program file")
    parser.add_argument("--input", default="", help="Input tape, e.g. 111 ('_' is blank)")
    parser.add_argument("--inputs", help="File with one input tape per line (batch mode)")
    parser.add_argument("--output", default="results", help="Result file name for batch mode (default: results)")
    parser.add_argument("--batch_size", type=int, default=256, help="Inputs per save/checkpoint")
    parser.add_argument("--max_steps", type=int, default=10000, help="Step budget per run")
    parser.add_argument("--cpu_workers", type=int, default=1, help="Worker processes for batch mode")
    parser.add_argument("--trace", action="store_true", help="Print the tape after every step")
    args = parser.parse_args()

    if args.inputs:
        simulate_inputs(
            args.program,
            args.inputs,
            args.output,
            batch_size=args.batch_size,
            max_steps=args.max_steps,
            num_workers=args.cpu_workers
        )
    else:
        run_single(args.program, args.input, max_steps=args.max_steps, trace=args.trace)

if __name__ == "__main__":
    main()
