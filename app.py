# app.py

import argparse
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt, IntPrompt, Confirm
from rich.table import Table

from config.config_loader import load_config, save_config
from logger.logger import JSONLogger
from tools.program_loader import load_program
from tools.ruleset_inspect import pretty_print_ruleset
from tools.run_program import run_single, simulate_inputs

console = Console()

CONFIG_PATH = "config/runtime_config.json"

# === Utilities ===
def load_runtime_config():
    if not Path(CONFIG_PATH).exists():
        console.print("[red]Error: runtime_config.json not found![/red]")
        raise SystemExit(1)
    return load_config(CONFIG_PATH, verbose=False)

def make_logger(config):
    return JSONLogger(config["output_directory"], config["log_file_prefix"])

def show_main_menu():
    console.print("\n[bold cyan]Turing Machine Runner[/bold cyan]")
    console.print("[1] Run a Program")
    console.print("[2] Simulate an Input Pool")
    console.print("[3] Inspect a Program")
    console.print("[4] Edit Config")
    console.print("[5] Exit")

def detect_programs(config):
    programs_dir = Path(config["programs_directory"])
    if not programs_dir.exists():
        return []
    return sorted(programs_dir.glob("*.tm"))

def choose_program(config):
    programs = detect_programs(config)

    if not programs:
        console.print(f"[red]No programs found in {config['programs_directory']}.[/red]")
        return None

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Index", justify="center")
    table.add_column("Program", justify="center")
    for idx, path in enumerate(programs):
        table.add_row(str(idx), path.stem)
    console.print(table)

    idx_choice = IntPrompt.ask("\nChoose a program by Index")
    if idx_choice < 0 or idx_choice >= len(programs):
        console.print("[red]Invalid choice.[/red]")
        return None
    return programs[idx_choice]


def handle_run(config):
    console.print("\n[bold]Run a Program[/bold]")

    program_path = choose_program(config)
    if program_path is None:
        return

    input_text = Prompt.ask("Input tape ('_' is blank)", default="")
    max_steps = IntPrompt.ask("Max Steps", default=config["max_steps"])
    trace = Confirm.ask("Trace every step?", default=config["trace"])

    run_single(
        str(program_path),
        input_text,
        max_steps=max_steps,
        blank=config["blank_symbol"],
        trace=trace,
        trace_window=config["trace_window"],
        log_frequency=config["log_frequency"],
        logger=make_logger(config)
    )


def handle_simulate_inputs(config):
    console.print("\n[bold]Simulate an Input Pool[/bold]")

    program_path = choose_program(config)
    if program_path is None:
        return

    inputs_file = Prompt.ask("Inputs file (one tape per line)")
    if not Path(inputs_file).exists():
        console.print(f"[red]Inputs file {inputs_file} not found.[/red]")
        return

    batch_size = IntPrompt.ask("Batch Size", default=config["batch_size"])
    max_steps = IntPrompt.ask("Max Steps", default=config["max_steps"])
    cpu_workers = IntPrompt.ask("Number of CPU Workers", default=config["cpu_workers"])

    console.print(f"[cyan]Simulating {inputs_file} with {program_path.stem}...[/cyan]")
    simulate_inputs(
        str(program_path),
        inputs_file,
        "results",
        batch_size=batch_size,
        max_steps=max_steps,
        num_workers=cpu_workers,
        blank=config["blank_symbol"],
        results_root=config["results_directory"],
        logger=make_logger(config)
    )
    console.print("[green]Input pool simulation completed![/green]")

def handle_inspect(config):
    console.print("\n[bold]Inspect a Program[/bold]")

    program_path = choose_program(config)
    if program_path is None:
        return
    pretty_print_ruleset(load_program(str(program_path), config["blank_symbol"]), config["blank_symbol"])

def handle_edit_config(config):
    console.print("\n[bold]Edit Configuration[/bold]")

    max_steps = IntPrompt.ask("Max Steps", default=config["max_steps"])
    trace = Confirm.ask("Trace runs by default?", default=config["trace"])
    trace_window = IntPrompt.ask("Trace Window", default=config["trace_window"])
    cpu_workers = IntPrompt.ask("Number of CPU Workers", default=config["cpu_workers"])
    batch_size = IntPrompt.ask("Batch Size", default=config["batch_size"])

    config.update({
        "max_steps": max_steps,
        "trace": trace,
        "trace_window": trace_window,
        "cpu_workers": cpu_workers,
        "batch_size": batch_size
    })

    try:
        save_config(config, CONFIG_PATH)
    except (TypeError, ValueError) as e:
        console.print(f"[red]Configuration not saved: {e}[/red]")
        return
    console.print("[green]Configuration updated successfully.[/green]")


def interactive_main():
    config = load_runtime_config()

    while True:
        show_main_menu()
        choice = Prompt.ask("\nChoose an option", choices=["1", "2", "3", "4", "5"], default="5")

        if choice == "1":
            handle_run(config)
        elif choice == "2":
            handle_simulate_inputs(config)
        elif choice == "3":
            handle_inspect(config)
        elif choice == "4":
            handle_edit_config(config)
            config = load_runtime_config()
        elif choice == "5":
            console.print("[bold green]Goodbye![/bold green]")
            break

# === CLI Mode for Automation ===
def cli_main(args):
    config = load_runtime_config()
    max_steps = args.max_steps if args.max_steps is not None else config["max_steps"]
    logger = make_logger(config)

    if args.inputs:
        simulate_inputs(
            args.program,
            args.inputs,
            "results",
            batch_size=config["batch_size"],
            max_steps=max_steps,
            num_workers=config["cpu_workers"],
            blank=config["blank_symbol"],
            results_root=config["results_directory"],
            logger=logger
        )
    else:
        run_single(
            args.program,
            args.input,
            max_steps=max_steps,
            blank=config["blank_symbol"],
            trace=args.trace or config["trace"],
            trace_window=config["trace_window"],
            log_frequency=config["log_frequency"],
            logger=logger
        )

def main():
    parser = argparse.ArgumentParser(description="Quintuple Turing Machine Runner")
    parser.add_argument("--program", help="Run this .tm program immediately")
    parser.add_argument("--input", default="", help="Input tape for --program")
    parser.add_argument("--inputs", help="File of input tapes for --program (batch mode)")
    parser.add_argument("--max-steps", type=int, help="Override the configured step budget")
    parser.add_argument("--trace", action="store_true", help="Print the tape after every step")
    args = parser.parse_args()

    if args.program:
        cli_main(args)
    else:
        interactive_main()

if __name__ == "__main__":
    main()
