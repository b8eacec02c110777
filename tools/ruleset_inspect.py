import argparse

from simulator.tape import BLANK, Direction
from tools.program_loader import format_symbols, load_program

MOVE_LETTERS = {Direction.LEFT: "L", Direction.RIGHT: "R", Direction.STAY: "N"}


def symbol_columns(program, blank=BLANK):
    """Symbols read by any rule, blank last."""
    symbols = {rule.read for rule in program.table}
    ordered = sorted((s for s in symbols if s != blank), key=str)
    if blank in symbols:
        ordered.append(blank)
    return ordered


def build_table_rows(program, blank=BLANK):
    """One row per state: the state label followed by one action per symbol column."""
    states = sorted(program.table.states() | program.halting_states | program.error_states)
    columns = symbol_columns(program, blank)

    rows = []
    for state in states:
        label = f"{'+' if state == program.initial_state else ''}{state}"
        row = [label]
        for symbol in columns:
            if state in program.halting_states:
                row.append("HALT")
            elif state in program.error_states:
                row.append("ERROR")
            else:
                action = program.table.lookup(state, symbol)
                if action is None:
                    row.append("---")
                else:
                    write = format_symbols([action.write], blank)
                    row.append(f"{write}{MOVE_LETTERS[action.direction]}{action.next_state}")
        rows.append(row)
    return columns, rows


def pretty_print_ruleset(program, blank=BLANK):
    """Pretty print the program as a state x symbol table."""
    columns, rows = build_table_rows(program, blank)
    headers = [format_symbols([symbol], blank) for symbol in columns]

    # === Terminal Human-Readable Table ===
    print("\n=== Transition Table ===")
    print("\t".join([" "] + headers))
    for row in rows:
        print("\t".join([f"State {row[0]}"] + row[1:]))

    # === LaTeX Table Output ===
    print("\n=== LaTeX Table ===")
    print(r"\begin{array}{c|" + "c" * len(columns) + "}")
    print("State/Symbol & " + " & ".join([f"\\text{{{h}}}" for h in headers]) + r" \\ \hline")
    for row in rows:
        print(" & ".join(row) + r" \\")
    print(r"\end{array}")


def main():
    parser = argparse.ArgumentParser(description="Transition Table Inspector")
    parser.add_argument("--program", required=True, help="Path to a .tm program file")
    args = parser.parse_args()

    program = load_program(args.program)
    print(f"[INFO] Program {args.program}")
    print(f"  Fingerprint: {program.fingerprint()}")
    print(f"  Rules: {len(program.table)}")
    print(f"  Initial state: {program.initial_state}")
    print(f"  Halting states: {sorted(program.halting_states)}")
    if program.error_states:
        print(f"  Error states: {sorted(program.error_states)}")

    pretty_print_ruleset(program)


if __name__ == "__main__":
    main()
