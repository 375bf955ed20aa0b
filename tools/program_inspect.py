import argparse

from simulator.graph_layout import layout
from simulator.parser import parse_file


def transition_grid(table):
    """Rows of a state x symbol table in compact <write><move><next> notation."""
    symbols = table.symbols()
    rows = []
    for state in table.states():
        row = [state]
        for symbol in symbols:
            rule = table.lookup(state, symbol)
            if rule is None:
                row.append("---")
            else:
                written = symbol if rule.write_symbol is None else rule.write_symbol
                row.append(f"{written}{rule.move.value}{rule.to_state}")
        rows.append(row)
    return symbols, rows


def latex_table(table):
    symbols, rows = transition_grid(table)
    lines = [r"\begin{array}{c|" + "c" * len(symbols) + "}"]
    lines.append("State/Symbol & " + " & ".join([f"\\text{{{s}}}" for s in symbols]) + r" \\ \hline")
    for row in rows:
        lines.append(" & ".join(f"\\text{{{cell}}}" for cell in row) + r" \\")
    lines.append(r"\end{array}")
    return "\n".join(lines)


def pretty_print_table(table):
    """Pretty print the table as a state x symbol grid, then as LaTeX."""
    print("\n=== Transition Table ===")
    symbols, rows = transition_grid(table)
    print("\t".join([" "] + symbols))
    for row in rows:
        print("\t".join(row))

    print("\n=== LaTeX Table ===")
    print(latex_table(table))

def main():
    parser = argparse.ArgumentParser(description="Turing Program Inspector")
    parser.add_argument("--program", required=True, help="Path to a program file, e.g., programs/binary_increment.tm")
    parser.add_argument("--graph", action="store_true", help="Also print the state graph layout")
    args = parser.parse_args()

    table = parse_file(args.program)
    print(f"[INFO] Program {args.program}")
    print(f"  Start state: {table.initial_state}")
    print(f"  Blank: {table.blank_symbol}")
    print(f"  Input: {''.join(table.initial_tape)}")
    print(f"  Rules: {len(table)}")
    for warning in table.warnings:
        print(f"[WARNING] {warning}")

    pretty_print_table(table)

    if args.graph:
        print("\n=== State Graph ===")
        graph = layout(table, table.initial_state)
        for node in graph.nodes:
            flags = [name for name, on in (("start", node.is_start), ("final", node.is_final)) if on]
            print(f"  {node.name} ({node.x:.1f}, {node.y:.1f}) {' '.join(flags)}")
        for edge in graph.edges:
            print(f"  {edge.source} -> {edge.target}: {edge.label}")

if __name__ == "__main__":
    main()
