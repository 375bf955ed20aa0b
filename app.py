# app.py

import argparse
import json
from pathlib import Path

from rich.console import Console
from rich.live import Live
from rich.prompt import Prompt, IntPrompt, Confirm
from rich.table import Table
from rich.text import Text

from config.config_loader import load_config, save_config
from faq.faq import FAQ_DATA, FrequencyStore, ask, list_categories, find_category
from logger.logger import JSONLogger, format_entry
from simulator.errors import ConfigurationError
from simulator.graph_layout import layout
from simulator.parser import parse, parse_file
from simulator.runner import ContinuousRunner
from simulator.turing_machine import TuringMachine

CONFIG_PATH = "config/runtime_config.json"

console = Console()

# === Session ===
class Session:
    """The program text, its parsed table and the running machine."""

    def __init__(self, config):
        self.config = config
        self.source = ""
        self.source_name = None
        self.table = None
        self.machine = None
        self.logger = JSONLogger(
            output_directory=config["output_directory"],
            log_file_prefix=config["log_file_prefix"],
            write_to_disk=config["log_steps"],
        )

    def load(self, path):
        with open(path, "r", encoding="utf-8") as f:
            self.source = f.read()
        self.source_name = str(path)
        self.table = None
        self.machine = None

    def initialize(self):
        """Parse the source and build a fresh machine. Returns False on error."""
        self.table = parse(self.source)
        for warning in self.table.warnings:
            console.print(Text(f"Skipped {warning}", style="yellow"))
        try:
            self.machine = TuringMachine(self.table, logger=self.logger)
        except ConfigurationError as e:
            self.machine = None
            console.print(Text(f"Error: {e}", style="red"))
            return False
        self.print_log(len(self.logger.entries))
        return True

    def print_log(self, count=1):
        for entry in self.logger.entries[-count:]:
            style = "red" if entry.get("event") == "error" else "green" if entry.get("event") == "step" else None
            console.print(Text(format_entry(entry), style=style))

# === Rendering ===
def render_machine(machine, window):
    state = machine.state
    table = Table(show_header=False, box=None)
    table.add_row(Text(machine.render_tape(window)))
    table.add_row(Text(f"Position: {state.head_position}"))
    table.add_row(Text(f"Current State: {state.current_state}   Steps: {state.step_count}"))
    if state.halted:
        table.add_row(Text("Computation Complete", style="bold green"))
    if machine.error:
        table.add_row(Text(f"Error: {machine.error}", style="red"))
    return table

def render_graph(graph):
    table = Table(title="State Graph", show_header=True, header_style="bold magenta")
    table.add_column("State")
    table.add_column("Position", justify="right")
    table.add_column("Flags")
    for node in graph.nodes:
        flags = [name for name, on in (("start", node.is_start), ("final", node.is_final), ("active", node.is_active)) if on]
        table.add_row(Text(node.name), f"({node.x:.1f}, {node.y:.1f})", ", ".join(flags))

    edges = Table(show_header=True, header_style="bold magenta")
    edges.add_column("Edge")
    edges.add_column("Label")
    for edge in graph.edges:
        style = "green" if edge.is_active else None
        edges.add_row(Text(f"{edge.source} -> {edge.target}", style=style), Text(edge.label, style=style))
    return table, edges

# === Menu ===
def show_main_menu(session):
    console.print("\n[bold cyan]Turing Machine Simulator[/bold cyan]")
    if session.source_name:
        console.print(f"[gray]Program: {session.source_name}[/gray]")
    console.print("[1] Load Program")
    console.print("[2] Parse & Initialize")
    console.print("[3] Step")
    console.print("[4] Run")
    console.print("[5] Show State Graph")
    console.print("[6] Help")
    console.print("[7] Edit Config")
    console.print("[8] Exit")

def handle_load(session):
    path = Prompt.ask("Program file", default=session.config["default_program"])
    if not Path(path).exists():
        console.print(f"[red]Program file {path} not found.[/red]")
        return
    session.load(path)
    console.print(f"[green]Loaded {path}.[/green]")
    session.initialize()

def handle_step(session):
    if session.machine is None:
        session.initialize()
        return
    session.machine.step()
    session.print_log()
    console.print(render_machine(session.machine, session.config["tape_window"]))

def handle_run(session):
    if session.machine is None and not session.initialize():
        return
    if session.machine.halted:
        console.print("[yellow]Machine already halted. Reset to run again.[/yellow]")
        return

    speed = IntPrompt.ask("Speed (1-100)", default=session.config["speed"])
    window = session.config["tape_window"]
    with Live(render_machine(session.machine, window), console=console, refresh_per_second=20) as live:
        runner = ContinuousRunner(
            session.machine,
            speed=max(1, min(100, speed)),
            on_step=lambda machine: live.update(render_machine(machine, window)),
        )
        try:
            runner.start(max_ticks=session.config["max_steps"])
        except KeyboardInterrupt:
            runner.stop()
            console.print("[yellow]Run paused.[/yellow]")

    if session.machine.error:
        console.print(Text(f"Error: {session.machine.error}", style="red"))

def handle_graph(session):
    if session.table is None:
        console.print("[red]Parse a program first.[/red]")
        return
    current = session.machine.state.current_state if session.machine else ""
    graph = layout(session.table, current, start_state=session.config["graph_start_state"])
    for table in render_graph(graph):
        console.print(table)

    if Confirm.ask("Export graph as JSON?", default=False):
        path = Prompt.ask("Output file", default="graph.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump(graph.to_dict(), f, indent=4)
        console.print(f"[green]Graph written to {path}.[/green]")

def handle_help(config):
    store = FrequencyStore(config["faq_counter_file"])
    console.print(f"\n[bold]{FAQ_DATA['welcome_message']}[/bold]")
    categories = list_categories()
    for idx, (_, name) in enumerate(categories):
        console.print(f"[{idx}] {name}")
    idx_choice = IntPrompt.ask("Choose a topic by Index")
    if idx_choice < 0 or idx_choice >= len(categories):
        console.print("[red]Invalid choice.[/red]")
        return

    category = find_category(categories[idx_choice][0])
    for idx, question in enumerate(category["questions"]):
        console.print(f"[{idx}] {question['text']}")
    q_choice = IntPrompt.ask("Choose a question by Index")
    if q_choice < 0 or q_choice >= len(category["questions"]):
        console.print("[red]Invalid choice.[/red]")
        return
    answer = ask(category["id"], category["questions"][q_choice]["id"], store=store)
    console.print(f"\n{answer}")

def handle_edit_config(config):
    console.print("\n[bold]Edit Configuration[/bold]")

    speed = IntPrompt.ask("Speed (1-100)", default=config["speed"])
    max_steps = IntPrompt.ask("Max Steps per run", default=config["max_steps"])
    tape_window = IntPrompt.ask("Visible tape cells", default=config["tape_window"])
    log_steps = Confirm.ask("Write step log to disk?", default=config["log_steps"])
    default_program = Prompt.ask("Default program", default=config["default_program"])
    graph_start_state = Prompt.ask("State drawn as start node", default=config["graph_start_state"])

    updated = dict(config)
    updated.update({
        "speed": speed,
        "max_steps": max_steps,
        "tape_window": tape_window,
        "log_steps": log_steps,
        "default_program": default_program,
        "graph_start_state": graph_start_state
    })

    try:
        save_config(updated, CONFIG_PATH)
    except (TypeError, ValueError) as e:
        console.print(f"[red]Configuration not saved: {e}[/red]")
        return config
    console.print("[green]Configuration updated successfully.[/green]")
    return updated

def interactive_main(config):
    session = Session(config)
    if Path(config["default_program"]).exists():
        session.load(config["default_program"])

    while True:
        show_main_menu(session)
        choice = Prompt.ask("\nChoose an option", choices=["1", "2", "3", "4", "5", "6", "7", "8"], default="8")

        if choice == "1":
            handle_load(session)
        elif choice == "2":
            session.initialize()
        elif choice == "3":
            handle_step(session)
        elif choice == "4":
            handle_run(session)
        elif choice == "5":
            handle_graph(session)
        elif choice == "6":
            handle_help(config)
        elif choice == "7":
            config = handle_edit_config(config)
            session.config = config
        elif choice == "8":
            console.print("[bold green]Goodbye![/bold green]")
            break

# === CLI Mode for Automation ===
def cli_main(args, config):
    table = parse_file(args.program)
    for warning in table.warnings:
        console.print(Text(f"Skipped {warning}", style="yellow"))

    logger = JSONLogger(
        output_directory=config["output_directory"],
        log_file_prefix=config["log_file_prefix"],
        write_to_disk=config["log_steps"],
    )
    try:
        machine = TuringMachine(table, logger=logger)
    except ConfigurationError as e:
        console.print(Text(f"Error: {e}", style="red"))
        return 1

    if args.run:
        max_steps = args.max_steps or config["max_steps"]
        if args.speed:
            try:
                runner = ContinuousRunner(machine, speed=args.speed,
                                          on_step=lambda m: console.print(render_machine(m, config["tape_window"])))
            except ValueError as e:
                console.print(f"[red]Error: {e}[/red]")
                return 1
            runner.start(max_ticks=max_steps)
        else:
            machine.run(max_steps=max_steps)
        console.print(render_machine(machine, config["tape_window"]))
        console.print(f"Final tape: {machine.state.tape_text()}", markup=False)

    if args.graph_json:
        graph = layout(table, machine.state.current_state, start_state=config["graph_start_state"])
        with open(args.graph_json, "w", encoding="utf-8") as f:
            json.dump(graph.to_dict(), f, indent=4)
        console.print(f"[green]Graph written to {args.graph_json}[/green]")

    return 1 if machine.error else 0

def main():
    parser = argparse.ArgumentParser(description="Turing Machine Simulator")
    parser.add_argument("--config", default=CONFIG_PATH, help="Path to runtime_config.json")
    parser.add_argument("--program", help="Program file to load (runs non-interactively)")
    parser.add_argument("--run", action="store_true", help="Run the program until it halts")
    parser.add_argument("--max-steps", type=int, help="Step budget for --run")
    parser.add_argument("--speed", type=int, help="Animate --run at this speed (1-100)")
    parser.add_argument("--graph-json", help="Write the state graph layout to this file")
    args = parser.parse_args()

    try:
        config = load_config(args.config, verbose=False)
    except (FileNotFoundError, TypeError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    if args.program:
        raise SystemExit(cli_main(args, config))
    interactive_main(config)

if __name__ == "__main__":
    main()
