# tools/pool_builder.py

import argparse
from pathlib import Path
from rich.console import Console
from rich.prompt import Prompt, Confirm
from rich.table import Table

from simulator.parser import parse_file

console = Console()

def collect_programs(program_dir, pattern="*.tm"):
    """List program files under a directory, sorted by path."""
    program_dir = Path(program_dir)
    if not program_dir.exists():
        return []
    return sorted(str(path) for path in program_dir.glob(pattern))

def write_pool(programs, output_path):
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        for program in programs:
            f.write(program + "\n")

def build_pool(program_dir, output_path):
    programs = collect_programs(program_dir)
    if not programs:
        console.print(f"[red]No programs found in {program_dir}[/red]")
        return
    console.print(f"[green]Found {len(programs):,} programs in {program_dir}.[/green]")

    selected_programs = []

    while True:
        console.print("\n[bold cyan]Program Pool Builder Menu[/bold cyan]")
        console.print("[1] List programs")
        console.print("[2] Add a program by path")
        console.print("[3] Add all programs")
        console.print("[4] Save and exit")
        console.print("[5] Cancel and exit without saving")

        choice = Prompt.ask("\nChoose an option", choices=["1", "2", "3", "4", "5"], default="5")

        if choice == "1":
            table = Table(title="Available Programs")
            table.add_column("Path")
            table.add_column("Rules", justify="right")
            table.add_column("Warnings", justify="right")
            for path in programs:
                parsed = parse_file(path)
                table.add_row(path, str(len(parsed)), str(len(parsed.warnings)))
            console.print(table)

        elif choice == "2":
            path = Prompt.ask("Enter program path exactly (e.g., programs/binary_increment.tm)")
            if path in programs:
                if path not in selected_programs:
                    selected_programs.append(path)
                    console.print(f"[green]Added {path}.[/green]")
                else:
                    console.print(f"[yellow]{path} already in pool.[/yellow]")
            else:
                console.print(f"[red]Program {path} not found![/red]")

        elif choice == "3":
            confirm = Confirm.ask("Are you sure you want to add ALL programs?", default=False)
            if confirm:
                selected_programs.extend(p for p in programs if p not in selected_programs)
                console.print(f"[green]Added all {len(programs):,} programs.[/green]")

        elif choice == "4":
            if selected_programs:
                write_pool(selected_programs, output_path)
                console.print(f"[green]Saved pool with {len(selected_programs):,} programs to {output_path}.[/green]")
            else:
                console.print("[yellow]No programs selected, nothing saved.[/yellow]")
            break

        elif choice == "5":
            console.print("[red]Canceled. No pool saved.[/red]")
            break

def main():
    parser = argparse.ArgumentParser(description="Interactive Pool Builder for Turing programs")
    parser.add_argument("--programs", default="programs", help="Directory holding *.tm programs")
    parser.add_argument("--output", required=True, help="Path to save pool file (e.g., pools/all_programs.txt)")
    parser.add_argument("--all", action="store_true", help="Add every program without prompting")
    args = parser.parse_args()

    if args.all:
        programs = collect_programs(args.programs)
        write_pool(programs, args.output)
        console.print(f"[green]Saved pool with {len(programs):,} programs to {args.output}.[/green]")
    else:
        build_pool(args.programs, args.output)

if __name__ == "__main__":
    main()
