# tools/simulate_program.py

import argparse
import json
from pathlib import Path
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from logger.logger import JSONLogger
from simulator.errors import ConfigurationError
from simulator.parser import parse_file
from simulator.turing_machine import TuringMachine

# === Headless Simulation ===
def simulate_single(path, max_steps=10000):
    """Run one program to completion (or max_steps) and summarise the result."""
    table = parse_file(path)
    entry = {
        "program": str(path),
        "rules": len(table),
        "warnings": len(table.warnings),
    }
    try:
        machine = TuringMachine(table)
    except ConfigurationError as e:
        entry.update({"steps_taken": 0, "halted": False, "error": str(e)})
        return entry

    steps = machine.run(max_steps=max_steps)
    entry.update({
        "steps_taken": steps,
        "halted": machine.halted,
        "error": machine.error,
        "final_state": machine.state.current_state,
        "tape": machine.state.tape_text(),
    })
    return entry

# === Utility Loaders ===
def load_program_pool(program_pool_file):
    with open(program_pool_file, "r", encoding="utf-8") as f:
        programs = [line.strip() for line in f if line.strip()]
    return programs

def load_checkpoint(checkpoint_path):
    if checkpoint_path.exists():
        with open(checkpoint_path, "r", encoding="utf-8") as f:
            checkpoint = json.load(f)
        return checkpoint.get("completed", [])
    return []

def save_checkpoint(completed, checkpoint_path):
    with open(checkpoint_path, "w", encoding="utf-8") as f:
        json.dump({"completed": completed}, f, indent=4)

def console_message(msg):
    print(f"[simulate_program] {msg}")

# === Main Simulation Runner ===
def simulate_pool(program_pool_file, results_root="results", output_name="results", batch_size=64, max_steps=10000, logger=None):
    pool_name = Path(program_pool_file).stem
    results_folder = Path(results_root) / pool_name
    results_folder.mkdir(parents=True, exist_ok=True)
    results_file = results_folder / f"{output_name}.jsonl"
    checkpoint_file = results_folder / f"{output_name}_checkpoint.json"

    all_programs = load_program_pool(program_pool_file)
    completed = load_checkpoint(checkpoint_file)

    pending_programs = [p for p in all_programs if p not in completed]
    console_message(f"Loaded {len(all_programs):,} total programs. {len(pending_programs):,} pending.")

    with open(results_file, "a", encoding="utf-8") as results_fh:
        for batch_start in range(0, len(pending_programs), batch_size):
            batch = pending_programs[batch_start:batch_start + batch_size]

            with Progress(
                    SpinnerColumn(),
                    BarColumn(),
                    "[progress.percentage]{task.percentage:>3.0f}%",
                    TextColumn("{task.completed}/{task.total} Programs"),
                    TimeElapsedColumn()
            ) as progress:

                task = progress.add_task("[cyan]Simulating...", total=len(batch))

                batch_results = []

                for program in batch:
                    try:
                        entry = simulate_single(program, max_steps=max_steps)
                    except OSError as e:
                        console_message(f"[WARNING] Failed to read {program}: {e}")
                    else:
                        batch_results.append(entry)
                        completed.append(program)
                    progress.update(task, advance=1)

                # === BULK WRITE once per batch ===
                for entry in batch_results:
                    results_fh.write(json.dumps(entry) + "\n")
                results_fh.flush()

                if logger is not None:
                    logger.log_halting([e for e in batch_results if e["halted"]])
                    logger.log_errors([e for e in batch_results if e["error"]])

                save_checkpoint(completed, checkpoint_file)
                console_message("[INFO] Batch completed. Checkpoint saved.")

    console_message("[SUCCESS] All programs simulated. Results saved.")
    return results_file


# === CLI ===
def main():
    parser = argparse.ArgumentParser(description="Simulate a pool of Turing programs with checkpointing.")
    parser.add_argument("--pool", required=True, help="Path to program pool file (one path per line)")
    parser.add_argument("--results", default="results", help="Results root folder (default: results)")
    parser.add_argument("--output", default="results", help="Output result file name (default: results)")
    parser.add_argument("--batch_size", type=int, default=64, help="Batch size per save/checkpoint")
    parser.add_argument("--max_steps", type=int, default=10000, help="Maximum steps before timeout")
    parser.add_argument("--log_dir", default="logs/", help="Directory for halting/error summaries")
    args = parser.parse_args()

    simulate_pool(
        args.pool,
        args.results,
        args.output,
        batch_size=args.batch_size,
        max_steps=args.max_steps,
        logger=JSONLogger(output_directory=args.log_dir)
    )

if __name__ == "__main__":
    main()
