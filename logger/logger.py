import json
import os
from datetime import datetime, timezone


def format_entry(entry: dict) -> str:
    """Render a step-log entry as a one-line debug console message."""
    event = entry.get("event")
    if event == "initialized":
        return (f"Initialized with {entry['transitions']} transitions\n"
                f"Initial state: {entry['state']}, Tape: {entry['tape']}")
    if event == "step":
        lines = [f"Step {entry['step']}: {entry['state']} read {entry['read']} -> {entry['next_state']}"]
        if entry.get("write") is not None:
            lines.append(f"  Write: {entry['write']}")
        move = entry.get("move")
        if move == "L":
            lines.append(f"  Move: Left to position {entry['head']}")
        elif move == "R":
            lines.append(f"  Move: Right to position {entry['head']}")
        else:
            lines.append("  Move: None (halt)")
        return "\n".join(lines)
    if event == "halted":
        return f"Machine halted at state {entry['state']}"
    if event == "already_halted":
        return "Machine already halted. Reset to run again."
    if event == "error":
        return f"ERROR: No transition for state {entry['state']}, symbol {entry['symbol']}"
    return json.dumps(entry)


class JSONLogger:
    """Step log for one machine session.

    Entries are kept in memory for the debug console and, when write_to_disk is
    set, appended as JSON lines to <prefix><date>.jsonl.
    """

    def __init__(self, output_directory="logs/", log_file_prefix="turing_", write_to_disk=True):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        self.write_to_disk = write_to_disk
        self.entries = []
        if self.write_to_disk:
            os.makedirs(self.output_directory, exist_ok=True)
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def _get_log_filename(self):
        filename = f"{self.log_file_prefix}{self.today}.jsonl"  # JSON lines format
        return os.path.join(self.output_directory, filename)

    def _log_to_file(self, filename, entries):
        if not self.write_to_disk:
            return
        path = os.path.join(self.output_directory, filename)
        with open(path, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    def log(self, entry: dict):
        """Log a single entry to the session and the main log."""
        self.entries.append(entry)
        if self.write_to_disk:
            with open(self.current_log, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry) + "\n")

    def log_batch(self, entries: list):
        """Log a batch of entries to the session and the main log."""
        self.entries.extend(entries)
        if self.write_to_disk:
            with open(self.current_log, "a", encoding="utf-8") as f:
                for entry in entries:
                    f.write(json.dumps(entry) + "\n")

    def clear(self):
        """Start a new session; on-disk history is kept."""
        self.entries = []
        self.rotate()

    def rotate(self):
        """Point the main log at today's (UTC) file."""
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def log_halting(self, entries: list):
        """Log summaries of machines that halted."""
        self._log_to_file(f"halting_{self.today}.jsonl", entries)

    def log_errors(self, entries: list):
        """Log summaries of machines stopped by a missing transition."""
        self._log_to_file(f"errors_{self.today}.jsonl", entries)

    def messages(self):
        return [format_entry(entry) for entry in self.entries]
