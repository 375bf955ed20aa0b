import json
from pathlib import Path

from logger.logger import JSONLogger
from simulator.parser import parse_file
from tools.pool_builder import collect_programs, write_pool
from tools.program_inspect import latex_table, pretty_print_table, transition_grid
from tools.simulate_program import load_program_pool, simulate_pool, simulate_single

PROGRAMS = Path(__file__).resolve().parent.parent / "programs"
BINARY_INCREMENT = PROGRAMS / "binary_increment.tm"


def test_transition_grid():
    symbols, rows = transition_grid(parse_file(BINARY_INCREMENT))
    assert symbols == ["1", "0", "_"]
    assert rows[0] == ["right", "1Rright", "0Rright", "_Lcarry"]
    assert rows[1] == ["carry", "0Lcarry", "1Ldone", "1Ldone"]
    assert rows[2] == ["done", "1Ndone", "0Ndone", "_Ndone"]


def test_transition_grid_marks_missing_rules():
    table = parse_file(PROGRAMS / "binary_decrement.tm")
    _, rows = transition_grid(table)
    borrow = next(row for row in rows if row[0] == "borrow")
    assert borrow[-1] == "---"


def test_latex_table(capsys):
    table = parse_file(BINARY_INCREMENT)
    latex = latex_table(table)
    assert latex.startswith(r"\begin{array}{c|ccc}")
    assert latex.endswith(r"\end{array}")
    pretty_print_table(table)
    out = capsys.readouterr().out
    assert "=== Transition Table ===" in out
    assert "right\t1Rright\t0Rright\t_Lcarry" in out


def test_collect_and_write_pool(tmp_path):
    programs = collect_programs(PROGRAMS)
    assert str(BINARY_INCREMENT) in programs
    assert programs == sorted(programs)
    assert collect_programs(tmp_path / "missing") == []

    pool = tmp_path / "pools" / "all.txt"
    write_pool(programs, pool)
    assert load_program_pool(pool) == programs


def test_simulate_single():
    entry = simulate_single(BINARY_INCREMENT)
    assert entry["halted"] is True
    assert entry["steps_taken"] == 8
    assert entry["tape"] == "1100_"
    assert entry["error"] is None


def test_simulate_single_reports_problems(tmp_path):
    empty = tmp_path / "empty.tm"
    empty.write_text("# nothing here\n", encoding="utf-8")
    assert simulate_single(empty)["error"] == "No valid transitions found in the state table"

    stuck = tmp_path / "stuck.tm"
    stuck.write_text('input: "x"\nstart state: s\ns:\n  a: {R: s}\n', encoding="utf-8")
    entry = simulate_single(stuck)
    assert entry["halted"] is False
    assert "'x'" in entry["error"]


def test_simulate_pool_with_checkpoint(tmp_path):
    stuck = tmp_path / "stuck.tm"
    stuck.write_text('input: "x"\nstart state: s\ns:\n  a: {R: s}\n', encoding="utf-8")
    pool = tmp_path / "pool.txt"
    write_pool([str(BINARY_INCREMENT), str(stuck), str(tmp_path / "missing.tm")], pool)
    logger = JSONLogger(output_directory=str(tmp_path / "logs"))

    results_file = simulate_pool(str(pool), results_root=tmp_path / "results", logger=logger)
    entries = [json.loads(line) for line in results_file.read_text(encoding="utf-8").splitlines()]
    assert [e["program"] for e in entries] == [str(BINARY_INCREMENT), str(stuck)]

    checkpoint = json.loads((results_file.parent / "results_checkpoint.json").read_text(encoding="utf-8"))
    assert checkpoint["completed"] == [str(BINARY_INCREMENT), str(stuck)]
    assert (tmp_path / "logs" / f"halting_{logger.today}.jsonl").exists()
    assert (tmp_path / "logs" / f"errors_{logger.today}.jsonl").exists()

    # completed programs are skipped on the next run
    simulate_pool(str(pool), results_root=tmp_path / "results")
    assert len(results_file.read_text(encoding="utf-8").splitlines()) == 2
