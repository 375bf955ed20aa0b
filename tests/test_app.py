import argparse
import json
from pathlib import Path

from app import cli_main, render_graph
from config.config_loader import DEFAULT_CONFIG
from simulator.graph_layout import layout
from simulator.parser import parse_file

PROGRAMS = Path(__file__).resolve().parent.parent / "programs"


def make_args(program, **overrides):
    values = {"program": str(program), "run": True, "max_steps": None, "speed": None, "graph_json": None}
    values.update(overrides)
    return argparse.Namespace(**values)


def make_config(tmp_path):
    return dict(DEFAULT_CONFIG, output_directory=str(tmp_path / "logs"), log_steps=False)


def test_cli_runs_program_and_exports_graph(tmp_path, capsys):
    graph_file = tmp_path / "graph.json"
    code = cli_main(make_args(PROGRAMS / "binary_increment.tm", graph_json=str(graph_file)), make_config(tmp_path))
    assert code == 0
    assert "Final tape: 1100_" in capsys.readouterr().out

    graph = json.loads(graph_file.read_text(encoding="utf-8"))
    assert graph["states"] == ["right", "carry", "done"]
    assert [node["active"] for node in graph["nodes"]] == [False, False, True]


def test_cli_reports_missing_rule(tmp_path):
    program = tmp_path / "stuck.tm"
    program.write_text('input: "x"\nstart state: s\ns:\n  a: {R: s}\n', encoding="utf-8")
    assert cli_main(make_args(program), make_config(tmp_path)) == 1


def test_cli_rejects_empty_program(tmp_path, capsys):
    program = tmp_path / "empty.tm"
    program.write_text("hello\n", encoding="utf-8")
    assert cli_main(make_args(program), make_config(tmp_path)) == 1
    assert "No valid transitions" in capsys.readouterr().out


def test_cli_animated_run(tmp_path, monkeypatch):
    monkeypatch.setattr("simulator.runner.time.sleep", lambda seconds: None)
    code = cli_main(make_args(PROGRAMS / "binary_decrement.tm", speed=100), make_config(tmp_path))
    assert code == 0


def test_cli_writes_step_log(tmp_path):
    config = dict(make_config(tmp_path), log_steps=True)
    cli_main(make_args(PROGRAMS / "binary_increment.tm"), config)
    logs = list((tmp_path / "logs").glob("turing_*.jsonl"))
    assert len(logs) == 1
    assert len(logs[0].read_text(encoding="utf-8").splitlines()) == 10


def test_render_graph_tables():
    graph = layout(parse_file(PROGRAMS / "binary_increment.tm"), "right")
    nodes, edges = render_graph(graph)
    assert nodes.row_count == 3
    assert edges.row_count == 5
