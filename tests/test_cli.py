import json
from pathlib import Path

import pytest

from scheduler_sim.cli import build_parser, main

WORKLOADS = Path(__file__).resolve().parents[1] / "workloads"
SAMPLE = str(WORKLOADS / "sample.json")
STARVATION = str(WORKLOADS / "starvation.csv")


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    # keep Rich from wrapping table cells
    monkeypatch.setenv("COLUMNS", "200")


def test_run_prints_tables(capsys):
    assert main(["run", "-a", "sjf", "-w", SAMPLE]) == 0
    out = capsys.readouterr().out
    assert "Shortest Job First" in out
    assert "Per-process metrics" in out
    assert "System metrics" in out
    assert "Starvation risk" not in out


def test_run_json(capsys):
    assert main(["run", "-a", "fcfs", "-w", SAMPLE, "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [s["processId"] for s in data["timeline"]] == [1, 2, 3, 4]
    assert [r["waitingTime"] for r in data["results"]] == [0, 3, 4, 10]
    assert "starvationRisk" not in data


def test_run_round_robin_uses_quantum(capsys):
    assert main(["run", "-a", "rr", "-w", SAMPLE, "-q", "3", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert all(s["end"] - s["start"] <= 3 for s in data["timeline"])
    assert data["timeline"][0] == {"processId": 1, "start": 0, "end": 3}


def test_run_priority_reports_starvation(capsys):
    assert main(["run", "-a", "priority", "-w", STARVATION, "--plain"]) == 0
    out = capsys.readouterr().out
    assert "Gantt Chart:" in out
    assert "Starvation risk" in out


def test_compare(capsys):
    assert main(["compare", "-w", SAMPLE, "-a", "fcfs", "rr"]) == 0
    out = capsys.readouterr().out
    assert "FCFS" in out
    assert "Round Robin" in out


def test_algorithms_listing(capsys):
    assert main(["algorithms"]) == 0
    out = capsys.readouterr().out
    for key in ("fcfs", "sjf", "priority", "rr"):
        assert key in out


def test_unknown_algorithm_is_an_input_error(capsys):
    assert main(["run", "-a", "lottery", "-w", SAMPLE]) == 2
    assert "Unknown algorithm" in capsys.readouterr().out


def test_invalid_workload_is_an_input_error(tmp_path: Path, capsys):
    p = tmp_path / "bad.json"
    p.write_text('[{"pid": 1, "arrival_time": 0, "burst_time": -4}]')
    assert main(["run", "-a", "fcfs", "-w", str(p)]) == 2
    assert "Invalid workload" in capsys.readouterr().out


def test_missing_workload_file(tmp_path: Path, capsys):
    assert main(["run", "-a", "fcfs", "-w", str(tmp_path / "nope.json")]) == 2
    assert "Error" in capsys.readouterr().out


@pytest.mark.parametrize("value", ["0", "-2", "abc", "nan", "inf"])
def test_quantum_must_be_positive(value):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["run", "-a", "rr", "-w", SAMPLE, "-q", value])


def test_fractional_quantum_parsed():
    args = build_parser().parse_args(["run", "-a", "rr", "-w", SAMPLE, "-q", "1.5"])
    assert args.quantum == 1.5
    args = build_parser().parse_args(["run", "-a", "rr", "-w", SAMPLE, "-q", "2"])
    assert args.quantum == 2 and isinstance(args.quantum, int)


def test_infinite_burst_is_an_input_error(tmp_path: Path, capsys):
    p = tmp_path / "huge.json"
    p.write_text('[{"pid": 1, "arrival_time": 0, "burst_time": 1e999}]')
    assert main(["run", "-a", "rr", "-w", str(p)]) == 2
    assert "Invalid workload" in capsys.readouterr().out
