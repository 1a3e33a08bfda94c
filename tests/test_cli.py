from pathlib import Path

from rich.console import Console

from schedsim.cli import build_parser, main


def _run(argv):
    console = Console(record=True, width=200, color_system=None)
    code = main(argv, console=console)
    return code, console.export_text()


def test_all_uses_sample_workload_by_default():
    code, out = _run(["all"])
    assert code == 0
    for label in (
        "First-Come, First-Serve (FCFS)",
        "Shortest Job First (SJF)",
        "Shortest Remaining Time (SRT)",
        "Round Robin (RR)",
    ):
        assert f"Results for {label}" in out
    assert "Average Waiting Time: 8.75" in out
    assert "Average Waiting Time: 7.75" in out
    assert "Average Waiting Time: 6.50" in out
    assert "Average Waiting Time: 13.00" in out


def test_run_single_algorithm_from_file(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("arrival_time,burst_time\n0,2\n1,1\n")
    code, out = _run(["run", "-a", "srt", "-w", str(p), "--no-gantt"])
    assert code == 0
    assert "Results for Shortest Remaining Time (SRT)" in out
    assert "Gantt Chart" not in out


def test_compare_subset():
    code, out = _run(["compare", "-a", "fcfs", "rr", "-q", "3"])
    assert code == 0
    assert "Algorithm comparison" in out
    assert "Round Robin (RR)" in out
    assert "Shortest Job First (SJF)" not in out


def test_bad_quantum_exits_with_error():
    code, out = _run(["all", "-q", "0"])
    assert code == 2
    assert "positive quantum" in out
    assert "Results for" not in out


def test_unknown_algorithm_exits_with_error():
    code, out = _run(["run", "-a", "lottery"])
    assert code == 2
    assert "Unknown algorithm" in out


def test_missing_workload_file(tmp_path: Path):
    code, out = _run(["run", "-a", "fcfs", "-w", str(tmp_path / "missing.json")])
    assert code == 2
    assert "Error" in out


def test_parser_defaults():
    args = build_parser().parse_args(["run", "-a", "rr"])
    assert args.quantum == 3
    assert args.workload is None
    assert args.gantt is True
    assert args.verbose is False


def test_undecodable_workload_exits_with_error(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_bytes(b"arrival_time,burst_time\n0,\xff3\n")
    code, out = _run(["run", "-a", "fcfs", "-w", str(p)])
    assert code == 2
    assert "Error" in out
