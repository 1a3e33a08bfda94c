from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from .algorithms import ALGORITHMS, run_algorithm, run_all, validate_quantum
from .errors import SchedulerError
from .models import Process, validate_processes
from .report import build_comparison_table, print_result
from .workload_io import DEFAULT_QUANTUM, load_workload, sample_processes

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, SRT, RR).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every scheduling decision.",
    )

    # Options shared by every subcommand.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV workload file (default: built-in sample workload).",
    )
    common.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser(
        "run",
        parents=[common],
        help="Run one scheduling algorithm on a workload.",
    )
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHMS)}).",
    )
    run_parser.add_argument(
        "--no-gantt",
        dest="gantt",
        action="store_false",
        help="Do not draw the Gantt chart.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        parents=[common],
        help="Run several algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHMS),
        help=f"Algorithms to compare (default: {' '.join(ALGORITHMS)}).",
    )

    all_parser = subparsers.add_parser(
        "all",
        parents=[common],
        help="Run every algorithm and print the full report for each.",
    )
    all_parser.add_argument(
        "--gantt",
        dest="gantt",
        action="store_true",
        help="Also draw a Gantt chart for each algorithm.",
    )

    return parser


def configure_logging(verbose: bool, console: Console) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_processes(workload: Optional[str]) -> List[Process]:
    if workload is None:
        logger.info("No workload given; using the built-in sample")
        return sample_processes()
    return load_workload(Path(workload))


def main(argv: list[str] | None = None, console: Optional[Console] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = console or Console()
    configure_logging(args.verbose, console)

    try:
        processes = _load_processes(args.workload)
        validate_processes(processes)

        if args.command == "run":
            result = run_algorithm(args.algorithm, processes, quantum=args.quantum)
            print_result(result, console=console, gantt=args.gantt)
            return 0

        if args.command == "compare":
            if "rr" in [a.lower() for a in args.algorithms]:
                validate_quantum(args.quantum)
            results = [run_algorithm(alg, processes, quantum=args.quantum) for alg in args.algorithms]
            console.print(build_comparison_table(results))
            return 0

        if args.command == "all":
            for result in run_all(processes, quantum=args.quantum):
                print_result(result, console=console, gantt=args.gantt)
            return 0
    except (SchedulerError, OSError) as exc:
        logger.debug("Aborting", exc_info=True)
        console.print(f"[red]Error: {exc}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
