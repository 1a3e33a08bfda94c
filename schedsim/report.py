from __future__ import annotations

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from .errors import EmptyProcessSetError
from .gantt import build_rich_gantt, render_gantt
from .metrics import summarize_process_metrics
from .models import Process, ScheduleResult

HEADERS = ["Process ID", "Arrival Time", "Burst Time", "Waiting Time", "Turnaround Time"]


def build_process_table(label: str, processes: List[Process]) -> Table:
    """
    Per-process results in the list's current order.
    """
    if not processes:
        raise EmptyProcessSetError(f"No processes to report for {label}")

    table = Table(title=f"Results for {label}", box=box.SIMPLE_HEAVY)
    for h in HEADERS:
        table.add_column(h, justify="center" if h == "Process ID" else "right")

    for p in processes:
        table.add_row(
            str(p.pid),
            str(p.arrival_time),
            str(p.burst_time),
            str(p.waiting_time),
            str(p.turnaround_time),
        )
    return table


def print_report(
    label: str,
    processes: List[Process],
    console: Optional[Console] = None,
) -> dict:
    """
    Print the results table followed by the average waiting and turnaround
    times, and return those averages.
    """
    console = console or Console()

    table = build_process_table(label, processes)
    summary = summarize_process_metrics(processes)

    console.print(table)
    console.print(f"[bold]Average Waiting Time:[/bold] {summary['avg_waiting']:.2f}")
    console.print(f"[bold]Average Turnaround Time:[/bold] {summary['avg_turnaround']:.2f}")
    console.print()
    return summary


def print_result(result: ScheduleResult, console: Optional[Console] = None, gantt: bool = True) -> dict:
    console = console or Console()

    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    if gantt and (console.no_color or console.color_system is None):
        # Coloured blocks are invisible without colour; draw the ASCII chart.
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    elif gantt:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    summary = print_report(result.algorithm, result.processes, console=console)

    if result.system:
        sys = result.system
        console.print(
            f"[dim]Makespan {sys.makespan}, throughput {sys.throughput:.3f} proc/time, "
            f"CPU utilization {sys.cpu_utilization * 100:.1f}%[/dim]"
        )
        console.print()
    return summary


def build_comparison_table(results: List[ScheduleResult], title: str = "Algorithm comparison") -> Table:
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    table.add_column("Algorithm")
    table.add_column("Quantum", justify="right")
    table.add_column("Avg waiting", justify="right")
    table.add_column("Avg turnaround", justify="right")
    table.add_column("Makespan", justify="right")

    for result in results:
        summary = summarize_process_metrics(result.processes)
        table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            "" if result.system is None else str(result.system.makespan),
        )
    return table
