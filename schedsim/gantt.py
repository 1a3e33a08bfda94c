from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _label(pid: int, width: int) -> str:
    return f"P{pid}"[:width].ljust(width)


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart: one column per time unit, ``.`` for idle time.
    """
    if not slices:
        return "(no execution)"

    slices = sorted(slices, key=lambda s: (s.start_time, s.end_time))

    line = "|"
    labels = " "
    time_marks = "0"
    last_time = 0

    for sl in slices:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            line += "." * idle_gap
            labels += " " * idle_gap
            last_time = sl.start_time
            time_marks += f" {last_time}"

        width = sl.end_time - sl.start_time
        line += "=" * width
        labels += _label(sl.pid, width)
        last_time = sl.end_time
        time_marks += f" {last_time}"

    line += "|"

    return "\n".join(["Gantt Chart:", line, labels, time_marks])


def build_rich_gantt(slices: List[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with the
    slice boundaries.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart"), ""

    slices = sorted(slices, key=lambda s: (s.start_time, s.end_time))
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = COLORS[len(pid_to_color) % len(COLORS)]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    boundaries = ["0"]
    last_time = 0

    for sl in slices:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            timeline.append("." * idle_gap, style="dim")
            labels.append(" " * idle_gap)
            boundaries.append(str(sl.start_time))

        width = sl.end_time - sl.start_time
        timeline.append(" " * width, style=f"on {pid_color(sl.pid)}")
        labels.append(_label(sl.pid, width), style="bold")

        last_time = sl.end_time
        boundaries.append(str(last_time))

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    return Panel.fit(table, title="Gantt Chart"), " ".join(boundaries)
