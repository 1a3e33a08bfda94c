from __future__ import annotations

from typing import List

from .errors import EmptyProcessSetError
from .models import Process, ScheduleResult, SystemMetrics


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization given completed processes and
    timeline slices.
    """
    if not result.processes:
        raise EmptyProcessSetError("Cannot compute metrics for an empty schedule")

    makespan = max(s.end_time for s in result.timeline) if result.timeline else 0
    cpu_busy_time = sum(slice_.end_time - slice_.start_time for slice_ in result.timeline)

    throughput = len(result.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
    result.system = system
    return system


def summarize_process_metrics(processes: List[Process]) -> dict:
    """
    Return the average waiting and turnaround time of completed processes.
    """
    if not processes:
        raise EmptyProcessSetError("Cannot average an empty process list")

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
    }
