from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Tuple

from .errors import (
    DuplicatePidError,
    EmptyProcessSetError,
    InvalidArrivalTimeError,
    InvalidBurstTimeError,
)


@dataclass
class Process:
    """
    One process of a workload.

    ``waiting_time`` and ``turnaround_time`` stay ``None`` until a scheduler
    completes the process. ``remaining_time`` is only consumed by the
    preemptive disciplines.
    """

    pid: int
    arrival_time: int
    burst_time: int
    waiting_time: Optional[int] = None
    turnaround_time: Optional[int] = None
    remaining_time: Optional[int] = None

    def __post_init__(self) -> None:
        if self.remaining_time is None:
            self.remaining_time = self.burst_time

    @property
    def completed(self) -> bool:
        return self.turnaround_time is not None


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[Process] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    system: Optional[SystemMetrics] = None


def build_processes(pairs: Iterable[Tuple[int, int]]) -> List[Process]:
    """
    Build the canonical process list from ``(arrival_time, burst_time)`` pairs.

    Pids are assigned from the 1-based position of each pair.
    """
    processes = [
        Process(pid=idx, arrival_time=int(arrival), burst_time=int(burst))
        for idx, (arrival, burst) in enumerate(pairs, start=1)
    ]
    validate_processes(processes)
    return processes


def validate_processes(processes: List[Process]) -> None:
    if not processes:
        raise EmptyProcessSetError("Workload contains no processes")

    seen = set()
    for p in processes:
        if p.pid in seen:
            raise DuplicatePidError(f"Process id {p.pid} appears more than once")
        seen.add(p.pid)
        if p.burst_time <= 0:
            raise InvalidBurstTimeError(
                f"Process {p.pid} has burst time {p.burst_time}; burst time must be positive"
            )
        if p.arrival_time < 0:
            raise InvalidArrivalTimeError(
                f"Process {p.pid} has arrival time {p.arrival_time}; arrival time must not be negative"
            )


def copy_processes(processes: Iterable[Process]) -> List[Process]:
    """
    Return fresh, unscheduled copies of ``processes``, preserving order.
    """
    return [
        replace(p, waiting_time=None, turnaround_time=None, remaining_time=p.burst_time)
        for p in processes
    ]
