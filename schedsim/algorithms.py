from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional

from .errors import InvalidQuantumError, StarvationGuardError, UnknownAlgorithmError
from .metrics import compute_system_metrics
from .models import Process, ScheduleResult, ScheduledSlice, copy_processes, validate_processes

logger = logging.getLogger(__name__)

FCFS_LABEL = "First-Come, First-Serve (FCFS)"
SJF_LABEL = "Shortest Job First (SJF)"
SRT_LABEL = "Shortest Remaining Time (SRT)"
RR_LABEL = "Round Robin (RR)"


def _append_slice(timeline: List[ScheduledSlice], pid: int, start_time: int, end_time: int) -> None:
    # Back-to-back runs of the same process are one slice on the chart.
    if timeline and timeline[-1].pid == pid and timeline[-1].end_time == start_time:
        timeline[-1].end_time = end_time
        return
    timeline.append(ScheduledSlice(pid=pid, start_time=start_time, end_time=end_time))


def _complete(p: Process, completion_time: int) -> None:
    p.turnaround_time = completion_time - p.arrival_time
    p.waiting_time = p.turnaround_time - p.burst_time
    logger.debug(
        "P%d completed at t=%d (waiting=%d, turnaround=%d)",
        p.pid,
        completion_time,
        p.waiting_time,
        p.turnaround_time,
    )


def _next_arrival(pending: List[Process], time: int) -> int:
    """
    Earliest arrival strictly after ``time`` among ``pending`` processes.

    Raises StarvationGuardError when nothing is left to arrive, since the
    calling loop would otherwise never finish.
    """
    future = [p.arrival_time for p in pending if p.arrival_time > time]
    if not future:
        raise StarvationGuardError(
            f"No process can become ready after t={time} but "
            f"{len(pending)} process(es) are unfinished"
        )
    nxt = min(future)
    logger.debug("CPU idle from t=%d to t=%d", time, nxt)
    return nxt


def _finish(
    algorithm: str,
    quantum: Optional[int],
    processes: List[Process],
    timeline: List[ScheduledSlice],
) -> ScheduleResult:
    result = ScheduleResult(algorithm=algorithm, quantum=quantum, processes=processes, timeline=timeline)
    compute_system_metrics(result)
    return result


def validate_quantum(quantum: Optional[int]) -> int:
    if quantum is None or quantum <= 0:
        raise InvalidQuantumError(
            f"Round Robin requires a positive quantum (got {quantum!r}; use --quantum)"
        )
    return quantum


def schedule_fcfs(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    ``processes`` is sorted in place by arrival time. The sort is stable, so
    processes arriving together keep their input order.
    """
    validate_processes(processes)
    processes.sort(key=lambda p: p.arrival_time)

    time = 0
    timeline: List[ScheduledSlice] = []

    for p in processes:
        if time < p.arrival_time:
            logger.debug("CPU idle from t=%d to t=%d", time, p.arrival_time)
            time = p.arrival_time

        p.waiting_time = time - p.arrival_time
        p.turnaround_time = p.waiting_time + p.burst_time
        _append_slice(timeline, p.pid, time, time + p.burst_time)
        logger.debug("FCFS: P%d runs t=%d..%d", p.pid, time, time + p.burst_time)

        time += p.burst_time

    return _finish(FCFS_LABEL, None, processes, timeline)


def schedule_sjf(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time. Ties go to the
    earlier arrival, then to the process listed first. ``processes`` is
    reordered in place into completion order.
    """
    validate_processes(processes)

    pending: List[Process] = list(processes)
    finished: List[Process] = []
    timeline: List[ScheduledSlice] = []
    time = 0

    while pending:
        ready = [p for p in pending if p.arrival_time <= time]

        if not ready:
            time = _next_arrival(pending, time)
            continue

        # min() keeps the first of equal keys, i.e. input order.
        p = min(ready, key=lambda x: (x.burst_time, x.arrival_time))
        logger.debug("SJF: t=%d picks P%d (burst=%d) from %d ready", time, p.pid, p.burst_time, len(ready))

        start_time = time
        time += p.burst_time
        _append_slice(timeline, p.pid, start_time, time)
        _complete(p, time)

        pending = [q for q in pending if q is not p]
        finished.append(p)

    processes[:] = finished
    return _finish(SJF_LABEL, None, processes, timeline)


def schedule_srt(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Remaining Time (preemptive SJF).

    The ready process with the least remaining time runs until it finishes
    or the next process arrives, whichever comes first; the choice is then
    made again. Between arrivals the running process stays the minimum, so
    this gives the same schedule as re-deciding every time unit. Ties go to
    the earlier arrival, then to the process listed first.
    """
    validate_processes(processes)

    timeline: List[ScheduledSlice] = []
    time = 0
    running: Optional[Process] = None

    while True:
        unfinished = [p for p in processes if not p.completed]
        if not unfinished:
            break

        ready = [p for p in unfinished if p.arrival_time <= time]
        if not ready:
            time = _next_arrival(unfinished, time)
            continue

        current = min(ready, key=lambda p: (p.remaining_time, p.arrival_time))
        if running is not None and running is not current and not running.completed:
            logger.debug(
                "SRT: t=%d P%d (remaining=%d) preempts P%d (remaining=%d)",
                time,
                current.pid,
                current.remaining_time,
                running.pid,
                running.remaining_time,
            )
        running = current

        future = [p.arrival_time for p in unfinished if p.arrival_time > time]
        run_time = current.remaining_time
        if future:
            run_time = min(run_time, min(future) - time)

        _append_slice(timeline, current.pid, time, time + run_time)
        time += run_time
        current.remaining_time -= run_time

        if current.remaining_time == 0:
            _complete(current, time)

    return _finish(SRT_LABEL, None, processes, timeline)


def schedule_rr(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Arrivals only become visible at slice boundaries: after each slice the
    process that ran is requeued first, then every process that has arrived
    by the new clock value and is neither queued nor completed is appended
    in input order.
    """
    quantum = validate_quantum(quantum)
    validate_processes(processes)

    queue: Deque[Process] = deque()
    timeline: List[ScheduledSlice] = []
    time = 0

    def enqueue_new_arrivals(current_time: int) -> None:
        queued = {q.pid for q in queue}
        for p in processes:
            if p.arrival_time <= current_time and not p.completed and p.pid not in queued:
                queue.append(p)
                queued.add(p.pid)

    enqueue_new_arrivals(time)
    unfinished = len(processes)

    while unfinished:
        if not queue:
            time = _next_arrival([p for p in processes if not p.completed], time)
            enqueue_new_arrivals(time)
            continue

        p = queue.popleft()
        if p.completed:
            continue

        run_time = min(quantum, p.remaining_time)
        _append_slice(timeline, p.pid, time, time + run_time)
        logger.debug("RR: P%d runs t=%d..%d", p.pid, time, time + run_time)

        time += run_time
        p.remaining_time -= run_time

        if p.remaining_time == 0:
            _complete(p, time)
            unfinished -= 1
        else:
            queue.append(p)

        enqueue_new_arrivals(time)

    return _finish(RR_LABEL, quantum, processes, timeline)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "srt": schedule_srt,
    "rr": schedule_rr,
}


def run_algorithm(name: str, processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Run the named algorithm on a private copy of ``processes``.

    The caller's list is never touched. Quantum is only used by round-robin.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise UnknownAlgorithmError(
            f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})"
        )

    func = ALGORITHMS[name]
    return func(copy_processes(processes), quantum=quantum if name == "rr" else None)


def run_all(processes: List[Process], quantum: Optional[int]) -> List[ScheduleResult]:
    """
    Run every algorithm, each on its own copy of ``processes``.

    Input is checked up front so that either all results are produced or
    none are.
    """
    validate_processes(processes)
    validate_quantum(quantum)
    return [run_algorithm(name, processes, quantum=quantum) for name in ALGORITHMS]
