from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List, Tuple

from .errors import WorkloadError
from .models import Process, build_processes

DEFAULT_QUANTUM = 3

# (arrival_time, burst_time) per process; pids follow list position.
SAMPLE_WORKLOAD: List[Tuple[int, int]] = [(0, 8), (1, 4), (2, 9), (3, 5)]


def sample_processes() -> List[Process]:
    return build_processes(SAMPLE_WORKLOAD)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    Each entry supplies ``arrival_time`` and ``burst_time``; the pid of a
    process is its 1-based position in the file.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        pairs = _load_json(path)
    elif suffix == ".csv":
        pairs = _load_csv(path)
    else:
        raise WorkloadError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    return build_processes(pairs)


def _load_json(path: Path) -> List[Tuple[int, int]]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise WorkloadError(f"{path}: invalid JSON ({exc})") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    return [_pair_from_entry(entry) for entry in raw]


def _load_csv(path: Path) -> List[Tuple[int, int]]:
    with path.open("r", encoding="utf-8", newline="") as f:
        try:
            reader = csv.DictReader(f)
            return [_pair_from_entry(row) for row in reader]
        except (csv.Error, UnicodeDecodeError) as exc:
            raise WorkloadError(f"{path}: unreadable CSV ({exc})") from exc


def _whole_number(value) -> int:
    # int() would truncate 1.9 to 1; only whole floats such as 2.0 pass.
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{value!r} is not a whole number")
    return int(value)


def _pair_from_entry(entry) -> Tuple[int, int]:
    # Objects use named fields; a bare [arrival, burst] pair is accepted too.
    try:
        if isinstance(entry, (list, tuple)):
            arrival_time, burst_time = entry
        else:
            arrival_time = entry["arrival_time"]
            burst_time = entry["burst_time"]
        return _whole_number(arrival_time), _whole_number(burst_time)
    except (KeyError, TypeError, ValueError) as exc:
        raise WorkloadError(f"Invalid process entry: {entry!r}") from exc
