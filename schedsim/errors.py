from __future__ import annotations


class SchedulerError(ValueError):
    """
    Base class for every error raised while building or simulating a workload.
    """


class InvalidBurstTimeError(SchedulerError):
    pass


class InvalidArrivalTimeError(SchedulerError):
    pass


class InvalidQuantumError(SchedulerError):
    pass


class EmptyProcessSetError(SchedulerError):
    pass


class UnknownAlgorithmError(SchedulerError):
    pass


class DuplicatePidError(SchedulerError):
    pass


class WorkloadError(SchedulerError):
    pass


class StarvationGuardError(SchedulerError):
    """
    A scheduler loop stopped making progress: unfinished processes remain but
    none of them can ever become ready.
    """
