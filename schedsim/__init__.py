"""
CPU scheduling simulator.

Simulates FCFS, SJF, SRT and Round Robin over a fixed workload and reports
per-process waiting and turnaround times with their averages.
"""

__all__ = ["algorithms", "cli", "models", "report"]
