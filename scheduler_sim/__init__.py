"""
Scheduler simulation package.

Computes CPU scheduling timelines (FCFS, SJF, Priority, Round Robin) and
per-process waiting/turnaround metrics, with a command-line front end for
running and comparing them on workload files.
"""

from .algorithms import (
    ALGORITHMS,
    run_algorithm,
    schedule_fcfs,
    schedule_priority,
    schedule_rr,
    schedule_sjf,
)
from .models import Algorithm, ExecutionInterval, Process, ProcessResult, SimulationOutput

__all__ = [
    "ALGORITHMS",
    "Algorithm",
    "ExecutionInterval",
    "Process",
    "ProcessResult",
    "SimulationOutput",
    "run_algorithm",
    "schedule_fcfs",
    "schedule_priority",
    "schedule_rr",
    "schedule_sjf",
]
