"""
Human-readable descriptions of the supported algorithms, shown by
``scheduler-sim algorithms`` and used for titles in the other commands.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .models import Algorithm


@dataclass(frozen=True)
class AlgorithmInfo:
    name: str
    short: str
    description: str
    complexity: str
    insight: str
    can_starve: bool = False
    preemptive: bool = False


CATALOG: Dict[Algorithm, AlgorithmInfo] = {
    Algorithm.FCFS: AlgorithmInfo(
        name="First Come First Served",
        short="FCFS",
        description=(
            "Processes run in exact arrival order. No preemption: once a process "
            "starts, it runs to completion."
        ),
        complexity="O(n log n)",
        insight=(
            "Simple, but suffers from the convoy effect: short processes wait behind "
            "long ones, which inflates the average waiting time."
        ),
    ),
    Algorithm.SJF: AlgorithmInfo(
        name="Shortest Job First",
        short="SJF",
        description=(
            "Picks the ready process with the shortest burst time. Optimal average "
            "waiting time among non-preemptive algorithms."
        ),
        complexity="O(n^2)",
        insight="Requires burst times to be known in advance.",
    ),
    Algorithm.PRIORITY: AlgorithmInfo(
        name="Priority Scheduling",
        short="Priority",
        description=(
            "Each process has a priority number (lower = higher priority). The CPU "
            "goes to the highest-priority ready process."
        ),
        complexity="O(n^2)",
        insight="Low-priority processes can starve; aging is the usual remedy.",
        can_starve=True,
    ),
    Algorithm.RR: AlgorithmInfo(
        name="Round Robin",
        short="Round Robin",
        description=(
            "Each process gets a fixed time quantum in cyclic order. When the quantum "
            "expires the process is preempted and goes to the back of the queue."
        ),
        complexity="O(n + total burst / quantum)",
        insight=(
            "Fairest for time-sharing. Too small a quantum means many context "
            "switches; too large degenerates to FCFS."
        ),
        preemptive=True,
    ),
}


def describe(algorithm: Algorithm) -> AlgorithmInfo:
    return CATALOG[Algorithm(algorithm)]
