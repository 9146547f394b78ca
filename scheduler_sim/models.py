from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

# Simulation clock values: integers in most workloads, floats are allowed.
Time = Union[int, float]
ProcessId = Union[int, str]


class Algorithm(str, enum.Enum):
    FCFS = "fcfs"          # First-Come First-Served
    SJF = "sjf"            # Shortest Job First (non-preemptive)
    PRIORITY = "priority"  # static priority, lower number runs first
    RR = "rr"              # Round Robin with a fixed quantum


class ProcessState(enum.Enum):
    """
    Per-run lifecycle of a process inside one simulation.

    Tracked in index-aligned side arrays by the algorithms so that the
    caller's Process records are never touched.
    """

    WAITING = "waiting"      # not arrived yet
    READY = "ready"          # arrived, waiting for the CPU
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Process:
    pid: ProcessId
    arrival_time: Time
    burst_time: Time
    priority: int = 1


@dataclass(frozen=True)
class ExecutionInterval:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: ProcessId
    start_time: Time
    end_time: Time

    @property
    def duration(self) -> Time:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class ProcessResult:
    pid: ProcessId
    arrival_time: Time
    burst_time: Time
    priority: int
    completion_time: Time
    waiting_time: Time
    turnaround_time: Time


@dataclass
class SystemMetrics:
    cpu_busy_time: Time
    makespan: Time
    throughput: float
    cpu_utilization: float
    avg_waiting: float = 0.0
    avg_turnaround: float = 0.0
    starvation_count: int = 0


@dataclass
class SimulationOutput:
    """
    Everything one scheduling run produces.

    ``results`` follows the order of the input processes. ``starvation_risk``
    is only computed by priority scheduling; ``None`` means "not applicable".
    """

    algorithm: Algorithm
    quantum: Optional[Time] = None
    timeline: List[ExecutionInterval] = field(default_factory=list)
    results: List[ProcessResult] = field(default_factory=list)
    starvation_risk: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "timeline": [
                {"processId": s.pid, "start": s.start_time, "end": s.end_time}
                for s in self.timeline
            ],
            "results": [
                {
                    "id": r.pid,
                    "arrivalTime": r.arrival_time,
                    "burstTime": r.burst_time,
                    "priority": r.priority,
                    "waitingTime": r.waiting_time,
                    "turnaroundTime": r.turnaround_time,
                }
                for r in self.results
            ],
        }
        if self.starvation_risk is not None:
            data["starvationRisk"] = self.starvation_risk
        return data
