from __future__ import annotations

from typing import Iterable, List

from .models import ProcessResult, SimulationOutput, SystemMetrics

# A process that waited more than this many times its own burst time is
# reported as a starvation risk. Heuristic only.
STARVATION_FACTOR = 3


def is_starved(result: ProcessResult, factor: float = STARVATION_FACTOR) -> bool:
    return result.waiting_time > factor * result.burst_time


def starvation_risk(results: Iterable[ProcessResult], factor: float = STARVATION_FACTOR) -> bool:
    """
    True if any process waited longer than ``factor`` times its burst time.
    """
    return any(is_starved(r, factor) for r in results)


def compute_system_metrics(output: SimulationOutput, starvation_factor: float = STARVATION_FACTOR) -> SystemMetrics:
    """
    Compute aggregate statistics for a finished simulation.

    The timeline span runs from time 0 to the end of the last interval, so
    leading and trailing idle time lowers CPU utilization.
    """
    if not output.results:
        return SystemMetrics(cpu_busy_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)

    makespan = max(s.end_time for s in output.timeline) if output.timeline else 0
    cpu_busy_time = sum(r.burst_time for r in output.results)

    throughput = len(output.results) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    summary = summarize_process_metrics(output.results)

    return SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
        avg_waiting=summary["avg_waiting"],
        avg_turnaround=summary["avg_turnaround"],
        starvation_count=sum(1 for r in output.results if is_starved(r, starvation_factor)),
    )


def summarize_process_metrics(results: List[ProcessResult]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not results:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0}

    n = len(results)
    return {
        "avg_waiting": sum(r.waiting_time for r in results) / n,
        "avg_turnaround": sum(r.turnaround_time for r in results) / n,
    }
