from __future__ import annotations

import logging
import math
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Sequence, Union

from .metrics import STARVATION_FACTOR, starvation_risk
from .models import (
    Algorithm,
    ExecutionInterval,
    Process,
    ProcessResult,
    ProcessState,
    SimulationOutput,
    Time,
)

logger = logging.getLogger(__name__)


def _check_processes(processes: Sequence[Process]) -> List[Process]:
    """
    Copy the caller's processes into a list, rejecting input no schedule
    can be computed for.
    """
    procs = list(processes)
    if not procs:
        raise ValueError("At least one process is required")

    for p in procs:
        if not (math.isfinite(p.burst_time) and math.isfinite(p.arrival_time)):
            raise ValueError(
                f"Process {p.pid}: arrival and burst times must be finite "
                f"(got {p.arrival_time}, {p.burst_time})"
            )
        if p.burst_time <= 0:
            raise ValueError(f"Process {p.pid}: burst time must be greater than 0 (got {p.burst_time})")
        if p.arrival_time < 0:
            raise ValueError(f"Process {p.pid}: arrival time cannot be negative (got {p.arrival_time})")

    return procs


def _build_results(procs: List[Process], completion: List[Time], waiting: List[Time]) -> List[ProcessResult]:
    results: List[ProcessResult] = []
    for p, completion_time, waiting_time in zip(procs, completion, waiting):
        # waiting is measured directly; completion - arrival - burst can round below 0
        turnaround_time = waiting_time + p.burst_time
        results.append(
            ProcessResult(
                pid=p.pid,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                priority=p.priority,
                completion_time=completion_time,
                waiting_time=waiting_time,
                turnaround_time=turnaround_time,
            )
        )
    return results


def _log_run(output: SimulationOutput) -> None:
    makespan = output.timeline[-1].end_time if output.timeline else 0
    logger.debug(
        f"{output.algorithm.value}: {len(output.results)} processes, "
        f"{len(output.timeline)} slices, makespan {makespan}"
    )


def schedule_fcfs(processes: Sequence[Process], quantum: Optional[Time] = None) -> SimulationOutput:
    """
    First-Come First-Serve (non-preemptive) scheduling.
    """
    procs = _check_processes(processes)
    order = sorted(range(len(procs)), key=lambda i: (procs[i].arrival_time, procs[i].pid, i))

    time: Time = 0
    timeline: List[ExecutionInterval] = []
    completion: List[Time] = [0] * len(procs)
    waiting: List[Time] = [0] * len(procs)

    for i in order:
        p = procs[i]
        if time < p.arrival_time:
            time = p.arrival_time

        end_time = time + p.burst_time
        timeline.append(ExecutionInterval(pid=p.pid, start_time=time, end_time=end_time))
        completion[i] = end_time
        waiting[i] = time - p.arrival_time
        time = end_time

    output = SimulationOutput(
        algorithm=Algorithm.FCFS, timeline=timeline, results=_build_results(procs, completion, waiting)
    )
    _log_run(output)
    return output


def _schedule_non_preemptive(
    procs: List[Process],
    primary_key: Callable[[Process], Time],
) -> tuple[List[ExecutionInterval], List[Time], List[Time]]:
    """
    Shared loop of SJF and priority scheduling.

    At each decision point, among processes that have arrived and are not yet
    completed, run the one with the smallest ``primary_key`` to completion.
    Ties go to the earlier arrival, then the smaller PID.
    """
    n = len(procs)
    state = [ProcessState.WAITING] * n
    completion: List[Time] = [0] * n
    waiting: List[Time] = [0] * n
    timeline: List[ExecutionInterval] = []

    time: Time = 0
    completed = 0

    while completed < n:
        for i, p in enumerate(procs):
            if state[i] is ProcessState.WAITING and p.arrival_time <= time:
                state[i] = ProcessState.READY

        ready = [i for i in range(n) if state[i] is ProcessState.READY]
        if not ready:
            # Nothing has arrived: jump to the next arrival.
            time = min(procs[i].arrival_time for i in range(n) if state[i] is ProcessState.WAITING)
            continue

        i = min(ready, key=lambda j: (primary_key(procs[j]), procs[j].arrival_time, procs[j].pid, j))
        p = procs[i]

        # non-preemptive: READY goes straight to COMPLETED
        end_time = time + p.burst_time
        timeline.append(ExecutionInterval(pid=p.pid, start_time=time, end_time=end_time))

        state[i] = ProcessState.COMPLETED
        completion[i] = end_time
        waiting[i] = time - p.arrival_time
        completed += 1
        time = end_time

    return timeline, completion, waiting


def schedule_sjf(processes: Sequence[Process], quantum: Optional[Time] = None) -> SimulationOutput:
    """
    Shortest Job First (non-preemptive).

    Burst times are assumed known up front. Equal bursts are decided by
    arrival time, then PID.
    """
    procs = _check_processes(processes)
    timeline, completion, waiting = _schedule_non_preemptive(procs, lambda p: p.burst_time)

    output = SimulationOutput(
        algorithm=Algorithm.SJF, timeline=timeline, results=_build_results(procs, completion, waiting)
    )
    _log_run(output)
    return output


def schedule_priority(
    processes: Sequence[Process],
    quantum: Optional[Time] = None,
    starvation_factor: float = STARVATION_FACTOR,
) -> SimulationOutput:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. Among ready
    processes, choose the one with the smallest priority; break ties
    by earlier arrival time, then PID.

    The output carries a starvation flag: true when some process waited more
    than ``starvation_factor`` times its own burst time.
    """
    procs = _check_processes(processes)
    timeline, completion, waiting = _schedule_non_preemptive(procs, lambda p: p.priority)
    results = _build_results(procs, completion, waiting)

    output = SimulationOutput(
        algorithm=Algorithm.PRIORITY,
        timeline=timeline,
        results=results,
        starvation_risk=starvation_risk(results, starvation_factor),
    )
    _log_run(output)
    if output.starvation_risk:
        logger.debug(f"priority: starvation risk (factor {starvation_factor})")
    return output


def schedule_rr(processes: Sequence[Process], quantum: Optional[Time] = None) -> SimulationOutput:
    """
    Round Robin scheduling with a fixed time quantum.

    After every slice, processes that arrived during it join the back of the
    ready queue first; only then is the preempted process requeued behind
    them.
    """
    if quantum is None or not quantum > 0:
        raise ValueError("Round Robin requires a positive quantum")

    procs = _check_processes(processes)
    n = len(procs)
    arrival_order = sorted(range(n), key=lambda i: (procs[i].arrival_time, procs[i].pid, i))

    remaining: List[Time] = [p.burst_time for p in procs]
    state = [ProcessState.WAITING] * n
    completion: List[Time] = [0] * n
    waiting: List[Time] = [0] * n
    ready_since: List[Time] = [0] * n
    timeline: List[ExecutionInterval] = []
    ready: Deque[int] = deque()

    time: Time = 0
    next_arrival = 0  # cursor into arrival_order

    def admit_arrivals(current_time: Time) -> None:
        nonlocal next_arrival
        while next_arrival < n and procs[arrival_order[next_arrival]].arrival_time <= current_time:
            i = arrival_order[next_arrival]
            state[i] = ProcessState.READY
            ready_since[i] = procs[i].arrival_time
            ready.append(i)
            next_arrival += 1

    admit_arrivals(time)

    while ready or next_arrival < n:
        if not ready:
            # CPU idle: jump to the next arrival
            time = procs[arrival_order[next_arrival]].arrival_time
            admit_arrivals(time)
            continue

        i = ready.popleft()
        state[i] = ProcessState.RUNNING
        # summed per wait so float rounding cannot make it negative
        waiting[i] += time - ready_since[i]

        run_time = min(quantum, remaining[i])
        slice_end = time + run_time
        timeline.append(ExecutionInterval(pid=procs[i].pid, start_time=time, end_time=slice_end))

        remaining[i] -= run_time
        time = slice_end

        # Phase 1: arrivals during (slice start, slice end]
        admit_arrivals(time)

        # Phase 2: requeue the preempted process behind them
        if remaining[i] > 0:
            state[i] = ProcessState.READY
            ready_since[i] = time
            ready.append(i)
        else:
            state[i] = ProcessState.COMPLETED
            completion[i] = time

    output = SimulationOutput(
        algorithm=Algorithm.RR,
        quantum=quantum,
        timeline=timeline,
        results=_build_results(procs, completion, waiting),
    )
    _log_run(output)
    return output


ALGORITHMS: Dict[Algorithm, Callable[..., SimulationOutput]] = {
    Algorithm.FCFS: schedule_fcfs,
    Algorithm.SJF: schedule_sjf,
    Algorithm.PRIORITY: schedule_priority,
    Algorithm.RR: schedule_rr,
}


def run_algorithm(
    name: Union[str, Algorithm],
    processes: Sequence[Process],
    quantum: Optional[Time] = None,
    starvation_factor: float = STARVATION_FACTOR,
) -> SimulationOutput:
    """
    Dispatch to the requested algorithm. The quantum is only used by
    round-robin; the starvation factor only by priority scheduling.
    """
    try:
        algorithm = Algorithm(name.lower())
    except (ValueError, AttributeError):
        raise ValueError(f"Unknown algorithm '{name}'") from None

    func = ALGORITHMS[algorithm]
    if algorithm is Algorithm.PRIORITY:
        return func(processes, quantum=quantum, starvation_factor=starvation_factor)
    return func(processes, quantum=quantum)
