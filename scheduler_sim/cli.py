from __future__ import annotations

import argparse
import json
import logging
import math
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .catalog import describe
from .config import settings
from .gantt import build_rich_gantt, render_gantt
from .metrics import compute_system_metrics, is_starved
from .models import Algorithm, SimulationOutput, Time
from .workload_io import load_workload

logger = logging.getLogger(__name__)

ALGORITHM_CHOICES = [a.value for a in ALGORITHMS]


def _positive_number(text: str) -> Time:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from None
    if not (value > 0 and math.isfinite(value)):
        raise argparse.ArgumentTypeError(f"must be a finite number greater than 0: {text}")
    return int(value) if value.is_integer() else value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scheduler-sim",
        description="CPU scheduling simulator (FCFS, SJF, Priority, Round Robin).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHM_CHOICES)}).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=_positive_number,
        default=None,
        help=f"Time quantum for round-robin (default: {settings.DEFAULT_QUANTUM}; ignored by the others).",
    )
    run_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the raw timeline and results as JSON.",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Draw the Gantt chart without colors.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=ALGORITHM_CHOICES,
        help=f"Algorithms to compare (default: {' '.join(ALGORITHM_CHOICES)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=_positive_number,
        default=None,
        help=f"Time quantum used for round-robin when included (default: {settings.DEFAULT_QUANTUM}).",
    )

    subparsers.add_parser("algorithms", help="Describe the available algorithms.")

    return parser


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _quantum_for(algorithm: str, quantum: Optional[Time]) -> Optional[Time]:
    if algorithm.lower() != Algorithm.RR.value:
        return None
    return quantum if quantum is not None else settings.DEFAULT_QUANTUM


def _print_result(result: SimulationOutput, console: Console, plain: bool = False) -> None:
    info = describe(result.algorithm)
    console.print(f"[bold]Algorithm:[/bold] {info.name}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Complete",
        "Wait",
        "Turnaround",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for r in result.results:
        wait = str(r.waiting_time)
        if result.starvation_risk and is_starved(r, settings.STARVATION_FACTOR):
            wait = f"[red]{wait}[/red]"
        proc_table.add_row(
            str(r.pid),
            str(r.arrival_time),
            str(r.burst_time),
            str(r.priority),
            str(r.completion_time),
            wait,
            str(r.turnaround_time),
        )

    console.print(proc_table)
    console.print()

    system = compute_system_metrics(result, settings.STARVATION_FACTOR)
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{system.avg_waiting:.2f}")
    sys_table.add_row("Avg turnaround", f"{system.avg_turnaround:.2f}")
    sys_table.add_row("Throughput (proc/time)", f"{system.throughput:.3f}")
    sys_table.add_row("CPU utilization", f"{system.cpu_utilization*100:.1f}%")

    console.print(sys_table)

    if result.starvation_risk:
        console.print(
            f"[yellow]Starvation risk:[/yellow] at least one process waited more than "
            f"{settings.STARVATION_FACTOR:g}x its burst time."
        )


def _run_compare(workload_path: Path, algorithms: List[str], quantum: Optional[Time], console: Console) -> None:
    """
    Run each algorithm on a workload and print the summary table.
    """
    processes = load_workload(workload_path)

    summary_table = Table(title=f"Algorithm comparison: {workload_path}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("CPU utilization", justify="right")
    summary_table.add_column("Starved", justify="right")

    for alg in algorithms:
        result = run_algorithm(
            alg,
            processes,
            quantum=_quantum_for(alg, quantum),
            starvation_factor=settings.STARVATION_FACTOR,
        )
        system = compute_system_metrics(result, settings.STARVATION_FACTOR)
        summary_table.add_row(
            describe(result.algorithm).short,
            "" if result.quantum is None else str(result.quantum),
            f"{system.avg_waiting:.2f}",
            f"{system.avg_turnaround:.2f}",
            f"{system.cpu_utilization*100:.1f}%",
            str(system.starvation_count),
        )

    console.print(summary_table)


def _print_algorithms(console: Console) -> None:
    table = Table(title="Scheduling algorithms", box=box.SIMPLE_HEAVY, show_lines=True)
    table.add_column("Key", justify="center")
    table.add_column("Name")
    table.add_column("Complexity")
    table.add_column("Description")

    for algorithm in ALGORITHMS:
        info = describe(algorithm)
        notes = []
        if info.preemptive:
            notes.append("preemptive")
        if info.can_starve:
            notes.append("can starve")
        name = info.name + (f" ({', '.join(notes)})" if notes else "")
        table.add_row(algorithm.value, name, info.complexity, f"{info.description}\n[dim]{info.insight}[/dim]")

    console.print(table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    console = Console()

    try:
        if args.command == "run":
            processes = load_workload(Path(args.workload))
            result = run_algorithm(
                args.algorithm,
                processes,
                quantum=_quantum_for(args.algorithm, args.quantum),
                starvation_factor=settings.STARVATION_FACTOR,
            )
            if args.json:
                console.print_json(json.dumps(result.to_dict()))
            else:
                _print_result(result, console, plain=args.plain)
            return 0

        if args.command == "compare":
            _run_compare(Path(args.workload), args.algorithms, args.quantum, console)
            return 0

        if args.command == "algorithms":
            _print_algorithms(console)
            return 0
    except (ValueError, OSError) as exc:
        logger.debug("Simulation failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
