from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ExecutionInterval, Time


def _width(start: Time, end: Time) -> int:
    return max(1, int(round(end - start)))


def _add_mark(time_marks: str, column: int, t: Time) -> str:
    """
    Append time mark ``t`` so it ends at ``column``, under the last cell of
    the bar it closes. A mark that would touch the previous one follows it
    after a single space.
    """
    mark = str(t)
    pad = column + 1 - len(time_marks) - len(mark)
    return time_marks + " " * max(1, pad) + mark


def render_gantt(slices: List[ExecutionInterval]) -> str:
    """
    Plain-text Gantt chart, for pipes and terminals without color.
    Idle gaps are drawn with dots.
    """
    if not slices:
        return "(no execution)"

    slices = sorted(slices, key=lambda s: (s.start_time, s.end_time))

    line = "|"
    labels = " "
    time_marks = "0"
    column = 0
    last_time: Time = 0

    for sl in slices:
        if sl.start_time > last_time:
            gap = _width(last_time, sl.start_time)
            line += "." * gap
            labels += " " * gap
            column += gap
            last_time = sl.start_time
            time_marks = _add_mark(time_marks, column, last_time)

        width = _width(sl.start_time, sl.end_time)
        line += "=" * width
        labels += str(sl.pid)[:width].ljust(width)
        column += width
        last_time = sl.end_time
        time_marks = _add_mark(time_marks, column, last_time)

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(slices: List[ExecutionInterval]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    slices = sorted(slices, key=lambda s: (s.start_time, s.end_time))

    colors = ["cyan", "magenta", "yellow", "green", "blue", "red"]
    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = colors[len(pid_to_color) % len(colors)]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = "0"
    column = 0
    last_time: Time = 0

    for sl in slices:
        if sl.start_time > last_time:
            gap = _width(last_time, sl.start_time)
            timeline.append("." * gap, style="dim")
            labels.append(" " * gap)
            column += gap
            last_time = sl.start_time
            time_marks = _add_mark(time_marks, column, last_time)

        pid = str(sl.pid)
        width = _width(sl.start_time, sl.end_time)

        timeline.append(" " * width, style=f"on {pid_color(pid)}")
        labels.append(pid[:width].ljust(width), style="bold")

        column += width
        last_time = sl.end_time
        time_marks = _add_mark(time_marks, column, last_time)

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
