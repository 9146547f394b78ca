from rich.panel import Panel

from scheduler_sim.gantt import build_rich_gantt, render_gantt
from scheduler_sim.models import ExecutionInterval


def test_render_gantt_with_idle_gap():
    slices = [
        ExecutionInterval(pid="A", start_time=0, end_time=2),
        ExecutionInterval(pid="B", start_time=4, end_time=7),
    ]
    lines = render_gantt(slices).splitlines()
    assert lines[0] == "Gantt Chart:"
    assert lines[1] == "|==..===|"
    assert lines[2] == " A   B  "
    assert lines[3] == "0 2 4  7"


def test_render_gantt_empty():
    assert render_gantt([]) == "(no execution)"


def test_render_gantt_sorts_slices():
    slices = [
        ExecutionInterval(pid=2, start_time=1, end_time=2),
        ExecutionInterval(pid=1, start_time=0, end_time=1),
    ]
    assert render_gantt(slices).splitlines()[1] == "|==|"


def test_build_rich_gantt():
    panel, marks = build_rich_gantt([
        ExecutionInterval(pid=1, start_time=0, end_time=3),
        ExecutionInterval(pid=2, start_time=3, end_time=5),
    ])
    assert isinstance(panel, Panel)
    assert marks == "0  3 5"


def test_build_rich_gantt_empty():
    panel, marks = build_rich_gantt([])
    assert isinstance(panel, Panel)
    assert marks == ""


def test_time_marks_line_up_with_bar_ends():
    slices = [
        ExecutionInterval(pid="A", start_time=0, end_time=6),
        ExecutionInterval(pid="B", start_time=6, end_time=8),
        ExecutionInterval(pid="C", start_time=8, end_time=20),
    ]
    lines = render_gantt(slices).splitlines()
    bar, marks = lines[1], lines[3]
    assert marks == "0     6 8          20"
    # each mark's last digit sits under the last cell of the bar it closes
    assert bar[6] == "=" and marks[6] == "6"
    assert marks[20] == "0" and bar[21] == "|"

    _, rich_marks = build_rich_gantt(slices)
    assert rich_marks == marks


def test_crowded_time_marks_stay_separated():
    slices = [
        ExecutionInterval(pid=1, start_time=0, end_time=1),
        ExecutionInterval(pid=2, start_time=1, end_time=100),
        ExecutionInterval(pid=3, start_time=100, end_time=101),
    ]
    marks = render_gantt(slices).splitlines()[3].split()
    assert marks == ["0", "1", "100", "101"]
