from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, List, Mapping, Union

from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator

from .models import Process, Time

logger = logging.getLogger(__name__)


class WorkloadError(ValueError):
    """
    A workload file that cannot be simulated. ``errors`` lists every
    problem found, one message per offending field.
    """

    def __init__(self, message: str, errors: List[str] | None = None):
        self.errors = errors or []
        if self.errors:
            message = message + ":\n  " + "\n  ".join(self.errors)
        super().__init__(message)


class ProcessSpec(BaseModel):
    """
    One workload record as written by a user. Accepts both snake_case and
    the camelCase names used by the web front end.
    """

    pid: Union[int, str] = Field(validation_alias=AliasChoices("pid", "id"))
    arrival_time: float = Field(ge=0, allow_inf_nan=False, validation_alias=AliasChoices("arrival_time", "arrivalTime"))
    burst_time: float = Field(gt=0, allow_inf_nan=False, validation_alias=AliasChoices("burst_time", "burstTime"))
    priority: int = Field(default=1, ge=1)

    @field_validator("pid", mode="before")
    @classmethod
    def _numeric_pid(cls, value: Any) -> Any:
        # CSV gives strings for everything; "3" should sort like 3.
        if isinstance(value, str):
            value = value.strip()
            if value.isdigit():
                return int(value)
        return value

    @field_validator("priority", mode="before")
    @classmethod
    def _blank_priority(cls, value: Any) -> Any:
        return 1 if value in (None, "") else value

    def to_process(self) -> Process:
        return Process(
            pid=self.pid,
            arrival_time=_as_time(self.arrival_time),
            burst_time=_as_time(self.burst_time),
            priority=self.priority,
        )


def _as_time(value: float) -> Time:
    return int(value) if float(value).is_integer() else value


def load_workload(path: Union[str, Path]) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    logger.info(f"Loaded {len(processes)} processes from {path}")
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadError(f"{path}: invalid JSON ({exc})") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    return parse_records(raw)


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        return parse_records(list(reader))


def parse_records(records: List[Any]) -> List[Process]:
    """
    Validate raw records and convert them to processes.

    Every record is checked before anything is raised, so one error lists all
    the problems in the workload.
    """
    if not records:
        raise WorkloadError("Workload contains no processes")

    processes: List[Process] = []
    errors: List[str] = []

    for index, entry in enumerate(records):
        if not isinstance(entry, Mapping):
            errors.append(f"entry {index + 1}: expected an object, got {entry!r}")
            continue
        try:
            processes.append(ProcessSpec.model_validate(entry).to_process())
        except ValidationError as exc:
            label = _label(entry, index)
            for err in exc.errors():
                field = ".".join(str(part) for part in err["loc"])
                errors.append(f"{label}: {field}: {err['msg']}")

    if errors:
        raise WorkloadError("Invalid workload", errors)

    if len({isinstance(p.pid, int) for p in processes}) > 1:
        raise WorkloadError("Process ids must be either all numeric or all text")

    return processes


def _label(entry: Mapping, index: int) -> str:
    pid = entry.get("pid", entry.get("id"))
    return f"P{pid}" if pid not in (None, "") and str(pid).isdigit() else str(pid or f"entry {index + 1}")
