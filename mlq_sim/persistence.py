"""Plain-text workload files.

Layout, whitespace separated::

    <process_count>
    <time_quantum>
    <arrival_time> <burst_time> <priority>     (one line per process)
    <band0_algo> <band1_algo> <band2_algo> <band3_algo>

Algorithm codes: 0=FCFS, 1=Priority, 2=SJF, 3=Round Robin.
"""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path
from typing import Iterator, Sequence, Union

from .disciplines import Discipline
from .errors import ConfigurationError, PersistenceError
from .queues import BAND_COUNT, Workload
from .task import ProcessSpec

logger = logging.getLogger(__name__)

StrPath = Union[str, PathLike]


def loads(text: str) -> Workload:
    tokens = _Tokens(text.split())
    count = tokens.next_int("process count")
    if count <= 0:
        msg = f"process count must be positive, got {count}"
        raise ConfigurationError(msg)
    quantum = tokens.next_int("time quantum")
    specs = []
    for pid in range(1, count + 1):
        arrival = tokens.next_int(f"P{pid} arrival_time")
        burst = tokens.next_int(f"P{pid} burst_time")
        priority = tokens.next_int(f"P{pid} priority")
        specs.append(ProcessSpec(pid=pid, arrival_time=arrival, burst_time=burst, priority=priority))
    disciplines = tuple(Discipline.from_code(tokens.next_int(f"band {i} algorithm")) for i in range(BAND_COUNT))
    tokens.expect_end()
    return Workload(specs=tuple(specs), disciplines=disciplines, time_quantum=quantum)


def dumps(workload: Workload) -> str:
    lines = [str(len(workload.specs)), str(workload.time_quantum)]
    for spec in workload.specs:
        lines.append(f"{spec.arrival_time} {spec.burst_time} {spec.priority}")
    lines.append(" ".join(str(d.code) for d in workload.disciplines))
    return "\n".join(lines) + "\n"


def read_workload(path: StrPath) -> Workload:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"could not open file for reading: {path}"
        raise PersistenceError(msg) from exc
    workload = loads(text)
    logger.info("Loaded %d processes from %s", len(workload.specs), path)
    return workload


def write_workload(path: StrPath, workload: Workload) -> None:
    try:
        Path(path).write_text(dumps(workload), encoding="utf-8")
    except OSError as exc:
        msg = f"could not open file for writing: {path}"
        raise PersistenceError(msg) from exc
    logger.info("Saved %d processes to %s", len(workload.specs), path)


class _Tokens:
    def __init__(self, tokens: Sequence[str]) -> None:
        self._iter: Iterator[str] = iter(tokens)

    def next_int(self, field: str) -> int:
        try:
            raw = next(self._iter)
        except StopIteration:
            msg = f"truncated file: missing {field}"
            raise PersistenceError(msg) from None
        try:
            return int(raw)
        except ValueError:
            msg = f"non-numeric {field}: {raw!r}"
            raise PersistenceError(msg) from None

    def expect_end(self) -> None:
        extra = next(self._iter, None)
        if extra is not None:
            msg = f"unexpected trailing data: {extra!r}"
            raise PersistenceError(msg)
