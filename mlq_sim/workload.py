from __future__ import annotations

from collections.abc import Iterable, Sequence
from random import Random

from .disciplines import Discipline
from .queues import Workload
from .task import ProcessSpec

DEFAULT_DISCIPLINES = (Discipline.ROUND_ROBIN, Discipline.PRIORITY, Discipline.SJF, Discipline.FCFS)


def from_rows(rows: Iterable[Sequence[int]]) -> list[ProcessSpec]:
    """Build specs from ``(arrival, burst)`` or ``(arrival, burst, priority)`` rows, numbered from 1."""

    specs: list[ProcessSpec] = []
    for pid, row in enumerate(rows, start=1):
        if len(row) not in (2, 3):
            msg = f"row {pid} must hold arrival, burst and optionally priority"
            raise ValueError(msg)
        priority = row[2] if len(row) == 3 else 0
        specs.append(ProcessSpec(pid=pid, arrival_time=row[0], burst_time=row[1], priority=priority))
    return specs


def random_workload(
    count: int,
    *,
    seed: int | None = None,
    max_arrival: int = 10,
    burst_range: tuple[int, int] = (1, 8),
    priority_range: tuple[int, int] = (1, 5),
    time_quantum: int = 2,
    disciplines: Sequence[Discipline] = DEFAULT_DISCIPLINES,
) -> Workload:
    if count <= 0:
        msg = "count must be positive"
        raise ValueError(msg)
    if max_arrival < 0:
        msg = "max_arrival cannot be negative"
        raise ValueError(msg)
    low, high = burst_range
    if low <= 0 or high < low:
        msg = "burst_range must satisfy 0 < min <= max"
        raise ValueError(msg)
    if priority_range[1] < priority_range[0]:
        msg = "priority_range must satisfy min <= max"
        raise ValueError(msg)
    rng = Random(seed)
    rows = [
        (rng.randint(0, max_arrival), rng.randint(low, high), rng.randint(*priority_range))
        for _ in range(count)
    ]
    return Workload(specs=tuple(from_rows(rows)), disciplines=tuple(disciplines), time_quantum=time_quantum)
