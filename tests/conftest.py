from __future__ import annotations

import pytest

from mlq_sim import Discipline, ProcessSpec, SchedulingEngine

FCFS_ONLY = (Discipline.FCFS,) * 4


def make_engine(rows, disciplines=FCFS_ONLY, quantum=2, bands=None) -> SchedulingEngine:
    specs = [
        ProcessSpec(pid=i, arrival_time=row[0], burst_time=row[1], priority=row[2] if len(row) > 2 else 0)
        for i, row in enumerate(rows, start=1)
    ]
    engine = SchedulingEngine()
    engine.initialize(specs, disciplines, quantum, bands=bands)
    return engine


def pids(engine: SchedulingEngine) -> list[int | None]:
    return [record.pid for record in engine.timeline]


def by_pid(engine: SchedulingEngine) -> dict:
    return {p.pid: p for p in engine.processes}


@pytest.fixture
def sample_text() -> str:
    return "4\n2\n0 5 2\n1 3 1\n2 1 3\n3 2 1\n3 1 2 0\n"
