from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from . import metrics
from .disciplines import Discipline
from .engine import SchedulingEngine, TickRecord
from .queues import BAND_COUNT, Workload


@dataclass(slots=True)
class EvaluationOutcome:
    name: str
    disciplines: tuple[Discipline, ...]
    timeline: tuple[TickRecord, ...]
    statistics: metrics.Statistics

    @property
    def aggregate(self) -> metrics.AggregateMetrics:
        return self.statistics.aggregate


def evaluate_layout(
    name: str,
    workload: Workload,
    disciplines: Sequence[Discipline] | None = None,
) -> EvaluationOutcome:
    """Run ``workload`` to completion, optionally with a different band layout."""

    engine = SchedulingEngine()
    layout = tuple(disciplines) if disciplines is not None else workload.disciplines
    engine.initialize(workload.specs, layout, workload.time_quantum)
    statistics = engine.run()
    return EvaluationOutcome(name=name, disciplines=layout, timeline=engine.timeline, statistics=statistics)


def uniform_layouts(time_quantum: int) -> list[tuple[str, tuple[Discipline, ...]]]:
    """Layouts running the same discipline in every band.

    Round Robin is left out when ``time_quantum`` cannot drive it.
    """

    return [
        (d.label, (d,) * BAND_COUNT)
        for d in Discipline
        if d is not Discipline.ROUND_ROBIN or time_quantum > 0
    ]


def evaluate_suite(
    layouts: Sequence[tuple[str, Sequence[Discipline]]],
    workload: Workload,
) -> list[EvaluationOutcome]:
    return [evaluate_layout(name, workload, disciplines) for name, disciplines in layouts]
