from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence

from .disciplines import Discipline
from .errors import ConfigurationError
from .task import ProcessSpec, ProcessState

BAND_COUNT = 4


@dataclass(frozen=True, slots=True)
class Workload:
    """Everything needed to initialize a simulation.

    This is the only place the process set and band layout are validated;
    disciplines may be given as ``Discipline`` members, file codes or names.
    """

    specs: tuple[ProcessSpec, ...]
    disciplines: tuple[Discipline, ...]
    time_quantum: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "specs", tuple(self.specs))
        object.__setattr__(self, "disciplines", tuple(Discipline.coerce(d) for d in self.disciplines))
        if not self.specs:
            msg = "process count must be positive"
            raise ConfigurationError(msg)
        pids = [spec.pid for spec in self.specs]
        if len(set(pids)) != len(pids):
            msg = "process identifiers must be unique"
            raise ConfigurationError(msg)
        if len(self.disciplines) != BAND_COUNT:
            msg = f"expected {BAND_COUNT} band algorithms, got {len(self.disciplines)}"
            raise ConfigurationError(msg)
        if self.time_quantum <= 0 and Discipline.ROUND_ROBIN in self.disciplines:
            msg = "time_quantum must be strictly positive when a band uses Round Robin"
            raise ConfigurationError(msg)


@dataclass(slots=True)
class QueueBand:
    """One priority level of the multilevel queue."""

    index: int
    discipline: Discipline
    processes: list[ProcessState] = field(default_factory=list)

    def ready(self, now: int) -> list[ProcessState]:
        return [p for p in self.processes if p.is_ready(now)]

    @property
    def is_round_robin(self) -> bool:
        return self.discipline is Discipline.ROUND_ROBIN


@dataclass(slots=True)
class QueueAssignment:
    """Fixed partition of a workload's processes into ``BAND_COUNT`` ordered bands."""

    bands: list[QueueBand]
    time_quantum: int

    @classmethod
    def distribute(cls, workload: Workload) -> QueueAssignment:
        """Deal processes across bands by input order (index mod 4)."""

        return cls.from_indices(workload, default_band_indices(len(workload.specs)))

    @classmethod
    def from_indices(cls, workload: Workload, band_indices: Sequence[int]) -> QueueAssignment:
        if len(band_indices) != len(workload.specs):
            msg = "one band index is required per process"
            raise ConfigurationError(msg)

        bands = [QueueBand(index=i, discipline=d) for i, d in enumerate(workload.disciplines)]
        for spec, band_index in zip(workload.specs, band_indices):
            if not 0 <= band_index < BAND_COUNT:
                msg = f"P{spec.pid}: band index {band_index} outside 0..{BAND_COUNT - 1}"
                raise ConfigurationError(msg)
            bands[band_index].processes.append(ProcessState.from_spec(spec, band_index))
        return cls(bands=bands, time_quantum=workload.time_quantum)

    def __iter__(self) -> Iterator[QueueBand]:
        return iter(self.bands)

    def __getitem__(self, index: int) -> QueueBand:
        return self.bands[index]

    def ready(self, band_index: int, now: int) -> list[ProcessState]:
        return self.bands[band_index].ready(now)

    def find(self, band_index: int, pid: int) -> ProcessState | None:
        for process in self.bands[band_index].processes:
            if process.pid == pid:
                return process
        return None

    def processes(self) -> list[ProcessState]:
        """All processes ordered by pid."""

        return sorted((p for band in self.bands for p in band.processes), key=lambda p: p.pid)

    @property
    def disciplines(self) -> list[Discipline]:
        return [band.discipline for band in self.bands]


def default_band_indices(count: int) -> list[int]:
    return [i % BAND_COUNT for i in range(count)]
