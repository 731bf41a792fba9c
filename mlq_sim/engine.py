from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence

from . import metrics, persistence
from .disciplines import Discipline, select
from .errors import ConfigurationError, PersistenceError
from .persistence import StrPath
from .queues import QueueAssignment, Workload, default_band_indices
from .task import ProcessSpec, ProcessState

logger = logging.getLogger(__name__)

Holder = tuple[int, int]


class EngineStatus(Enum):
    READY = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass(frozen=True, slots=True)
class TickRecord:
    """What ran during the time unit ``[time, time + 1)``."""

    time: int
    pid: Optional[int]
    band: Optional[int]

    @property
    def idle(self) -> bool:
        return self.pid is None


@dataclass(frozen=True, slots=True)
class EngineSnapshot:
    """Read-only copy of the engine state between ticks."""

    status: EngineStatus
    current_time: int
    holder: Optional[Holder]
    processes: tuple[ProcessState, ...]
    statistics: Optional[metrics.Statistics]


class SchedulingEngine:
    """Tick-stepped multilevel queue scheduler.

    Bands are scanned in index order whenever a new process has to be picked,
    so band 0 wins over bands 1-3 at every selection point. A process picked
    from an FCFS, Priority or SJF band keeps the CPU until it finishes; one
    picked from a Round Robin band keeps it for at most ``time_quantum`` ticks.
    """

    def __init__(self) -> None:
        self._workload: Workload | None = None
        self._band_indices: tuple[int, ...] | None = None
        self._queues: QueueAssignment | None = None
        self._status = EngineStatus.READY
        self._now = 0
        self._holder: Holder | None = None
        self._timeline: list[TickRecord] = []
        self._idle_ticks = 0
        self._statistics: metrics.Statistics | None = None

    @classmethod
    def from_workload(cls, workload: Workload, band_indices: Sequence[int] | None = None) -> SchedulingEngine:
        engine = cls()
        engine._install(workload, band_indices)
        return engine

    def initialize(
        self,
        specs: Sequence[ProcessSpec],
        disciplines: Sequence[Discipline | int | str],
        time_quantum: int,
        bands: Sequence[int] | None = None,
    ) -> None:
        """Replace the process set.

        ``bands`` optionally gives the band index of each process; by default
        process ``i`` (in input order) goes to band ``i mod 4``. Raises
        ConfigurationError and leaves the current state untouched when the
        input is invalid.
        """

        workload = Workload(specs=tuple(specs), disciplines=tuple(disciplines), time_quantum=time_quantum)
        self._install(workload, bands)

    def _install(self, workload: Workload, band_indices: Sequence[int] | None) -> None:
        if band_indices is None:
            queues = QueueAssignment.distribute(workload)
        else:
            queues = QueueAssignment.from_indices(workload, band_indices)
        self._workload = workload
        self._band_indices = tuple(band_indices) if band_indices is not None else None
        self._queues = queues
        self.reset()

    def reset(self) -> None:
        if self._queues is not None:
            for band in self._queues:
                for process in band.processes:
                    process.reset()
        self._status = EngineStatus.READY
        self._now = 0
        self._holder = None
        self._timeline = []
        self._idle_ticks = 0
        self._statistics = None

    def start(self) -> None:
        if self._queues is not None and self._status is EngineStatus.READY:
            self._status = EngineStatus.RUNNING

    def pause(self) -> None:
        if self._status is EngineStatus.RUNNING:
            self._status = EngineStatus.PAUSED

    def resume(self) -> None:
        if self._status is EngineStatus.PAUSED:
            self._status = EngineStatus.RUNNING

    def toggle(self) -> None:
        """Start a fresh run, or flip between running and paused."""

        if self._status is EngineStatus.READY:
            self.start()
        elif self._status is EngineStatus.RUNNING:
            self.pause()
        elif self._status is EngineStatus.PAUSED:
            self.resume()

    def tick(self) -> TickRecord | None:
        """Advance the simulation by one time unit.

        Returns None without touching any state unless the engine is running.
        """

        if self._status is not EngineStatus.RUNNING or self._queues is None:
            return None
        queues = self._queues
        now = self._now

        process = self._resolve_holder()
        if process is not None and queues[process.band].is_round_robin and process.time_slice_remaining <= 0:
            process = None
        if process is None:
            self._holder = None
            process = self._select(now)

        if process is None:
            record = TickRecord(time=now, pid=None, band=None)
            self._idle_ticks += 1
            logger.debug("t=%d: idle", now)
        else:
            round_robin = queues[process.band].is_round_robin
            process.execute(now, round_robin=round_robin)
            if process.remaining_time <= 0:
                process.complete(now)
                self._holder = None
                logger.debug("t=%d: P%d completed at %d", now, process.pid, process.completion_time)
            elif round_robin and process.time_slice_remaining <= 0:
                self._holder = None
                logger.debug("t=%d: P%d quantum expired, %d units left", now, process.pid, process.remaining_time)
            record = TickRecord(time=now, pid=process.pid, band=process.band)

        self._timeline.append(record)
        self._now += 1

        if all(p.finished for band in queues for p in band.processes):
            self._status = EngineStatus.COMPLETED
            self._statistics = metrics.calculate(queues.processes(), self._now, self._idle_ticks)
            logger.info(
                "Simulation completed at t=%d: avg turnaround %.2f, avg waiting %.2f",
                self._now,
                self._statistics.average_turnaround_time,
                self._statistics.average_waiting_time,
            )
        return record

    def run(self) -> metrics.Statistics:
        """Drive the simulation to completion and return its statistics."""

        if self._queues is None:
            msg = "no workload has been initialized"
            raise ConfigurationError(msg)
        if self._status is EngineStatus.READY:
            self.start()
        elif self._status is EngineStatus.PAUSED:
            self.resume()
        while self._status is EngineStatus.RUNNING:
            self.tick()
        assert self._statistics is not None
        return self._statistics

    def _resolve_holder(self) -> ProcessState | None:
        if self._holder is None or self._queues is None:
            return None
        band_index, pid = self._holder
        process = self._queues.find(band_index, pid)
        if process is None or process.finished:
            return None
        return process

    def _select(self, now: int) -> ProcessState | None:
        assert self._queues is not None
        for band in self._queues:
            candidate = select(band.discipline, band.ready(now))
            if candidate is None:
                continue
            self._holder = (band.index, candidate.pid)
            if band.is_round_robin:
                candidate.time_slice_remaining = self._queues.time_quantum
            logger.debug("t=%d: selected P%d from band %d (%s)", now, candidate.pid, band.index, band.discipline.label)
            return candidate
        return None

    def load(self, path: StrPath) -> bool:
        """Replace the workload from a file; on failure keep the current state."""

        try:
            workload = persistence.read_workload(path)
            self._install(workload, None)
        except (PersistenceError, ConfigurationError) as exc:
            logger.warning("Could not load %s: %s", path, exc)
            return False
        return True

    def save(self, path: StrPath) -> bool:
        if self._workload is None:
            logger.warning("Nothing to save: no workload has been initialized")
            return False
        if self._band_indices is not None and list(self._band_indices) != default_band_indices(len(self._band_indices)):
            logger.warning("Cannot save %s: custom band layouts are not representable in the file format", path)
            return False
        try:
            persistence.write_workload(path, self._workload)
        except PersistenceError as exc:
            logger.warning("Could not save %s: %s", path, exc)
            return False
        return True

    def is_complete(self) -> bool:
        return self._status is EngineStatus.COMPLETED

    def snapshot(self) -> EngineSnapshot:
        processes = tuple(replace(p) for p in self.processes)
        return EngineSnapshot(
            status=self._status,
            current_time=self._now,
            holder=self._holder,
            processes=processes,
            statistics=self._statistics,
        )

    @property
    def status(self) -> EngineStatus:
        return self._status

    @property
    def current_time(self) -> int:
        return self._now

    @property
    def holder(self) -> Holder | None:
        return self._holder

    @property
    def current_process(self) -> ProcessState | None:
        return self._resolve_holder()

    @property
    def processes(self) -> list[ProcessState]:
        if self._queues is None:
            return []
        return self._queues.processes()

    @property
    def queues(self) -> QueueAssignment | None:
        return self._queues

    @property
    def workload(self) -> Workload | None:
        return self._workload

    @property
    def timeline(self) -> tuple[TickRecord, ...]:
        return tuple(self._timeline)

    @property
    def statistics(self) -> metrics.Statistics | None:
        """Results of a completed run; recomputed from the processes on every access."""

        if self._queues is None or self._status is not EngineStatus.COMPLETED:
            return None
        return metrics.calculate(self._queues.processes(), self._now, self._idle_ticks)
