from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError

NEVER_SCHEDULED = -1


@dataclass(frozen=True, slots=True)
class ProcessSpec:
    """Immutable process parameters as submitted to the simulation."""

    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0

    def __post_init__(self) -> None:
        if self.pid < 1:
            msg = f"pid must be 1-based, got {self.pid}"
            raise ConfigurationError(msg)
        if self.burst_time <= 0:
            msg = f"P{self.pid}: burst_time must be strictly positive"
            raise ConfigurationError(msg)
        if self.arrival_time < 0:
            msg = f"P{self.pid}: arrival_time cannot be negative"
            raise ConfigurationError(msg)


@dataclass(slots=True)
class ProcessState:
    """Mutable runtime state for a process."""

    spec: ProcessSpec
    band: int
    remaining_time: int
    started: bool = False
    finished: bool = False
    start_time: Optional[int] = None
    completion_time: Optional[int] = None
    turnaround_time: Optional[int] = None
    waiting_time: Optional[int] = None
    last_scheduled_time: int = NEVER_SCHEDULED
    time_slice_remaining: int = 0

    @classmethod
    def from_spec(cls, spec: ProcessSpec, band: int) -> ProcessState:
        return cls(spec=spec, band=band, remaining_time=spec.burst_time)

    def is_ready(self, now: int) -> bool:
        return self.arrival_time <= now and not self.finished

    def execute(self, now: int, *, round_robin: bool) -> None:
        """Run for exactly one time unit starting at ``now``."""

        if not self.started:
            self.started = True
            self.start_time = now
        self.last_scheduled_time = now
        self.remaining_time -= 1
        if round_robin and self.time_slice_remaining > 0:
            self.time_slice_remaining -= 1

    def complete(self, now: int) -> None:
        self.finished = True
        self.completion_time = now + 1
        self.turnaround_time = self.completion_time - self.arrival_time
        self.waiting_time = self.turnaround_time - self.burst_time

    def reset(self) -> None:
        self.remaining_time = self.burst_time
        self.started = False
        self.finished = False
        self.start_time = None
        self.completion_time = None
        self.turnaround_time = None
        self.waiting_time = None
        self.last_scheduled_time = NEVER_SCHEDULED
        self.time_slice_remaining = 0

    @property
    def pid(self) -> int:
        return self.spec.pid

    @property
    def arrival_time(self) -> int:
        return self.spec.arrival_time

    @property
    def burst_time(self) -> int:
        return self.spec.burst_time

    @property
    def priority(self) -> int:
        return self.spec.priority
