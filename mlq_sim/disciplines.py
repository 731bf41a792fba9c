from __future__ import annotations

from enum import Enum
from typing import Sequence

from .errors import ConfigurationError
from .task import ProcessState


class Discipline(Enum):
    """Scheduling discipline bound to one queue band.

    The integer values are the codes used in workload files.
    """

    FCFS = 0
    PRIORITY = 1
    SJF = 2
    ROUND_ROBIN = 3

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def code(self) -> int:
        return self.value

    @classmethod
    def from_code(cls, code: int) -> Discipline:
        try:
            return cls(code)
        except ValueError:
            msg = f"unrecognized algorithm code {code!r} (expected 0-3)"
            raise ConfigurationError(msg) from None

    @classmethod
    def parse(cls, raw: str) -> Discipline:
        """Accept either a numeric code or a name such as ``rr`` or ``sjf``."""

        text = raw.strip()
        if text.lstrip("-").isdigit():
            return cls.from_code(int(text))
        key = text.lower().replace("-", "").replace("_", "").replace(" ", "")
        try:
            return _ALIASES[key]
        except KeyError:
            msg = f"unrecognized algorithm name {raw!r}"
            raise ConfigurationError(msg) from None

    @classmethod
    def coerce(cls, value: Discipline | int | str) -> Discipline:
        if isinstance(value, Discipline):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        return cls.from_code(value)


_LABELS = {
    Discipline.FCFS: "FCFS",
    Discipline.PRIORITY: "Priority",
    Discipline.SJF: "SJF",
    Discipline.ROUND_ROBIN: "Round Robin",
}

_ALIASES = {
    "fcfs": Discipline.FCFS,
    "fifo": Discipline.FCFS,
    "priority": Discipline.PRIORITY,
    "prio": Discipline.PRIORITY,
    "sjf": Discipline.SJF,
    "roundrobin": Discipline.ROUND_ROBIN,
    "rr": Discipline.ROUND_ROBIN,
}


def select_fcfs(ready: Sequence[ProcessState]) -> ProcessState | None:
    if not ready:
        return None
    return min(ready, key=lambda p: (p.arrival_time, p.pid))


def select_priority(ready: Sequence[ProcessState]) -> ProcessState | None:
    if not ready:
        return None
    return min(ready, key=lambda p: (p.priority, p.arrival_time, p.pid))


def select_sjf(ready: Sequence[ProcessState]) -> ProcessState | None:
    # Ordered on remaining work, so a partly run process competes with what it has left.
    if not ready:
        return None
    return min(ready, key=lambda p: (p.remaining_time, p.arrival_time, p.pid))


def select_round_robin(ready: Sequence[ProcessState]) -> ProcessState | None:
    # Least recently run first; never-run processes carry NEVER_SCHEDULED.
    if not ready:
        return None
    return min(ready, key=lambda p: (p.last_scheduled_time, p.arrival_time, p.pid))


def select(discipline: Discipline, ready: Sequence[ProcessState]) -> ProcessState | None:
    """Pick the process ``discipline`` would run next from a band's ready set."""

    match discipline:
        case Discipline.FCFS:
            return select_fcfs(ready)
        case Discipline.PRIORITY:
            return select_priority(ready)
        case Discipline.SJF:
            return select_sjf(ready)
        case Discipline.ROUND_ROBIN:
            return select_round_robin(ready)
    msg = f"unsupported discipline {discipline!r}"
    raise ConfigurationError(msg)
