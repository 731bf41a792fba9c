"""Multilevel queue CPU scheduling simulator."""

from .task import ProcessSpec, ProcessState
from .disciplines import Discipline
from .queues import QueueAssignment, QueueBand, Workload
from .engine import EngineSnapshot, EngineStatus, SchedulingEngine, TickRecord
from .errors import ConfigurationError, PersistenceError
from . import disciplines
from . import metrics
from . import persistence
from . import workload
from . import evaluation

__all__ = [
	"ProcessSpec",
	"ProcessState",
	"Discipline",
	"QueueAssignment",
	"QueueBand",
	"EngineSnapshot",
	"EngineStatus",
	"SchedulingEngine",
	"TickRecord",
	"ConfigurationError",
	"PersistenceError",
	"Workload",
	"disciplines",
	"metrics",
	"persistence",
	"workload",
	"evaluation",
]
