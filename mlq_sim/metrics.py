from __future__ import annotations

from dataclasses import dataclass
from statistics import mean
from typing import Iterable, Sequence

from .task import ProcessState


@dataclass(frozen=True, slots=True)
class ProcessMetrics:
    pid: int
    band: int
    arrival_time: int
    burst_time: int
    priority: int
    start_time: int
    completion_time: int
    turnaround_time: int
    waiting_time: int
    response_time: int


@dataclass(frozen=True, slots=True)
class AggregateMetrics:
    count: int
    mean_turnaround_time: float
    mean_waiting_time: float
    mean_response_time: float
    makespan: int
    idle_time: int
    cpu_utilization: float
    throughput: float


def build_process_metrics(processes: Iterable[ProcessState]) -> list[ProcessMetrics]:
    """Collect per-process timings, skipping processes that have not finished."""

    metrics: list[ProcessMetrics] = []
    for process in processes:
        if not process.finished or process.start_time is None or process.completion_time is None:
            continue
        turnaround = process.completion_time - process.arrival_time
        metrics.append(
            ProcessMetrics(
                pid=process.pid,
                band=process.band,
                arrival_time=process.arrival_time,
                burst_time=process.burst_time,
                priority=process.priority,
                start_time=process.start_time,
                completion_time=process.completion_time,
                turnaround_time=turnaround,
                waiting_time=turnaround - process.burst_time,
                response_time=process.start_time - process.arrival_time,
            ),
        )
    return sorted(metrics, key=lambda m: m.pid)


def summarise(metrics: Sequence[ProcessMetrics], total_time: int, idle_time: int = 0) -> AggregateMetrics:
    if not metrics:
        return AggregateMetrics(
            count=0,
            mean_turnaround_time=0.0,
            mean_waiting_time=0.0,
            mean_response_time=0.0,
            makespan=total_time,
            idle_time=idle_time,
            cpu_utilization=0.0,
            throughput=0.0,
        )
    busy_time = total_time - idle_time
    return AggregateMetrics(
        count=len(metrics),
        mean_turnaround_time=float(mean(m.turnaround_time for m in metrics)),
        mean_waiting_time=float(mean(m.waiting_time for m in metrics)),
        mean_response_time=float(mean(m.response_time for m in metrics)),
        makespan=total_time,
        idle_time=idle_time,
        cpu_utilization=busy_time / total_time if total_time else 0.0,
        throughput=len(metrics) / total_time if total_time else 0.0,
    )


@dataclass(frozen=True, slots=True)
class Statistics:
    """Per-process results together with their aggregate."""

    processes: tuple[ProcessMetrics, ...]
    aggregate: AggregateMetrics

    @property
    def average_turnaround_time(self) -> float:
        return self.aggregate.mean_turnaround_time

    @property
    def average_waiting_time(self) -> float:
        return self.aggregate.mean_waiting_time


def calculate(processes: Iterable[ProcessState], total_time: int, idle_time: int = 0) -> Statistics:
    per_process = build_process_metrics(processes)
    return Statistics(processes=tuple(per_process), aggregate=summarise(per_process, total_time, idle_time))


def format_report(statistics: Statistics) -> str:
    """Render the completion table printed at the end of a run."""

    header_fmt = "{:<5} {:>4} {:>4} {:>5} {:>5} {:>5} {:>5}"
    lines = [header_fmt.format("PID", "AT", "BT", "Prio", "CT", "TAT", "WT")]
    for m in statistics.processes:
        lines.append(
            header_fmt.format(
                f"P{m.pid}",
                m.arrival_time,
                m.burst_time,
                m.priority,
                m.completion_time,
                m.turnaround_time,
                m.waiting_time,
            ),
        )
    lines.append("")
    lines.append(f"Average Turnaround Time: {statistics.average_turnaround_time:.2f}")
    lines.append(f"Average Waiting Time: {statistics.average_waiting_time:.2f}")
    return "\n".join(lines)
