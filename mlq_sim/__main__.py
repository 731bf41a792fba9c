from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from . import evaluation, metrics, persistence, workload
from .engine import SchedulingEngine, TickRecord
from .errors import PersistenceError


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="mlq-sim", description="Run a multilevel queue scheduling simulation.")
    parser.add_argument("path", nargs="?", default="data.txt", help="Workload file to load (default: data.txt).")
    parser.add_argument(
        "--generate",
        type=int,
        metavar="N",
        help="Write a random workload of N processes to PATH before running it.",
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed used with --generate.")
    parser.add_argument("--save", metavar="OUT", help="Write the loaded workload back out to OUT.")
    parser.add_argument("--trace", action="store_true", help="Print which process ran in every time unit.")
    parser.add_argument(
        "--compare",
        action="store_true",
        help="Also run the workload with the same discipline in every band and compare averages.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every scheduling decision.")
    return parser.parse_args(argv)


def format_timeline(timeline: Sequence[TickRecord]) -> str:
    cells = []
    for record in timeline:
        label = "--" if record.idle else f"P{record.pid}"
        cells.append(f"{record.time}:{label}")
    return " ".join(cells)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.generate is not None:
        try:
            generated = workload.random_workload(args.generate, seed=args.seed)
            persistence.write_workload(args.path, generated)
        except (ValueError, PersistenceError) as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

    engine = SchedulingEngine()
    if not engine.load(args.path):
        print(f"error: could not load workload from {args.path}", file=sys.stderr)
        return 1
    if args.save and not engine.save(args.save):
        print(f"error: could not save workload to {args.save}", file=sys.stderr)
        return 1

    loaded = engine.workload
    assert loaded is not None
    layout = ", ".join(f"Q{i + 1}={d.label}" for i, d in enumerate(loaded.disciplines))
    print(f"Simulating {len(loaded.specs)} processes ({layout}, TQ={loaded.time_quantum})\n")

    statistics = engine.run()
    if args.trace:
        print(format_timeline(engine.timeline))
        print()
    print(metrics.format_report(statistics))

    if args.compare:
        layouts = [("File", loaded.disciplines), *evaluation.uniform_layouts(loaded.time_quantum)]
        outcomes = evaluation.evaluate_suite(layouts, loaded)
        header_fmt = "{:<12} {:>9} {:>9} {:>9} {:>9} {:>8}"
        row_fmt = "{:<12} {:>9.2f} {:>9.2f} {:>9.2f} {:>9d} {:>8.2f}"
        print()
        print(header_fmt.format("Layout", "MeanTAT", "MeanWait", "MeanResp", "Makespan", "Util"))
        for outcome in outcomes:
            m = outcome.aggregate
            print(
                row_fmt.format(
                    outcome.name,
                    m.mean_turnaround_time,
                    m.mean_waiting_time,
                    m.mean_response_time,
                    m.makespan,
                    m.cpu_utilization,
                ),
            )
    return 0


if __name__ == "__main__":
    sys.exit(main())
