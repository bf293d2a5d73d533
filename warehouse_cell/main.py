"""Command-line entry point running a seeded demo of the automation cell."""

from __future__ import annotations

import argparse
import random
import sys
from typing import Optional, Sequence

import structlog
from prometheus_client import generate_latest

from warehouse_cell.enterprise.config.settings import get_settings
from warehouse_cell.observability import (
    bind_global_context,
    configure_logging,
    metrics_registry,
    set_metrics_enabled,
)
from warehouse_cell.services import CellSimulation, InMemoryEventRecorder


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the warehouse automation cell demo.")
    parser.add_argument("--steps", type=int, default=None, help="Robot actions to perform.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs.")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON.")
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Print Prometheus metrics after the run.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    logging_settings = settings.logging
    if args.json_logs:
        logging_settings = logging_settings.model_copy(update={"json": True})
    configure_logging(logging_settings)
    set_metrics_enabled(settings.telemetry.metrics_enabled)
    bind_global_context(environment=settings.environment)

    seed = args.seed if args.seed is not None else settings.simulation.seed
    recorder = InMemoryEventRecorder()
    simulation = CellSimulation(settings=settings, rng=random.Random(seed), recorder=recorder)
    simulation.run(args.steps)

    log = structlog.get_logger(__name__)
    for robot in simulation.robots:
        log.info("robot.final_state", **robot.telemetry().model_dump(mode="json"))
    log.info("events.recorded", total=len(recorder))

    if args.metrics:
        sys.stdout.write(generate_latest(metrics_registry).decode("utf-8"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
