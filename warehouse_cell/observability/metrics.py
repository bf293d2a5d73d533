"""Prometheus metrics utilities."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter

metrics_registry = CollectorRegistry()

OPERATION_COUNTER = Counter(
    "warehouse_cell_operations_total",
    "Robot and station operations by outcome",
    labelnames=("operation", "outcome"),
    registry=metrics_registry,
)

STATION_DRAIN_COUNTER = Counter(
    "warehouse_cell_station_drains_total",
    "Packing station queues processed",
    registry=metrics_registry,
)

_enabled = True


def set_metrics_enabled(enabled: bool) -> None:
    global _enabled
    _enabled = enabled


def record_operation(operation: str, succeeded: bool) -> None:
    """Count one operation attempt as accepted or refused."""

    if _enabled:
        OPERATION_COUNTER.labels(
            operation=operation,
            outcome="accepted" if succeeded else "refused",
        ).inc()


def record_station_drain() -> None:
    if _enabled:
        STATION_DRAIN_COUNTER.inc()
