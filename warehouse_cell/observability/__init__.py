"""Observability utilities for structured logging and metrics."""

from .logging import bind_global_context, configure_logging
from .metrics import metrics_registry, record_operation, record_station_drain, set_metrics_enabled

__all__ = [
    "bind_global_context",
    "configure_logging",
    "metrics_registry",
    "record_operation",
    "record_station_drain",
    "set_metrics_enabled",
]
