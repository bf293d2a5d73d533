"""Structured logging configuration for the warehouse automation cell."""

from __future__ import annotations

import enum
import logging
import sys
from typing import Any, Dict, Optional, TextIO

import structlog

from warehouse_cell.enterprise.config.settings import LoggingSettings


def _unwrap_enums(_logger: Any, _method: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Render states, zones and product types by value rather than by repr."""

    for key, value in event_dict.items():
        if isinstance(value, enum.Enum):
            event_dict[key] = value.value
    return event_dict


def _build_structlog_processors(json_output: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        _unwrap_enums,
        structlog.processors.format_exc_info,
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def configure_logging(settings: LoggingSettings, stream: Optional[TextIO] = None) -> None:
    """Configure stdlib + structlog logging based on settings.

    Robot refusals are logged at DEBUG, so the default INFO level shows
    accepted operations and charging transitions only.
    """

    level = getattr(logging, settings.level.upper(), logging.INFO)
    output = stream or sys.stdout

    logging.basicConfig(format="%(message)s", stream=output, level=level)

    structlog.configure(
        processors=_build_structlog_processors(settings.json),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=output),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def bind_global_context(**context: Any) -> Dict[str, Any]:
    """Bind context vars that should be included in all subsequent logs."""

    structlog.contextvars.bind_contextvars(**context)
    return context
