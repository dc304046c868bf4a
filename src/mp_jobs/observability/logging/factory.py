"""Observability – structlog configuration."""
from __future__ import annotations

import logging
from typing import Any

import structlog

from mp_jobs.observability.logging.processors import ScheduleValueProcessor

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    name = level.upper()
    if name not in _LEVELS:
        raise ValueError(f"Unknown log level {level!r}")
    return logging.getLevelNamesMapping()[name]


class JsonLoggerFactory:
    """Configure structlog on top of the stdlib root handler.

    ``json=False`` swaps the JSON renderer for structlog's console renderer,
    handy when driving a scheduler from a terminal.
    """

    @staticmethod
    def configure(level: int | str = logging.INFO, *, json: bool = True) -> None:
        shared_processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            ScheduleValueProcessor(),
            structlog.processors.StackInfoRenderer(),
        ]
        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        renderer: Any = (
            structlog.processors.JSONRenderer()
            if json
            else structlog.dev.ConsoleRenderer(colors=False)
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                renderer,
            ],
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(resolve_level(level))


def configure_logging(level: int | str = logging.INFO, *, json: bool = True) -> None:
    """Module-level shorthand for :meth:`JsonLoggerFactory.configure`."""
    JsonLoggerFactory.configure(level, json=json)


__all__ = ["JsonLoggerFactory", "configure_logging", "resolve_level"]
