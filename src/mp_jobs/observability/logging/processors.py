"""Observability – structlog processors and get_logger helper.

``ScheduleValueProcessor`` renders the values the scheduler logs most
(``next_run``, ``fired_at``, job ids) in a stable text form before they reach
the JSON or console renderer.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from typing import Any

import structlog

from mp_jobs.kernel.time import format_duration, format_rfc3339


class ScheduleValueProcessor:
    """structlog processor: aware datetimes → RFC3339 ``Z`` strings,
    timedeltas → ``"1h 30m"`` durations, UUIDs → canonical strings.

    Naive datetimes are left untouched.

    Usage::

        structlog.configure(processors=[ScheduleValueProcessor(), ...])
    """

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, datetime) and value.tzinfo is not None:
                event_dict[key] = format_rfc3339(value)
            elif isinstance(value, timedelta) and value >= timedelta(0):
                event_dict[key] = format_duration(value)
            elif isinstance(value, uuid.UUID):
                event_dict[key] = str(value)
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a structlog logger, bound to *initial_values* when given.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["ScheduleValueProcessor", "get_logger"]
