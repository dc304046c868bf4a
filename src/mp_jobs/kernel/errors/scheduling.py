"""Scheduling errors – raised while building, registering or firing jobs."""

from __future__ import annotations

from typing import Any

from mp_jobs.kernel.errors.base import BaseError


class SchedulingError(BaseError):
    """Base class for everything the scheduling core reports."""

    default_code = "scheduling_error"


class InvalidScheduleError(SchedulingError):
    """A schedule descriptor could not be resolved."""

    default_code = "invalid_schedule"


class MissingScheduleError(SchedulingError):
    """A job was registered without any schedule."""

    default_code = "missing_schedule"

    def __init__(self, job_name: str | None = None, **kwargs: Any) -> None:
        msg = "No schedule found"
        if job_name:
            msg = f"No schedule found for job '{job_name}'"
        super().__init__(msg, **kwargs)
        self.job_name = job_name


class HandlerNotBuiltError(SchedulingError):
    """A job was registered, or asked to run, with no callback attached."""

    default_code = "handler_not_built"

    def __init__(self, job_name: str | None = None, **kwargs: Any) -> None:
        msg = "Handler not built"
        if job_name:
            msg = f"Handler not built for job '{job_name}'"
        super().__init__(msg, **kwargs)
        self.job_name = job_name


class ExecutionFailedError(SchedulingError):
    """The callback ran and failed.

    ``reason`` keeps the original failure text; the original exception, when
    there is one, is chained as ``cause``.
    """

    default_code = "execution_failed"

    def __init__(self, job_name: str | None, reason: str, **kwargs: Any) -> None:
        label = f"'{job_name}'" if job_name else "(unnamed)"
        super().__init__(f"Job {label} execution failed: {reason}", **kwargs)
        self.job_name = job_name
        self.reason = reason


class TimeCalculationError(SchedulingError):
    """An instant could not be computed (e.g. datetime overflow)."""

    default_code = "time_calculation_error"

    def __init__(self, message: str = "Error calculating target time", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class JobNotFoundError(SchedulingError):
    """No job with the given identifier is owned by the scheduler."""

    default_code = "job_not_found"

    def __init__(self, job_id: Any, **kwargs: Any) -> None:
        super().__init__(f"Job '{job_id}' not found", **kwargs)
        self.job_id = job_id


__all__ = [
    "ExecutionFailedError",
    "HandlerNotBuiltError",
    "InvalidScheduleError",
    "JobNotFoundError",
    "MissingScheduleError",
    "SchedulingError",
    "TimeCalculationError",
]
