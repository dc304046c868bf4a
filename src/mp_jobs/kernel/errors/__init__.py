"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── SchedulingError               (scheduling.py)
    │   ├── InvalidScheduleError
    │   │   └── ScheduleTimeError     (parsing.py)
    │   │       ├── InvalidFormatError
    │   │       ├── UnknownTagError
    │   │       ├── DurationParseError
    │   │       └── TimestampParseError
    │   ├── MissingScheduleError
    │   ├── HandlerNotBuiltError
    │   ├── ExecutionFailedError
    │   ├── TimeCalculationError
    │   └── JobNotFoundError
    └── ConfigError                   (mp_jobs.config.errors)
"""

from mp_jobs.kernel.errors.base import BaseError
from mp_jobs.kernel.errors.parsing import (
    DurationParseError,
    InvalidFormatError,
    ScheduleTimeError,
    TimestampParseError,
    UnknownTagError,
)
from mp_jobs.kernel.errors.scheduling import (
    ExecutionFailedError,
    HandlerNotBuiltError,
    InvalidScheduleError,
    JobNotFoundError,
    MissingScheduleError,
    SchedulingError,
    TimeCalculationError,
)

__all__ = [
    "BaseError",
    "DurationParseError",
    "ExecutionFailedError",
    "HandlerNotBuiltError",
    "InvalidFormatError",
    "InvalidScheduleError",
    "JobNotFoundError",
    "MissingScheduleError",
    "ScheduleTimeError",
    "SchedulingError",
    "TimeCalculationError",
    "TimestampParseError",
    "UnknownTagError",
]
