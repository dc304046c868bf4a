"""Kernel time – Clock port, time specifiers and the duration grammar."""
from mp_jobs.kernel.time.clock import Clock, FrozenClock, SystemClock, utc_now
from mp_jobs.kernel.time.durations import format_duration, parse_duration
from mp_jobs.kernel.time.schedule_time import (
    At,
    Delay,
    ScheduleTime,
    as_utc,
    format_rfc3339,
    format_schedule_time,
    parse_rfc3339,
    parse_schedule_time,
)

__all__ = [
    "At",
    "Clock",
    "Delay",
    "FrozenClock",
    "ScheduleTime",
    "SystemClock",
    "as_utc",
    "format_duration",
    "format_rfc3339",
    "format_schedule_time",
    "parse_duration",
    "parse_rfc3339",
    "parse_schedule_time",
    "utc_now",
]
