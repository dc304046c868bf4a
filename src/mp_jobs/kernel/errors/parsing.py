"""Parsing errors for the ``delay:`` / ``at:`` time-string codec."""

from __future__ import annotations

from typing import Any

from mp_jobs.kernel.errors.scheduling import InvalidScheduleError


class ScheduleTimeError(InvalidScheduleError):
    """A schedule-time string could not be parsed."""

    default_code = "schedule_time_error"


class InvalidFormatError(ScheduleTimeError):
    default_code = "invalid_format"

    def __init__(self, text: str, **kwargs: Any) -> None:
        super().__init__(
            f"Invalid format {text!r}: expected 'delay:<duration>' or 'at:<timestamp>'",
            **kwargs,
        )
        self.text = text


class UnknownTagError(ScheduleTimeError):
    default_code = "unknown_tag"

    def __init__(self, tag: str, **kwargs: Any) -> None:
        super().__init__(f"Unknown schedule type tag: {tag!r}", **kwargs)
        self.tag = tag


class DurationParseError(ScheduleTimeError):
    default_code = "duration_parse_error"

    def __init__(self, text: str, reason: str, **kwargs: Any) -> None:
        super().__init__(f"Failed to parse duration {text!r}: {reason}", **kwargs)
        self.text = text
        self.reason = reason


class TimestampParseError(ScheduleTimeError):
    default_code = "timestamp_parse_error"

    def __init__(self, text: str, reason: str, **kwargs: Any) -> None:
        super().__init__(f"Failed to parse timestamp {text!r}: {reason}", **kwargs)
        self.text = text
        self.reason = reason


__all__ = [
    "DurationParseError",
    "InvalidFormatError",
    "ScheduleTimeError",
    "TimestampParseError",
    "UnknownTagError",
]
