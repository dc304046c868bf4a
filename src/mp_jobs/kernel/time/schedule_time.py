"""Kernel time – the ``Delay`` / ``At`` time specifier.

A specifier is resolved to an absolute UTC instant exactly once, when a
schedule is built.  ``Delay`` therefore means "N from construction time",
never "N from whenever somebody asks".

String form::

    delay:<duration>        e.g. "delay:1h 30m"
    at:<RFC3339 timestamp>  e.g. "at:2025-05-05T12:00:00Z"
"""
from __future__ import annotations

import dataclasses
from datetime import UTC, datetime, timedelta

from mp_jobs.kernel.errors import (
    InvalidFormatError,
    InvalidScheduleError,
    TimeCalculationError,
    TimestampParseError,
    UnknownTagError,
)
from mp_jobs.kernel.time.durations import format_duration, parse_duration


def as_utc(instant: datetime) -> datetime:
    """Normalise *instant* to an aware UTC datetime (naive means UTC)."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC)


def format_rfc3339(instant: datetime) -> str:
    instant = as_utc(instant)
    text = instant.strftime("%Y-%m-%dT%H:%M:%S")
    if instant.microsecond:
        text += f".{instant.microsecond:06d}"
    return text + "Z"


def parse_rfc3339(text: str) -> datetime:
    """Parse an RFC3339 timestamp; an explicit offset (or ``Z``) is mandatory."""
    raw = text.strip()
    if raw[-1:] in ("z", "Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise TimestampParseError(text, str(exc), cause=exc) from exc
    if parsed.tzinfo is None:
        raise TimestampParseError(text, "missing UTC offset")
    return parsed.astimezone(UTC)


@dataclasses.dataclass(frozen=True, slots=True)
class Delay:
    """Fire ``duration`` after the moment the schedule is built."""

    duration: timedelta

    def __post_init__(self) -> None:
        if self.duration < timedelta(0):
            raise InvalidScheduleError(
                f"Delay must not be negative, got {self.duration!r}",
                detail={"duration_seconds": self.duration.total_seconds()},
            )

    def resolve(self, now: datetime) -> datetime:
        try:
            return as_utc(now) + self.duration
        except OverflowError as exc:
            raise TimeCalculationError(cause=exc) from exc

    def __str__(self) -> str:
        return f"delay:{format_duration(self.duration)}"


@dataclasses.dataclass(frozen=True, slots=True)
class At:
    """Fire at a fixed instant (stored as aware UTC)."""

    instant: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "instant", as_utc(self.instant))

    def resolve(self, now: datetime) -> datetime:  # noqa: ARG002
        return self.instant

    def __str__(self) -> str:
        return f"at:{format_rfc3339(self.instant)}"


type ScheduleTime = Delay | At


def parse_schedule_time(text: str) -> Delay | At:
    """Parse ``delay:<duration>`` or ``at:<timestamp>``.

    Raises:
        InvalidFormatError: no ``tag:value`` separator.
        UnknownTagError: a tag other than ``delay`` / ``at``.
        DurationParseError / TimestampParseError: the value is malformed.
    """
    tag, sep, value = text.partition(":")
    if not sep:
        raise InvalidFormatError(text)
    tag = tag.strip().lower()
    value = value.strip()
    if tag == "delay":
        return Delay(parse_duration(value))
    if tag == "at":
        return At(parse_rfc3339(value))
    raise UnknownTagError(tag)


def format_schedule_time(value: Delay | At) -> str:
    return str(value)


__all__ = [
    "At",
    "Delay",
    "ScheduleTime",
    "as_utc",
    "format_rfc3339",
    "format_schedule_time",
    "parse_rfc3339",
    "parse_schedule_time",
]
