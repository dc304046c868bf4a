"""Application scheduler – recurrence rules.

A rule only knows how far apart two consecutive runs are.  It is frozen: the
mutable "when next" lives on the :class:`~.schedule.Schedule` that owns it.

Fixed-unit rules::

    Secondly(5).next_after(t)   # t + 5s
    Monthly(1).next_after(t)    # t + 30 days (not calendar-aware)

Named cadence::

    Custom("weekly").step()             # 7 days
    Custom("fortnightly", 14).step()    # unknown name -> ``frequency`` days
"""
from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta
from typing import ClassVar

from mp_jobs.kernel.errors import InvalidScheduleError, TimeCalculationError


def _shift(instant: datetime, step: timedelta) -> datetime:
    try:
        return instant + step
    except OverflowError as exc:
        raise TimeCalculationError(
            f"Cannot project {instant.isoformat()} by {step!r}", cause=exc
        ) from exc


@dataclasses.dataclass(frozen=True, slots=True)
class FixedInterval:
    """``every`` × ``unit``; concrete subclasses pin the unit."""

    every: int = 1
    unit: ClassVar[timedelta] = timedelta(0)

    def __post_init__(self) -> None:
        if isinstance(self.every, bool) or not isinstance(self.every, int) or self.every <= 0:
            raise InvalidScheduleError(
                f"{type(self).__name__} multiplier must be a positive integer, got {self.every!r}"
            )

    def step(self) -> timedelta:
        try:
            return self.unit * self.every
        except OverflowError as exc:
            raise TimeCalculationError(
                f"{type(self).__name__}({self.every}) does not fit in a timedelta", cause=exc
            ) from exc

    def default_offset(self) -> timedelta:
        return self.step()

    def next_after(self, previous: datetime) -> datetime:
        return _shift(previous, self.step())


class Secondly(FixedInterval):
    unit = timedelta(seconds=1)


class Minutely(FixedInterval):
    unit = timedelta(minutes=1)


class Hourly(FixedInterval):
    unit = timedelta(hours=1)


class Daily(FixedInterval):
    unit = timedelta(days=1)


class Weekly(FixedInterval):
    unit = timedelta(weeks=1)


class Monthly(FixedInterval):
    unit = timedelta(days=30)


_NAMED_CADENCES: dict[str, int] = {"daily": 1, "weekly": 7, "monthly": 30}


@dataclasses.dataclass(frozen=True, slots=True)
class Custom:
    """Named cadence measured in days."""

    name: str
    frequency: int = 1

    def __post_init__(self) -> None:
        if self.name.lower() not in _NAMED_CADENCES and (
            isinstance(self.frequency, bool) or not isinstance(self.frequency, int) or self.frequency <= 0
        ):
            raise InvalidScheduleError(
                f"Custom cadence {self.name!r} needs a positive frequency, got {self.frequency!r}"
            )

    def step(self) -> timedelta:
        days = _NAMED_CADENCES.get(self.name.lower(), self.frequency)
        try:
            return timedelta(days=days)
        except OverflowError as exc:
            raise TimeCalculationError(
                f"Custom cadence of {days} days does not fit in a timedelta", cause=exc
            ) from exc

    def default_offset(self) -> timedelta:
        return timedelta(minutes=1)

    def next_after(self, previous: datetime) -> datetime:
        return _shift(previous, self.step())


type RecurrenceRule = FixedInterval | Custom


def rule_from_interval(interval: timedelta) -> FixedInterval:
    """Pick the coarsest exact unit for *interval* (days, hours, minutes, seconds)."""
    if interval <= timedelta(0):
        raise InvalidScheduleError(f"Interval must be positive, got {interval!r}")
    if interval % timedelta(seconds=1):
        raise InvalidScheduleError(f"Interval must be a whole number of seconds, got {interval!r}")

    seconds = int(interval.total_seconds())
    for cls in (Daily, Hourly, Minutely):
        size = int(cls.unit.total_seconds())
        if seconds % size == 0:
            return cls(seconds // size)
    return Secondly(seconds)


__all__ = [
    "Custom",
    "Daily",
    "FixedInterval",
    "Hourly",
    "Minutely",
    "Monthly",
    "RecurrenceRule",
    "Secondly",
    "Weekly",
    "rule_from_interval",
]
