"""Application scheduler – triggers and the stateful :class:`Schedule`.

A trigger is the immutable description of *when* (once, recurring, random,
cron).  A :class:`Schedule` binds one trigger to its live next-run, its run
counter and an optional run limit.

Reading state (``next_run``, ``is_due``, ``exhausted``) never mutates;
:meth:`Schedule.advance` is the only transition and is driven by the
scheduler after a job fires.
"""
from __future__ import annotations

import dataclasses
from datetime import datetime

from mp_jobs.application.scheduler.cron import CronPattern
from mp_jobs.application.scheduler.rules import RecurrenceRule
from mp_jobs.kernel.errors import InvalidScheduleError, TimeCalculationError
from mp_jobs.kernel.time import as_utc


@dataclasses.dataclass(frozen=True, slots=True)
class OnceTrigger:
    at: datetime

    def first_run(self, now: datetime) -> datetime | None:  # noqa: ARG002
        return self.at

    def following(self, previous: datetime, now: datetime) -> datetime | None:  # noqa: ARG002
        return None


@dataclasses.dataclass(frozen=True, slots=True)
class RecurringTrigger:
    rule: RecurrenceRule
    start: datetime

    def first_run(self, now: datetime) -> datetime | None:  # noqa: ARG002
        return self.start

    def following(self, previous: datetime, now: datetime) -> datetime | None:  # noqa: ARG002
        # anchored on the previous slot, not on wall-clock now
        return self.rule.next_after(previous)


@dataclasses.dataclass(frozen=True, slots=True)
class RandomTrigger:
    start: datetime
    end: datetime
    fire_at: datetime | None

    def first_run(self, now: datetime) -> datetime | None:  # noqa: ARG002
        return self.fire_at

    def following(self, previous: datetime, now: datetime) -> datetime | None:  # noqa: ARG002
        return None


@dataclasses.dataclass(frozen=True, slots=True)
class CronTrigger:
    pattern: CronPattern

    def first_run(self, now: datetime) -> datetime | None:
        return self.pattern.next_after(now)

    def following(self, previous: datetime, now: datetime) -> datetime | None:  # noqa: ARG002
        # calendar-absolute: a backlog collapses into the next slot after now
        return self.pattern.next_after(now)


type Trigger = OnceTrigger | RecurringTrigger | RandomTrigger | CronTrigger


class Schedule:
    """One trigger plus its run counter and optional limit."""

    __slots__ = ("trigger", "max_runs", "run_count", "_next_run")

    def __init__(self, trigger: Trigger, now: datetime, *, max_runs: int | None = None) -> None:
        self.trigger = trigger
        self.run_count = 0
        self.max_runs: int | None = None
        self.limit(1 if isinstance(trigger, OnceTrigger) and max_runs is None else max_runs)
        first = trigger.first_run(as_utc(now))
        self._next_run = as_utc(first) if first is not None else None

    @property
    def kind(self) -> str:
        return type(self.trigger).__name__.removesuffix("Trigger").lower()

    @property
    def exhausted(self) -> bool:
        return self.max_runs is not None and self.run_count >= self.max_runs

    @property
    def next_run(self) -> datetime | None:
        """Live next-run, or ``None`` once exhausted or finished."""
        if self.exhausted:
            return None
        return self._next_run

    def is_due(self, now: datetime) -> bool:
        upcoming = self.next_run
        return upcoming is not None and upcoming <= now

    def limit(self, max_runs: int | None) -> None:
        """Set (or clear, with ``None``) the maximum number of runs."""
        if max_runs is not None and (isinstance(max_runs, bool) or not isinstance(max_runs, int) or max_runs < 0):
            raise InvalidScheduleError(f"max_runs must be a non-negative integer, got {max_runs!r}")
        if isinstance(self.trigger, OnceTrigger) and max_runs is not None and max_runs > 1:
            raise InvalidScheduleError("A once schedule runs at most one time")
        self.max_runs = max_runs

    def advance(self, now: datetime) -> datetime | None:
        """Record one firing and compute the following next-run.

        Raises:
            TimeCalculationError: the following instant cannot be represented;
                the schedule is stopped (next-run ``None``) before re-raising.
        """
        if self.exhausted:
            return None
        self.run_count += 1
        if self._next_run is None:
            return None
        try:
            following = self.trigger.following(self._next_run, as_utc(now))
        except TimeCalculationError:
            self._next_run = None
            raise
        self._next_run = as_utc(following) if following is not None else None
        return self.next_run

    def __repr__(self) -> str:
        return (
            f"Schedule(kind={self.kind!r}, next_run={self.next_run!r}, "
            f"run_count={self.run_count}, max_runs={self.max_runs})"
        )


__all__ = [
    "CronTrigger",
    "OnceTrigger",
    "RandomTrigger",
    "RecurringTrigger",
    "Schedule",
    "Trigger",
]
