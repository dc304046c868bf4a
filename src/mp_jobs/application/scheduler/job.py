"""Application scheduler – Job and the fluent JobBuilder.

Example::

    job = (
        JobBuilder("cache-cleaner")
        .recurring(Hourly(6), Delay(timedelta(seconds=10)), max_runs=4)
        .cron("0 0 0 * * * *")
        .add_handler(clear_cache)
        .build()
    )
"""
from __future__ import annotations

import dataclasses
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Self

from mp_jobs.application.scheduler.cron import CronPattern
from mp_jobs.application.scheduler.random_range import RandomRangeResolver
from mp_jobs.application.scheduler.rules import RecurrenceRule, rule_from_interval
from mp_jobs.application.scheduler.schedule import (
    CronTrigger,
    OnceTrigger,
    RandomTrigger,
    RecurringTrigger,
    Schedule,
    Trigger,
)
from mp_jobs.kernel.errors import (
    ExecutionFailedError,
    HandlerNotBuiltError,
    InvalidScheduleError,
    SchedulingError,
    TimeCalculationError,
)
from mp_jobs.kernel.time import At, Clock, Delay, SystemClock
from mp_jobs.kernel.types import Err, Ok
from mp_jobs.observability.logging import get_logger

logger = get_logger(__name__)

Callback = Callable[[], object]


def _reason(exc: BaseException) -> str:
    return getattr(exc, "message", None) or str(exc) or type(exc).__name__


@dataclasses.dataclass(eq=False)
class Job:
    """A named unit of work: one callback, one or more schedules.

    ``next_run`` is a cache of the earliest live schedule next-run; call
    :meth:`refresh_next_run` whenever a schedule may have changed.
    """

    name: str | None
    schedules: list[Schedule] = dataclasses.field(default_factory=list)
    callback: Callback | None = None
    id: uuid.UUID = dataclasses.field(default_factory=uuid.uuid4)
    last_run: datetime | None = None
    next_run: datetime | None = dataclasses.field(default=None, init=False)

    def __post_init__(self) -> None:
        self.refresh_next_run()

    @property
    def label(self) -> str:
        return self.name or str(self.id)

    def refresh_next_run(self) -> datetime | None:
        live = [s.next_run for s in self.schedules if s.next_run is not None]
        self.next_run = min(live) if live else None
        return self.next_run

    def is_due(self, now: datetime) -> bool:
        return self.next_run is not None and self.next_run <= now

    def due_schedules(self, now: datetime) -> list[Schedule]:
        return [s for s in self.schedules if s.is_due(now)]

    def run(self) -> Ok[object]:
        """Invoke the callback and return its outcome as an :class:`Ok`.

        A callback that already returns ``Ok`` is passed through; any other
        non-``Err`` return value is wrapped.

        Raises:
            HandlerNotBuiltError: no callback attached.
            ExecutionFailedError: the callback raised, or returned ``Err``.
        """
        if self.callback is None:
            raise HandlerNotBuiltError(self.name)
        try:
            outcome = self.callback()
        except Exception as exc:
            raise ExecutionFailedError(self.name, _reason(exc), cause=exc) from exc
        if isinstance(outcome, Err):
            raise ExecutionFailedError(self.name, _reason(outcome.error), cause=outcome.error)
        return outcome if isinstance(outcome, Ok) else Ok(outcome)

    def __repr__(self) -> str:
        return (
            f"Job(name={self.name!r}, id={str(self.id)!r}, schedules={len(self.schedules)}, "
            f"next_run={self.next_run!r}, last_run={self.last_run!r})"
        )


class JobBuilder:
    """Fluent construction of a :class:`Job`.

    Every schedule method resolves its time specifiers against the builder's
    clock immediately, so ``Delay`` means "from now, at build time".

    Rejected cron expressions do not raise: they are kept in
    :attr:`diagnostics`, logged, and the schedule is left out.  Use
    ``build(strict=True)`` to turn them into an error.
    """

    def __init__(
        self,
        name: str = "",
        *,
        clock: Clock | None = None,
        resolver: RandomRangeResolver | None = None,
    ) -> None:
        self.id = uuid.uuid4()
        self.name: str | None = name or None
        self.schedules: list[Schedule] = []
        self.next_run: datetime | None = None
        self.handler: Callback | None = None
        self.diagnostics: list[SchedulingError] = []
        self._clock = clock or SystemClock()
        self._resolver = resolver or RandomRangeResolver()
        self._last: Schedule | None = None

    # ------------------------------------------------------------------
    # Schedules
    # ------------------------------------------------------------------

    def _add(self, trigger: Trigger, now: datetime, max_runs: int | None = None) -> Self:
        schedule = Schedule(trigger, now, max_runs=max_runs)
        self.schedules.append(schedule)
        self._last = schedule
        upcoming = schedule.next_run
        if upcoming is not None and (self.next_run is None or upcoming < self.next_run):
            self.next_run = upcoming
        return self

    def once(self, time: Delay | At, *, max_runs: int | None = None) -> Self:
        """Run once at (or after) *time*; *max_runs* may only be 0 or 1."""
        now = self._clock.now()
        return self._add(OnceTrigger(time.resolve(now)), now, max_runs)

    def recurring(
        self,
        rule: RecurrenceRule,
        start: Delay | At | None = None,
        *,
        max_runs: int | None = None,
    ) -> Self:
        """Run on *rule*; without *start* the first run is one step out."""
        now = self._clock.now()
        if start is not None:
            first = start.resolve(now)
        else:
            try:
                first = now + rule.default_offset()
            except OverflowError as exc:
                raise TimeCalculationError(cause=exc) from exc
        return self._add(RecurringTrigger(rule, first), now, max_runs)

    def every(
        self,
        interval: timedelta,
        start: Delay | At | None = None,
        *,
        max_runs: int | None = None,
    ) -> Self:
        """Shorthand for :meth:`recurring` with a rule derived from *interval*."""
        return self.recurring(rule_from_interval(interval), start, max_runs=max_runs)

    def cron(self, expression: str, *, max_runs: int | None = None) -> Self:
        now = self._clock.now()
        try:
            pattern = CronPattern.parse(expression)
            return self._add(CronTrigger(pattern), now, max_runs)
        except (InvalidScheduleError, TimeCalculationError) as exc:
            self.diagnostics.append(exc)
            self._last = None
            fields = exc.log_fields()
            fields.setdefault("expression", expression)
            logger.warning("cron_schedule_rejected", job=self.name, **fields)
            return self

    def random(
        self, start: Delay | At, end: Delay | At, *, max_runs: int | None = None
    ) -> Self:
        """Run once at a uniformly drawn instant in ``[start, end)``.

        An empty or inverted range still adds the schedule, which then never
        fires.
        """
        now = self._clock.now()
        lower, upper = start.resolve(now), end.resolve(now)
        return self._add(
            RandomTrigger(lower, upper, self._resolver.pick(lower, upper)), now, max_runs
        )

    def max_repeat(self, max_runs: int, *, index: int | None = None) -> Self:
        """Cap a schedule's runs.

        With ``index=None`` the cap applies to the schedule added by the
        immediately preceding call, and is skipped when that call was a
        rejected cron expression.  An explicit *index* addresses
        :attr:`schedules` directly.
        """
        if index is None:
            target = self._last
            if target is None:
                logger.warning("max_repeat_skipped", job=self.name, max_runs=max_runs)
                return self
        else:
            try:
                target = self.schedules[index]
            except IndexError as exc:
                raise InvalidScheduleError(
                    f"No schedule at index {index} (job has {len(self.schedules)})", cause=exc
                ) from exc
        target.limit(max_runs)
        return self

    @property
    def last_schedule(self) -> Schedule | None:
        return self._last

    # ------------------------------------------------------------------
    # Handler / build
    # ------------------------------------------------------------------

    def add_handler(self, handler: Callback) -> Self:
        self.handler = handler
        return self

    def build(self, *, strict: bool = False) -> Job:
        if strict and self.diagnostics:
            raise self.diagnostics[0]
        return Job(
            name=self.name,
            schedules=list(self.schedules),
            callback=self.handler,
            id=self.id,
        )


__all__ = ["Callback", "Job", "JobBuilder"]
