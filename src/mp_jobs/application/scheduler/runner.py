"""Application scheduler – SchedulerRunner, a sleep-and-poll driving loop.

The scheduler itself never blocks; this loop calls
:meth:`~InMemoryScheduler.run_pending` repeatedly and sleeps in between.
Sleeping is injected so tests can swap ``time.sleep`` for a function that
moves a :class:`~mp_jobs.kernel.time.FrozenClock` forward.
"""
from __future__ import annotations

import threading
import time
from collections.abc import Callable

from mp_jobs.application.scheduler.in_memory import InMemoryScheduler
from mp_jobs.application.scheduler.scheduler import JobExecutedEvent
from mp_jobs.config import SchedulerSettings
from mp_jobs.kernel.time import Clock
from mp_jobs.observability.logging import get_logger

__all__ = ["SchedulerRunner"]

logger = get_logger(__name__)


class SchedulerRunner:
    """Poll an :class:`InMemoryScheduler` until told to stop or until idle."""

    def __init__(
        self,
        scheduler: InMemoryScheduler,
        *,
        clock: Clock | None = None,
        settings: SchedulerSettings | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._scheduler = scheduler
        self._clock = clock or scheduler.clock
        self._settings = settings or SchedulerSettings()
        self._sleep = sleep
        self.events: list[JobExecutedEvent] = []
        self.ticks = 0

    def tick(self) -> list[JobExecutedEvent]:
        fired = self._scheduler.run_pending()
        self.ticks += 1
        self.events.extend(fired)
        return fired

    def sleep_interval(self) -> float:
        """Seconds until the next poll: at least the poll interval, at most ``max_sleep``."""
        poll = self._settings.poll_interval_seconds
        upcoming = self._scheduler.next_run()
        if upcoming is None:
            return poll
        wait = (upcoming - self._clock.now()).total_seconds()
        return min(self._settings.max_sleep_seconds, max(poll, wait))

    def run_until_complete(self, max_ticks: int | None = None) -> list[JobExecutedEvent]:
        """Tick until no job has a pending run (or *max_ticks* is reached)."""
        start = len(self.events)
        ticks = 0
        while self._scheduler.has_pending():
            if max_ticks is not None and ticks >= max_ticks:
                logger.warning("runner_tick_budget_exhausted", max_ticks=max_ticks)
                break
            self.tick()
            ticks += 1
            if self._scheduler.has_pending():
                self._sleep(self.sleep_interval())
        logger.info("runner_idle", ticks=ticks, fired=len(self.events) - start)
        return self.events[start:]

    def run_forever(self, stop: threading.Event) -> None:
        """Tick until *stop* is set; sleeps via ``stop.wait`` when using real time."""
        while not stop.is_set():
            self.tick()
            interval = self.sleep_interval()
            if self._sleep is time.sleep:
                stop.wait(interval)
            else:
                self._sleep(interval)
        logger.info("runner_stopped", ticks=self.ticks, fired=len(self.events))
