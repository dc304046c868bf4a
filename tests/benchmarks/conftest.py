"""conftest.py for benchmarks.

Silences scheduler log output below WARNING so timings measure scheduling
work rather than rendering, and provides a populated scheduler fixture.
"""

from __future__ import annotations

import logging
from datetime import timedelta

import pytest
import structlog

from mp_jobs.application.scheduler import InMemoryScheduler, JobBuilder, Minutely
from mp_jobs.kernel.time import Delay
from mp_jobs.testing import FakeClock


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING))
    yield
    structlog.reset_defaults()


@pytest.fixture
def populated_scheduler():
    """Factory returning ``(clock, scheduler)`` with *n* minutely jobs.

    Usage inside a benchmark::

        def test_something(benchmark, populated_scheduler):
            clock, scheduler = populated_scheduler(500)
    """

    def _build(n: int) -> tuple:
        clock = FakeClock()
        scheduler = InMemoryScheduler(clock=clock)
        for i in range(n):
            job = (
                JobBuilder(f"job-{i}", clock=clock)
                .recurring(Minutely(), Delay(timedelta(seconds=i % 60)))
                .add_handler(lambda: None)
                .build()
            )
            scheduler.add_job(job)
        return clock, scheduler

    return _build
