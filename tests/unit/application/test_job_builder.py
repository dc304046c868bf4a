"""Unit tests for Job and JobBuilder."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from mp_jobs.application.scheduler import (
    CronTrigger,
    Daily,
    Hourly,
    JobBuilder,
    Minutely,
    OnceTrigger,
    RandomRangeResolver,
    RandomTrigger,
    RecurringTrigger,
    Weekly,
)
from mp_jobs.kernel.errors import (
    ExecutionFailedError,
    HandlerNotBuiltError,
    InvalidScheduleError,
)
from mp_jobs.kernel.time import At, Delay, FrozenClock
from mp_jobs.kernel.types import Err, Ok
from mp_jobs.testing import FakeClock

NOW = datetime(2026, 1, 1, 12, tzinfo=UTC)


@pytest.fixture
def clock() -> FrozenClock:
    return FakeClock()


def _noop() -> None:
    pass


class TestOnce:
    def test_delay_is_resolved_at_build_time(self, clock: FrozenClock) -> None:
        builder = JobBuilder("once", clock=clock).once(Delay(timedelta(seconds=5)))
        clock.advance(seconds=30)
        job = builder.build()
        assert job.next_run == NOW + timedelta(seconds=5)
        schedule = job.schedules[0]
        assert isinstance(schedule.trigger, OnceTrigger)
        assert schedule.max_runs == 1

    def test_at_with_system_clock_within_tolerance(self) -> None:
        target = datetime.now(UTC) + timedelta(seconds=5)
        job = JobBuilder("once").once(At(target)).build()
        assert job.next_run is not None
        assert abs(job.next_run - target) < timedelta(milliseconds=100)

    def test_max_runs_zero_disables(self, clock: FrozenClock) -> None:
        job = JobBuilder("once", clock=clock).once(At(NOW), max_runs=0).build()
        assert job.schedules[0].max_runs == 0
        assert job.next_run is None

    def test_max_runs_above_one_rejected(self, clock: FrozenClock) -> None:
        with pytest.raises(InvalidScheduleError):
            JobBuilder("once", clock=clock).once(At(NOW), max_runs=2)


class TestRecurring:
    def test_explicit_start(self, clock: FrozenClock) -> None:
        job = JobBuilder("r", clock=clock).recurring(Hourly(2), At(NOW + timedelta(seconds=5))).build()
        schedule = job.schedules[0]
        assert isinstance(schedule.trigger, RecurringTrigger)
        assert schedule.trigger.rule == Hourly(2)
        assert schedule.max_runs is None
        assert job.next_run == NOW + timedelta(seconds=5)

    def test_default_start_is_one_step_out(self, clock: FrozenClock) -> None:
        job = JobBuilder("r", clock=clock).recurring(Minutely(5)).build()
        assert job.next_run == NOW + timedelta(minutes=5)

    def test_delay_start(self, clock: FrozenClock) -> None:
        job = JobBuilder("r", clock=clock).recurring(Weekly(3), Delay(timedelta(seconds=10))).build()
        assert job.next_run == NOW + timedelta(seconds=10)

    def test_explicit_max_runs(self, clock: FrozenClock) -> None:
        job = JobBuilder("r", clock=clock).recurring(Daily(1), max_runs=3).build()
        assert job.schedules[0].max_runs == 3

    def test_every_converts_interval(self, clock: FrozenClock) -> None:
        job = JobBuilder("e", clock=clock).every(timedelta(hours=3), At(NOW)).build()
        assert job.schedules[0].trigger.rule == Hourly(3)  # type: ignore[union-attr]

    def test_every_rejects_sub_second(self, clock: FrozenClock) -> None:
        with pytest.raises(InvalidScheduleError):
            JobBuilder("e", clock=clock).every(timedelta(milliseconds=10))


class TestCron:
    def test_valid_cron_seeds_next_run(self, clock: FrozenClock) -> None:
        job = JobBuilder("c", clock=clock).cron("* * * * * *").build()
        schedule = job.schedules[0]
        assert isinstance(schedule.trigger, CronTrigger)
        assert schedule.max_runs is None
        assert job.next_run == NOW + timedelta(seconds=1)

    def test_seven_field_expression(self, clock: FrozenClock) -> None:
        job = JobBuilder("c", clock=clock).cron("0 0 0 * * * *").build()
        assert job.next_run == datetime(2026, 1, 2, tzinfo=UTC)

    def test_invalid_cron_is_omitted_and_reported(self, clock: FrozenClock) -> None:
        builder = JobBuilder("c", clock=clock).once(At(NOW)).cron("definitely not cron")
        assert len(builder.schedules) == 1
        assert len(builder.diagnostics) == 1
        assert isinstance(builder.diagnostics[0], InvalidScheduleError)
        assert len(builder.build().schedules) == 1

    def test_strict_build_raises_diagnostic(self, clock: FrozenClock) -> None:
        builder = JobBuilder("c", clock=clock).cron("bad")
        with pytest.raises(InvalidScheduleError):
            builder.build(strict=True)


class TestRandom:
    def test_within_bounds(self, clock: FrozenClock) -> None:
        start, end = NOW + timedelta(seconds=1), NOW + timedelta(seconds=10)
        job = JobBuilder("rand", clock=clock, resolver=RandomRangeResolver(seed=3)).random(
            At(start), At(end)
        ).build()
        assert job.next_run is not None
        assert start <= job.next_run < end
        assert isinstance(job.schedules[0].trigger, RandomTrigger)

    def test_inverted_range_adds_schedule_without_next_run(self, clock: FrozenClock) -> None:
        job = JobBuilder("rand", clock=clock).random(
            At(NOW + timedelta(seconds=10)), At(NOW - timedelta(seconds=1))
        ).build()
        assert len(job.schedules) == 1
        assert job.next_run is None

    def test_delay_bounds(self, clock: FrozenClock) -> None:
        job = JobBuilder("rand", clock=clock, resolver=RandomRangeResolver(seed=9)).random(
            Delay(timedelta(seconds=15)), Delay(timedelta(seconds=25))
        ).build()
        assert NOW + timedelta(seconds=15) <= job.next_run < NOW + timedelta(seconds=25)  # type: ignore[operator]

    def test_max_runs_keyword(self, clock: FrozenClock) -> None:
        job = JobBuilder("rand", clock=clock, resolver=RandomRangeResolver(seed=1)).random(
            Delay(timedelta(seconds=1)), Delay(timedelta(seconds=2)), max_runs=1
        ).build()
        assert job.schedules[0].max_runs == 1


class TestMerge:
    def test_next_run_is_minimum_across_schedules(self, clock: FrozenClock) -> None:
        job = (
            JobBuilder("merge", clock=clock)
            .once(Delay(timedelta(seconds=60)))
            .once(Delay(timedelta(seconds=30)))
            .once(Delay(timedelta(seconds=90)))
            .build()
        )
        assert job.next_run == NOW + timedelta(seconds=30)

    def test_builder_next_run_only_tightens(self, clock: FrozenClock) -> None:
        builder = JobBuilder("merge", clock=clock).once(Delay(timedelta(seconds=30)))
        builder.once(Delay(timedelta(seconds=90)))
        assert builder.next_run == NOW + timedelta(seconds=30)


class TestMaxRepeat:
    def test_applies_to_preceding_schedule(self, clock: FrozenClock) -> None:
        builder = (
            JobBuilder("m", clock=clock)
            .recurring(Minutely(1))
            .recurring(Hourly(1))
            .max_repeat(4)
        )
        assert builder.schedules[0].max_runs is None
        assert builder.schedules[1].max_runs == 4
        assert builder.last_schedule is builder.schedules[1]

    def test_explicit_index(self, clock: FrozenClock) -> None:
        builder = JobBuilder("m", clock=clock).recurring(Minutely(1)).recurring(Hourly(1)).max_repeat(2, index=0)
        assert builder.schedules[0].max_runs == 2
        assert builder.schedules[1].max_runs is None

    def test_bad_index(self, clock: FrozenClock) -> None:
        with pytest.raises(InvalidScheduleError):
            JobBuilder("m", clock=clock).max_repeat(2, index=0)

    def test_skipped_after_rejected_cron(self, clock: FrozenClock) -> None:
        builder = JobBuilder("m", clock=clock).recurring(Minutely(1)).cron("nope").max_repeat(2)
        assert builder.schedules[0].max_runs is None

    def test_noop_without_schedules(self, clock: FrozenClock) -> None:
        builder = JobBuilder("m", clock=clock).max_repeat(2)
        assert builder.schedules == []


class TestJob:
    def test_unnamed_job(self, clock: FrozenClock) -> None:
        job = JobBuilder(clock=clock).once(At(NOW)).add_handler(_noop).build()
        assert job.name is None
        assert job.label == str(job.id)

    def test_ids_are_unique(self, clock: FrozenClock) -> None:
        a = JobBuilder("a", clock=clock).build()
        b = JobBuilder("a", clock=clock).build()
        assert a.id != b.id

    def test_run_invokes_callback(self, clock: FrozenClock) -> None:
        calls: list[int] = []
        job = JobBuilder("j", clock=clock).once(At(NOW)).add_handler(lambda: calls.append(1)).build()
        assert job.run() == Ok(None)
        assert calls == [1]

    def test_run_without_handler(self, clock: FrozenClock) -> None:
        job = JobBuilder("j", clock=clock).once(At(NOW)).build()
        with pytest.raises(HandlerNotBuiltError):
            job.run()

    def test_run_wraps_exception(self, clock: FrozenClock) -> None:
        def boom() -> None:
            raise RuntimeError("disk full")

        job = JobBuilder("j", clock=clock).once(At(NOW)).add_handler(boom).build()
        with pytest.raises(ExecutionFailedError) as info:
            job.run()
        assert info.value.reason == "disk full"
        assert isinstance(info.value.__cause__, RuntimeError)

    def test_run_treats_err_as_failure(self, clock: FrozenClock) -> None:
        job = JobBuilder("j", clock=clock).once(At(NOW)).add_handler(lambda: Err(ValueError("nope"))).build()
        with pytest.raises(ExecutionFailedError) as info:
            job.run()
        assert info.value.reason == "nope"

    def test_run_accepts_ok(self, clock: FrozenClock) -> None:
        job = JobBuilder("j", clock=clock).once(At(NOW)).add_handler(lambda: Ok("done")).build()
        assert job.run() == Ok("done")

    def test_run_wraps_plain_return(self, clock: FrozenClock) -> None:
        job = JobBuilder("j", clock=clock).once(At(NOW)).add_handler(lambda: 42).build()
        assert job.run().value == 42

    def test_refresh_next_run_after_exhaustion(self, clock: FrozenClock) -> None:
        job = JobBuilder("j", clock=clock).once(At(NOW)).once(At(NOW + timedelta(seconds=5))).build()
        job.schedules[0].advance(NOW)
        assert job.refresh_next_run() == NOW + timedelta(seconds=5)
