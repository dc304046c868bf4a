"""Unit tests for Schedule state and advancement."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from mp_jobs.application.scheduler import (
    CronPattern,
    CronTrigger,
    Monthly,
    OnceTrigger,
    RandomTrigger,
    RecurringTrigger,
    Schedule,
    Secondly,
)
from mp_jobs.kernel.errors import InvalidScheduleError, TimeCalculationError

NOW = datetime(2026, 1, 1, 12, tzinfo=UTC)


class TestOnce:
    def test_defaults(self) -> None:
        schedule = Schedule(OnceTrigger(NOW + timedelta(seconds=5)), NOW)
        assert schedule.next_run == NOW + timedelta(seconds=5)
        assert schedule.max_runs == 1
        assert schedule.run_count == 0
        assert schedule.kind == "once"

    def test_advance_finishes(self) -> None:
        schedule = Schedule(OnceTrigger(NOW), NOW)
        assert schedule.advance(NOW) is None
        assert schedule.next_run is None
        assert schedule.run_count == 1
        assert schedule.exhausted

    def test_cannot_raise_limit_above_one(self) -> None:
        schedule = Schedule(OnceTrigger(NOW), NOW)
        with pytest.raises(InvalidScheduleError):
            schedule.limit(3)


class TestRecurring:
    def test_advance_is_anchored_on_previous_slot(self) -> None:
        schedule = Schedule(RecurringTrigger(Secondly(5), NOW), NOW)
        late = NOW + timedelta(seconds=3)
        assert schedule.advance(late) == NOW + timedelta(seconds=5)
        assert schedule.advance(late) == NOW + timedelta(seconds=10)
        assert schedule.run_count == 2

    def test_max_runs_exhausts(self) -> None:
        schedule = Schedule(RecurringTrigger(Secondly(1), NOW), NOW, max_runs=2)
        schedule.advance(NOW)
        assert schedule.next_run == NOW + timedelta(seconds=1)
        schedule.advance(NOW + timedelta(seconds=1))
        assert schedule.next_run is None
        assert schedule.exhausted

    def test_exhausted_advance_is_a_noop(self) -> None:
        schedule = Schedule(RecurringTrigger(Secondly(1), NOW), NOW, max_runs=1)
        schedule.advance(NOW)
        assert schedule.advance(NOW + timedelta(seconds=5)) is None
        assert schedule.run_count == 1

    def test_zero_max_runs_never_fires(self) -> None:
        schedule = Schedule(RecurringTrigger(Secondly(1), NOW), NOW, max_runs=0)
        assert schedule.next_run is None
        assert not schedule.is_due(NOW + timedelta(days=1))

    def test_overflow_stops_schedule(self) -> None:
        far = datetime(9999, 12, 1, tzinfo=UTC)
        schedule = Schedule(RecurringTrigger(Monthly(2), far), far)
        with pytest.raises(TimeCalculationError):
            schedule.advance(far)
        assert schedule.next_run is None
        assert schedule.run_count == 1

    @pytest.mark.parametrize("bad", [-1, 1.5, True])
    def test_invalid_limit(self, bad) -> None:
        with pytest.raises(InvalidScheduleError):
            Schedule(RecurringTrigger(Secondly(1), NOW), NOW, max_runs=bad)


class TestPeekDoesNotMutate:
    def test_reading_is_idempotent(self) -> None:
        schedule = Schedule(RecurringTrigger(Secondly(5), NOW), NOW)
        for _ in range(3):
            assert schedule.next_run == NOW
            assert schedule.is_due(NOW)
        assert schedule.run_count == 0


class TestRandom:
    def test_fires_once_at_drawn_instant(self) -> None:
        fire_at = NOW + timedelta(seconds=7)
        schedule = Schedule(RandomTrigger(NOW, NOW + timedelta(seconds=10), fire_at), NOW)
        assert schedule.next_run == fire_at
        assert schedule.max_runs is None
        assert schedule.advance(fire_at) is None
        assert schedule.next_run is None

    def test_degenerate_range_never_fires(self) -> None:
        schedule = Schedule(RandomTrigger(NOW, NOW, None), NOW)
        assert schedule.next_run is None
        assert not schedule.is_due(NOW + timedelta(days=365))


class TestCron:
    def test_first_run_is_after_construction_time(self) -> None:
        schedule = Schedule(CronTrigger(CronPattern.parse("* * * * *")), NOW)
        assert schedule.next_run == NOW + timedelta(minutes=1)

    def test_advance_recomputes_from_now_without_catch_up(self) -> None:
        schedule = Schedule(CronTrigger(CronPattern.parse("* * * * *")), NOW)
        much_later = NOW + timedelta(minutes=10, seconds=30)
        assert schedule.advance(much_later) == NOW + timedelta(minutes=11)
        assert schedule.run_count == 1

    def test_cron_respects_max_runs(self) -> None:
        schedule = Schedule(CronTrigger(CronPattern.parse("* * * * *")), NOW, max_runs=1)
        schedule.advance(NOW + timedelta(minutes=1))
        assert schedule.next_run is None


def test_repr_mentions_kind() -> None:
    assert "recurring" in repr(Schedule(RecurringTrigger(Secondly(1), NOW), NOW))
