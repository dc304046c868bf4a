"""Application scheduler – InMemoryScheduler.

Single-threaded and cooperative: nothing happens until :meth:`run_pending`
is called, and every callback runs to completion inside that call.  Callers
sharing an instance across threads must bring their own lock.
"""
from __future__ import annotations

import time
import uuid
from datetime import UTC, datetime

from mp_jobs.application.scheduler.job import Job
from mp_jobs.application.scheduler.scheduler import JobExecutedEvent
from mp_jobs.kernel.errors import (
    ExecutionFailedError,
    HandlerNotBuiltError,
    JobNotFoundError,
    MissingScheduleError,
    SchedulingError,
    TimeCalculationError,
)
from mp_jobs.kernel.time import Clock, SystemClock
from mp_jobs.observability.logging import get_logger

__all__ = ["InMemoryScheduler"]

logger = get_logger(__name__)

_NEVER = datetime.max.replace(tzinfo=UTC)


class InMemoryScheduler:
    """Owns registered jobs and advances their schedules as they fire."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._jobs: dict[uuid.UUID, Job] = {}

    @property
    def clock(self) -> Clock:
        return self._clock

    def add_job(self, job: Job) -> uuid.UUID:
        """Take ownership of *job*.

        Raises:
            MissingScheduleError: the job has no schedules.
            HandlerNotBuiltError: the job has no callback.
        """
        if not job.schedules:
            raise MissingScheduleError(job.name)
        if job.callback is None:
            raise HandlerNotBuiltError(job.name)
        job.refresh_next_run()
        self._jobs[job.id] = job
        logger.info("job_registered", job=job.label, job_id=str(job.id), next_run=job.next_run)
        return job.id

    def get_job(self, job_id: uuid.UUID) -> Job:
        try:
            return self._jobs[job_id]
        except KeyError:
            raise JobNotFoundError(job_id) from None

    def run_pending(self) -> list[JobExecutedEvent]:
        """Fire every job whose next-run has passed; one firing per job per tick.

        Failures never abort the pass: they are logged and reported on the
        returned events.
        """
        now = self._clock.now()
        events: list[JobExecutedEvent] = []
        for job in list(self._jobs.values()):
            if job.is_due(now):
                events.append(self._fire(job, now))
        return events

    def _fire(self, job: Job, now: datetime) -> JobExecutedEvent:
        due = job.due_schedules(now)
        error: SchedulingError | None = None

        t0 = time.monotonic()
        try:
            job.run()
        except ExecutionFailedError as exc:
            error = exc
            logger.error(
                "job_failed", job=job.label, job_id=str(job.id), reason=exc.reason, **exc.log_fields()
            )
        except SchedulingError as exc:
            # e.g. the callback was detached after registration
            error = exc
            logger.error("job_failed", job=job.label, job_id=str(job.id), **exc.log_fields())
        duration_ms = (time.monotonic() - t0) * 1000
        job.last_run = now

        for schedule in due:
            try:
                schedule.advance(now)
            except TimeCalculationError as exc:
                logger.error(
                    "schedule_advance_failed",
                    job=job.label,
                    job_id=str(job.id),
                    schedule=schedule.kind,
                    **exc.log_fields(),
                )
                if error is None:
                    error = exc

        job.refresh_next_run()
        if error is None:
            logger.info(
                "job_executed",
                job=job.label,
                job_id=str(job.id),
                duration_ms=round(duration_ms, 3),
                next_run=job.next_run,
            )
        if job.next_run is None:
            logger.info("job_completed", job=job.label, job_id=str(job.id))

        return JobExecutedEvent(
            job_id=job.id,
            job_name=job.name,
            fired_at=now,
            duration_ms=duration_ms,
            next_run=job.next_run,
            error=error,
        )

    def next_run(self) -> datetime | None:
        pending = [job.next_run for job in self._jobs.values() if job.next_run is not None]
        return min(pending) if pending else None

    def has_pending(self) -> bool:
        return any(job.next_run is not None for job in self._jobs.values())

    def list_all_jobs(self) -> tuple[Job, ...]:
        """All jobs, soonest first; jobs with nothing pending come last."""
        return tuple(
            sorted(
                self._jobs.values(),
                key=lambda job: (job.next_run is None, job.next_run or _NEVER),
            )
        )

    def __len__(self) -> int:
        return len(self._jobs)

    def __contains__(self, job_id: object) -> bool:
        return job_id in self._jobs
