"""Application scheduler – Scheduler protocol and JobExecutedEvent."""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from mp_jobs.kernel.errors import SchedulingError

if TYPE_CHECKING:
    from mp_jobs.application.scheduler.job import Job

__all__ = ["JobExecutedEvent", "Scheduler"]


@dataclass(frozen=True)
class JobExecutedEvent:
    """Emitted once per job fired in a tick, whether or not it succeeded."""

    job_id: uuid.UUID
    job_name: str | None
    fired_at: datetime
    duration_ms: float
    next_run: datetime | None
    error: SchedulingError | None = None

    @property
    def success(self) -> bool:
        return self.error is None


@runtime_checkable
class Scheduler(Protocol):
    """Port: own jobs and fire the ones that are due."""

    def add_job(self, job: Job) -> uuid.UUID: ...
    def run_pending(self) -> list[JobExecutedEvent]: ...
    def next_run(self) -> datetime | None: ...
    def list_all_jobs(self) -> tuple[Job, ...]: ...
