"""Maintenance jobs wired onto an in-process scheduler.

Registers four jobs the way a small service would:

- ``database-backup``   nightly at midnight (cron, seconds field first)
- ``weekly-newsletter`` Mondays at 09:00 (cron)
- ``cache-cleaner``     every 6 hours, first run 10 seconds from now
- ``health-check``      once, at a random instant 15-25 seconds from now

Run with::

    pip install -e .
    MP_JOBS_LOG_JSON=false MP_JOBS_RANDOM_SEED=7 python docs/examples/maintenance_jobs.py

The runner stops after ``--seconds`` of wall time (default 30); the cron
and hourly jobs keep their next runs, which are printed on exit.
"""

from __future__ import annotations

import argparse
import threading
import time
from datetime import timedelta

from mp_jobs.application.scheduler import (
    Hourly,
    InMemoryScheduler,
    JobBuilder,
    RandomRangeResolver,
    SchedulerRunner,
)
from mp_jobs.config import EnvSettingsLoader, SchedulerSettings
from mp_jobs.kernel.time import Delay, format_rfc3339
from mp_jobs.observability.logging import configure_logging, get_logger

logger = get_logger("maintenance")


def backup_database() -> None:
    logger.info("backup_started")
    time.sleep(1)
    logger.info("backup_finished")


def send_newsletter() -> None:
    logger.info("newsletter_sent")


def clear_cache() -> None:
    time.sleep(0.5)
    logger.info("cache_cleared")


def system_health_check() -> None:
    time.sleep(0.7)
    logger.info("health_ok", services="all")


def build_scheduler(settings: SchedulerSettings) -> InMemoryScheduler:
    scheduler = InMemoryScheduler()
    resolver = RandomRangeResolver(seed=settings.random_seed)

    scheduler.add_job(
        JobBuilder("database-backup").cron("0 0 0 * * * *").add_handler(backup_database).build()
    )
    scheduler.add_job(
        JobBuilder("weekly-newsletter").cron("0 0 9 * * 1 *").add_handler(send_newsletter).build()
    )
    scheduler.add_job(
        JobBuilder("cache-cleaner")
        .recurring(Hourly(6), Delay(timedelta(seconds=10)))
        .add_handler(clear_cache)
        .build()
    )
    scheduler.add_job(
        JobBuilder("health-check", resolver=resolver)
        .random(Delay(timedelta(seconds=15)), Delay(timedelta(seconds=25)))
        .add_handler(system_health_check)
        .build()
    )
    return scheduler


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seconds", type=float, default=30.0)
    args = parser.parse_args()

    settings = EnvSettingsLoader().load(SchedulerSettings)
    configure_logging(settings.log_level, json=settings.log_json)

    scheduler = build_scheduler(settings)
    runner = SchedulerRunner(scheduler, settings=settings)
    stop = threading.Event()
    threading.Timer(args.seconds, stop.set).start()
    runner.run_forever(stop)

    for job in scheduler.list_all_jobs():
        upcoming = format_rfc3339(job.next_run) if job.next_run else "never"
        print(f"{job.name:<20} next run: {upcoming}")


if __name__ == "__main__":
    main()
