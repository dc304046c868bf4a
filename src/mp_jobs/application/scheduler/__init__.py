"""Application scheduler – schedules, jobs and the in-memory scheduler."""
from mp_jobs.application.scheduler.cron import CronPattern
from mp_jobs.application.scheduler.in_memory import InMemoryScheduler
from mp_jobs.application.scheduler.job import Callback, Job, JobBuilder
from mp_jobs.application.scheduler.random_range import RandomRangeResolver
from mp_jobs.application.scheduler.rules import (
    Custom,
    Daily,
    FixedInterval,
    Hourly,
    Minutely,
    Monthly,
    RecurrenceRule,
    Secondly,
    Weekly,
    rule_from_interval,
)
from mp_jobs.application.scheduler.runner import SchedulerRunner
from mp_jobs.application.scheduler.schedule import (
    CronTrigger,
    OnceTrigger,
    RandomTrigger,
    RecurringTrigger,
    Schedule,
    Trigger,
)
from mp_jobs.application.scheduler.scheduler import JobExecutedEvent, Scheduler

__all__ = [
    "Callback",
    "CronPattern",
    "CronTrigger",
    "Custom",
    "Daily",
    "FixedInterval",
    "Hourly",
    "InMemoryScheduler",
    "Job",
    "JobBuilder",
    "JobExecutedEvent",
    "Minutely",
    "Monthly",
    "OnceTrigger",
    "RandomRangeResolver",
    "RandomTrigger",
    "RecurrenceRule",
    "RecurringTrigger",
    "Schedule",
    "Scheduler",
    "SchedulerRunner",
    "Secondly",
    "Trigger",
    "Weekly",
    "rule_from_interval",
]
