"""
mp_jobs – deterministic next-run computation for scheduled jobs.

Import path convention::

    from mp_jobs.application.scheduler import JobBuilder, InMemoryScheduler, Secondly
    from mp_jobs.kernel.time import At, Delay, parse_schedule_time
    from mp_jobs.kernel.errors import MissingScheduleError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
