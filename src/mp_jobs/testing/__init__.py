"""Testing helpers for code built on mp_jobs.

``strategies`` needs ``hypothesis`` and is imported on demand::

    from mp_jobs.testing.strategies import delay_strategy
"""
from mp_jobs.testing.fakes import FakeClock, RecordingCallback

__all__ = ["FakeClock", "RecordingCallback"]
