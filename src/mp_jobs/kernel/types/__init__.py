"""Kernel value types."""

from mp_jobs.kernel.types.result import Err, Ok, Result

__all__ = ["Err", "Ok", "Result"]
