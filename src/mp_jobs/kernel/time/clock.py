"""Kernel time – Clock protocol + implementations.

Every "now" the scheduling core reads comes through a :class:`Clock`, so a
test can pin time with :class:`FrozenClock` and step it explicitly.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Port: source of the current UTC instant."""

    def now(self) -> datetime: ...


class SystemClock:
    """Production clock that delegates to ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return datetime.now(UTC)

    def __repr__(self) -> str:
        return "SystemClock()"


class FrozenClock:
    """Test clock pinned to a fixed point in time until moved explicitly."""

    def __init__(self, fixed: datetime) -> None:
        if fixed.tzinfo is None:
            fixed = fixed.replace(tzinfo=UTC)
        self._fixed = fixed

    def now(self) -> datetime:
        return self._fixed

    def advance(self, delta: timedelta | None = None, **kwargs: int | float) -> datetime:
        """Move forward by *delta* or by ``timedelta(**kwargs)``; returns the new now."""
        self._fixed += delta if delta is not None else timedelta(**kwargs)
        return self._fixed

    def set(self, instant: datetime) -> None:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        self._fixed = instant

    def __repr__(self) -> str:
        return f"FrozenClock({self._fixed.isoformat()})"


def utc_now() -> datetime:
    """Shorthand for ``datetime.now(UTC)``."""
    return datetime.now(UTC)


__all__ = ["Clock", "FrozenClock", "SystemClock", "utc_now"]
