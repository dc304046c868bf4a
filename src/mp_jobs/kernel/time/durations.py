"""Kernel time – human-readable duration grammar.

Accepted input is a sequence of ``<integer><unit>`` terms, optionally
separated by whitespace: ``"15m"``, ``"1h 30m"``, ``"2days 4h"``,
``"1h1m1s"``.  Units are case-sensitive only where it matters: ``M`` is a
month, ``m`` a minute.

Months and years are fixed-length approximations (30.44 and 365.25 days),
which keeps :func:`format_duration` and :func:`parse_duration` exact inverses.
"""
from __future__ import annotations

import re
from typing import Final
from datetime import timedelta

from mp_jobs.kernel.errors import DurationParseError

_US = 1
_MS = 1_000 * _US
_SECOND = 1_000 * _MS
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY
_MONTH = 2_630_016 * _SECOND
_YEAR = 31_557_600 * _SECOND

_UNITS: dict[str, int] = {
    "us": _US, "usec": _US, "microsecond": _US, "microseconds": _US,
    "ms": _MS, "msec": _MS, "millisecond": _MS, "milliseconds": _MS,
    "s": _SECOND, "sec": _SECOND, "secs": _SECOND, "second": _SECOND, "seconds": _SECOND,
    "m": _MINUTE, "min": _MINUTE, "mins": _MINUTE, "minute": _MINUTE, "minutes": _MINUTE,
    "h": _HOUR, "hr": _HOUR, "hrs": _HOUR, "hour": _HOUR, "hours": _HOUR,
    "d": _DAY, "day": _DAY, "days": _DAY,
    "w": _WEEK, "week": _WEEK, "weeks": _WEEK,
    "M": _MONTH, "month": _MONTH, "months": _MONTH,
    "y": _YEAR, "year": _YEAR, "years": _YEAR,
}

_TERM: Final = re.compile(r"\s*(\d+)\s*([A-Za-z]+)\s*")

# (size, singular, plural); calendar units pluralise, the short ones do not
_CANONICAL: tuple[tuple[int, str, str], ...] = (
    (_YEAR, "year", "years"),
    (_MONTH, "month", "months"),
    (_DAY, "day", "days"),
    (_HOUR, "h", "h"),
    (_MINUTE, "m", "m"),
    (_SECOND, "s", "s"),
    (_MS, "ms", "ms"),
    (_US, "us", "us"),
)


def parse_duration(text: str) -> timedelta:
    """Parse *text* into a :class:`~datetime.timedelta`.

    Raises:
        DurationParseError: empty input, an unknown unit, stray characters,
            or a value too large for ``timedelta``.
    """
    source = text.strip()
    if not source:
        raise DurationParseError(text, "empty duration")

    total = 0
    pos = 0
    while pos < len(source):
        match = _TERM.match(source, pos)
        if match is None:
            raise DurationParseError(text, f"unexpected input at offset {pos}")
        number, unit = match.groups()
        size = _UNITS.get(unit) or _UNITS.get(unit.lower())
        if size is None:
            raise DurationParseError(text, f"unknown unit {unit!r}")
        total += int(number) * size
        pos = match.end()

    try:
        return timedelta(microseconds=total)
    except OverflowError as exc:
        raise DurationParseError(text, "duration out of range", cause=exc) from exc


def format_duration(duration: timedelta) -> str:
    """Render *duration* in canonical form, e.g. ``"1h 30m"`` or ``"0s"``."""
    remaining = duration // timedelta(microseconds=1)
    if remaining < 0:
        raise ValueError("cannot format a negative duration")
    if remaining == 0:
        return "0s"

    parts: list[str] = []
    for size, singular, plural in _CANONICAL:
        count, remaining = divmod(remaining, size)
        if count:
            parts.append(f"{count}{singular if count == 1 else plural}")
    return " ".join(parts)


__all__ = ["format_duration", "parse_duration"]
