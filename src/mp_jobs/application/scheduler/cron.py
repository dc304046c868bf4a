"""Application scheduler – cron patterns backed by :mod:`croniter`.

Three layouts are accepted::

    "*/5 * * * *"           5 fields: minute hour dom month dow
    "0 */5 * * * *"         6 fields: second first
    "0 0 9 * * 1 *"         7 fields: second first, year last

Day-of-week follows croniter: ``0``/``7`` is Sunday, ``1`` is Monday.
When both day-of-month and day-of-week are restricted, a day must match
both (``"0 0 0 13 * FRI *"`` is Friday the 13th only), not either one.
"""
from __future__ import annotations

import dataclasses
from datetime import UTC, datetime

from croniter import CroniterError, croniter

from mp_jobs.kernel.errors import InvalidScheduleError, TimeCalculationError
from mp_jobs.kernel.time import as_utc


def _to_croniter_layout(fields: list[str]) -> list[str]:
    # croniter wants seconds (and year) after the five classic fields
    if len(fields) == 6:
        return fields[1:] + fields[:1]
    if len(fields) == 7:
        return fields[1:6] + fields[:1] + fields[6:]
    return fields


@dataclasses.dataclass(frozen=True, slots=True)
class CronPattern:
    """A validated cron expression.

    Build with :meth:`parse`; constructing directly skips validation.
    """

    expression: str
    _layout: str = dataclasses.field(repr=False, compare=False, default="")

    @classmethod
    def parse(cls, expression: str) -> CronPattern:
        fields = expression.split()
        if len(fields) not in (5, 6, 7):
            raise InvalidScheduleError(
                f"Cron expression {expression!r} must have 5, 6 or 7 fields, got {len(fields)}",
                detail={"expression": expression},
            )
        layout = " ".join(_to_croniter_layout(fields))
        try:
            croniter(layout, datetime.now(UTC), day_or=False)
        except (CroniterError, ValueError, KeyError) as exc:
            raise InvalidScheduleError(
                f"Invalid cron expression {expression!r}: {exc}",
                detail={"expression": expression},
                cause=exc,
            ) from exc
        return cls(expression=" ".join(fields), _layout=layout)

    def next_after(self, instant: datetime) -> datetime:
        """First matching instant strictly after *instant* (aware UTC)."""
        layout = self._layout or " ".join(_to_croniter_layout(self.expression.split()))
        try:
            upcoming = croniter(layout, as_utc(instant), day_or=False).get_next(datetime)
        except (CroniterError, OverflowError) as exc:
            raise TimeCalculationError(
                f"No upcoming match for cron {self.expression!r} after {instant.isoformat()}",
                cause=exc,
            ) from exc
        return as_utc(upcoming)

    def __str__(self) -> str:
        return self.expression


__all__ = ["CronPattern"]
