"""Application scheduler – uniform instant between two bounds."""
from __future__ import annotations

import random
from datetime import datetime, timedelta

_RESOLUTION = timedelta(microseconds=1)


class RandomRangeResolver:
    """Draw one instant uniformly from ``[start, end)``.

    The generator is injected so tests (and replays) can seed it; by default
    every resolver owns a private :class:`random.Random`.
    """

    def __init__(self, rng: random.Random | None = None, *, seed: int | None = None) -> None:
        if rng is not None and seed is not None:
            raise ValueError("Pass either 'rng' or 'seed', not both")
        self._rng = rng if rng is not None else random.Random(seed)

    def pick(self, start: datetime, end: datetime) -> datetime | None:
        """Return the drawn instant, or ``None`` when ``end <= start``."""
        if end <= start:
            return None
        span = (end - start) // _RESOLUTION
        return start + self._rng.randrange(span) * _RESOLUTION


__all__ = ["RandomRangeResolver"]
