"""Config – 12-factor settings for the scheduler and its driving loop."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from mp_jobs.config.errors import InvalidSettingValueError
from mp_jobs.observability.logging import resolve_level


@dataclasses.dataclass
class Settings:
    """Base class for env-loadable settings; subclasses set ``_prefix``."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class SchedulerSettings(Settings):
    """Knobs for :class:`~mp_jobs.application.scheduler.SchedulerRunner`.

    Loaded from ``MP_JOBS_*`` environment variables by
    :class:`~mp_jobs.config.loaders.EnvSettingsLoader`.
    """

    _prefix: ClassVar[str] = "MP_JOBS"

    poll_interval_seconds: float = 1.0
    max_sleep_seconds: float = 60.0
    log_level: str = "INFO"
    log_json: bool = True
    random_seed: int | None = None

    def _validate(self) -> None:
        if self.poll_interval_seconds <= 0:
            raise InvalidSettingValueError(
                "poll_interval_seconds", self.poll_interval_seconds, "must be positive"
            )
        if self.max_sleep_seconds < self.poll_interval_seconds:
            raise InvalidSettingValueError(
                "max_sleep_seconds",
                self.max_sleep_seconds,
                "must be >= poll_interval_seconds",
            )
        try:
            resolve_level(self.log_level)
        except ValueError as exc:
            raise InvalidSettingValueError("log_level", self.log_level, str(exc)) from exc


__all__ = ["SchedulerSettings", "Settings"]
