"""Config – env-driven settings."""
from mp_jobs.config.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from mp_jobs.config.loaders import EnvSettingsLoader, SettingsLoader
from mp_jobs.config.settings import SchedulerSettings, Settings

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "SchedulerSettings",
    "Settings",
    "SettingsLoader",
]
