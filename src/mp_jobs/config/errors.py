"""Config errors raised while building or loading scheduler settings."""
from __future__ import annotations

from mp_jobs.kernel.errors import BaseError


class ConfigError(BaseError):
    """Settings could not be loaded or failed validation."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A settings field without a default has no value in the environment."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, *, env_key: str | None = None) -> None:
        where = f" (set {env_key})" if env_key else ""
        super().__init__(
            f"Required setting '{setting_name}' is missing{where}",
            detail={"setting": setting_name, "env_key": env_key},
        )
        self.setting_name = setting_name
        self.env_key = env_key


class InvalidSettingValueError(ConfigError):
    """A setting has a value, but it cannot be coerced or fails validation.

    ``env_key`` is set when the value came from the environment, so the
    message points at the variable the operator has to fix.
    """
    default_code = "invalid_setting_value"

    def __init__(
        self, setting_name: str, value: object, reason: str, *, env_key: str | None = None
    ) -> None:
        source = env_key or setting_name
        super().__init__(
            f"Setting '{source}' has invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "env_key": env_key, "value": value},
        )
        self.setting_name = setting_name
        self.env_key = env_key
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
