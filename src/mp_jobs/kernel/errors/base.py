"""Root error class for mp-jobs.

Every error the scheduler raises or reports on a ``JobExecutedEvent`` is a
:class:`BaseError`, so callers can branch on ``code`` instead of class
identity and log any of them with :meth:`BaseError.log_fields`.
"""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Scheduling-library error carrying a stable code and structured context.

    Args:
        message: Human-readable description.
        code: Machine-readable slug; falls back to the class ``default_code``.
        detail: Extra context such as the offending expression or job name.
        cause: Exception this error wraps, chained as ``__cause__``.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload

    def log_fields(self) -> dict[str, Any]:
        """Flat key/values for a structlog call: ``logger.error("x", **err.log_fields())``.

        ``detail`` keys come first; ``error`` and ``error_code`` always win.
        """
        return {**self.detail, "error": self.message, "error_code": self.code}


__all__ = ["BaseError"]
