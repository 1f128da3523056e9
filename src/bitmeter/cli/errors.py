"""Error type and structured error logging for the bitmeter CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

__all__ = [
    "CATEGORY_STATUS_CODES",
    "CliError",
    "ErrorPayload",
    "build_error_payload",
    "log_cli_error",
]


CATEGORY_STATUS_CODES: Mapping[str, int] = {
    "runtime": 1,
    "usage": 2,
    "io": 3,
    "not_found": 4,
}

_DEFAULT_CATEGORY = "runtime"
_LOGGER_NAME = "bitmeter.cli"


@dataclass(frozen=True)
class ErrorPayload:
    """What the CLI reports about a failure: exit status, category, message."""

    status_code: int
    category: str
    message: str
    context: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {
            "status_code": self.status_code,
            "category": self.category,
            "message": self.message,
            "context": dict(self.context),
        }


def _scalar_context(context: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    # Keep context JSON-friendly; everything that is not a scalar is stringified.
    safe: dict[str, Any] = {}
    for key, value in (context or {}).items():
        if value is None or isinstance(value, (str, int, float, bool)):
            safe[str(key)] = value
        else:
            safe[str(key)] = str(value)
    return safe


def build_error_payload(
    message: str,
    *,
    category: str = _DEFAULT_CATEGORY,
    status_code: Optional[int] = None,
    context: Optional[Mapping[str, Any]] = None,
) -> ErrorPayload:
    category = category or _DEFAULT_CATEGORY
    if status_code is None:
        status_code = CATEGORY_STATUS_CODES.get(
            category, CATEGORY_STATUS_CODES[_DEFAULT_CATEGORY]
        )
    return ErrorPayload(
        status_code=status_code,
        category=category,
        message=message,
        context=_scalar_context(context),
    )


def log_cli_error(
    payload: ErrorPayload,
    *,
    logger: Optional[logging.Logger] = None,
    exc_info: Optional[BaseException] = None,
) -> None:
    """Log ``payload`` at error level with its fields attached as ``extra``."""

    (logger or logging.getLogger(_LOGGER_NAME)).error(
        payload.message,
        extra={
            "event": "cli.error",
            "category": payload.category,
            "status_code": payload.status_code,
            "context": dict(payload.context),
        },
        exc_info=exc_info,
    )


class CliError(RuntimeError):
    """Failure surfaced to the user with an exit status."""

    def __init__(
        self,
        message: str,
        *,
        category: str = _DEFAULT_CATEGORY,
        status_code: Optional[int] = None,
        context: Optional[Mapping[str, Any]] = None,
        logged: bool = False,
    ) -> None:
        super().__init__(message)
        self.payload = build_error_payload(
            message, category=category, status_code=status_code, context=context
        )
        self.logged = logged

    @property
    def category(self) -> str:
        return self.payload.category

    @property
    def status_code(self) -> int:
        return self.payload.status_code

    @property
    def context(self) -> Mapping[str, Any]:
        return self.payload.context

    @classmethod
    def from_context(
        cls,
        message: str,
        *,
        category: str = _DEFAULT_CATEGORY,
        context: Optional[Mapping[str, Any]] = None,
        logger: Optional[logging.Logger] = None,
        cause: Optional[BaseException] = None,
    ) -> "CliError":
        """Create the error and log it immediately."""

        error = cls(message, category=category, context=context, logged=True)
        log_cli_error(error.payload, logger=logger, exc_info=cause)
        return error
