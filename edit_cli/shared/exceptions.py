"""Project-wide custom exceptions."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Mapping


class ErrorCode(IntEnum):
    """Stable numeric codes reported on the transport's error path."""

    METHOD_NOT_FOUND = -32601
    INVALID_PARAMETER = 1001
    SESSION_NOT_FOUND = 1002
    SESSION_NOT_INITIALIZED = 1003
    SESSION_UNAVAILABLE = 1004


class EditDataError(Exception):
    """Base exception for the edit-data service."""


class ConfigurationError(EditDataError):
    """Raised when configuration loading or validation fails."""


class SnapshotError(EditDataError):
    """Raised when a session snapshot file cannot be loaded."""


class SessionStateError(EditDataError):
    """Raised when a session lifecycle transition is not allowed."""


class ResponseChannelError(EditDataError):
    """Raised when a response channel is asked to emit more than once."""


class RequestValidationError(EditDataError):
    """Base class for expected request validation failures.

    Subclasses carry the numeric code sent back to the caller alongside the
    message. ``data`` holds optional diagnostic payload for the error path.
    """

    code: ErrorCode = ErrorCode.INVALID_PARAMETER

    def __init__(self, message: str, *, data: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.data = dict(data) if data is not None else None


class InvalidParameterError(RequestValidationError):
    """Raised when a required request parameter is missing or empty."""

    code = ErrorCode.INVALID_PARAMETER


class SessionNotFoundError(RequestValidationError):
    """Raised when no session is registered under the owner URI."""

    code = ErrorCode.SESSION_NOT_FOUND


class SessionNotInitializedError(RequestValidationError):
    """Raised when a session exists but has no table metadata attached yet."""

    code = ErrorCode.SESSION_NOT_INITIALIZED
