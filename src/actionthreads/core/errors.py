"""Project-wide custom exceptions.

This module centralizes domain-specific exception types so that routers and
services can raise / catch them without importing deep infrastructure errors
like ``asyncpg`` or raw SQLAlchemy exceptions.

Every error carries an :class:`ErrorKind` tag plus a stable ``code`` string.
The kind decides the transport status (see ``actionthreads.api.errors``);
the code is what API clients switch on.

Add new errors here rather than scattering small ``class XError(Exception):``
definitions across the codebase; this keeps the public error surface easy to
audit and map to HTTP responses.
"""
from __future__ import annotations

import enum
import uuid


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    DUPLICATE = "duplicate"
    LIMIT_REACHED = "limit_reached"
    AUTH_REQUIRED = "auth_required"
    INTERNAL = "internal"


class ErrorCode:
    """Stable error codes returned in ``{"error": {"code": ...}}`` bodies."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    THREAD_NAME_INVALID = "THREAD_NAME_INVALID"
    THREAD_NAME_DUPLICATE = "THREAD_NAME_DUPLICATE"
    THREAD_LIMIT_REACHED = "THREAD_LIMIT_REACHED"
    THREAD_NOT_FOUND = "THREAD_NOT_FOUND"
    TRANSCRIPT_CONTENT_INVALID = "TRANSCRIPT_CONTENT_INVALID"
    TRANSCRIPT_NOT_FOUND = "TRANSCRIPT_NOT_FOUND"
    ACTION_POINT_TITLE_INVALID = "ACTION_POINT_TITLE_INVALID"
    ACTION_POINT_NOT_FOUND = "ACTION_POINT_NOT_FOUND"
    ACTION_POINT_GENERATION_FAILED = "ACTION_POINT_GENERATION_FAILED"
    AUTH_REQUIRED = "AUTH_REQUIRED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class ActionThreadsError(Exception):
    """Base class for all custom project exceptions.

    Subclass this rather than ``Exception`` directly for new domain errors and
    set ``kind`` / ``code`` on the subclass.
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    code: str = ErrorCode.INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ThreadNotFoundError(ActionThreadsError):
    """Thread absent or owned by another user (both cases are reported alike)."""

    kind = ErrorKind.NOT_FOUND
    code = ErrorCode.THREAD_NOT_FOUND

    def __init__(self, thread_id: uuid.UUID | None = None):
        self.thread_id = thread_id
        super().__init__(f'Thread with id "{thread_id}" not found' if thread_id else "Thread not found")


class TranscriptNotFoundError(ActionThreadsError):
    kind = ErrorKind.NOT_FOUND
    code = ErrorCode.TRANSCRIPT_NOT_FOUND

    def __init__(self, transcript_id: uuid.UUID | None = None):
        self.transcript_id = transcript_id
        super().__init__(
            f'Transcript with id "{transcript_id}" not found' if transcript_id else "Transcript not found"
        )


class ActionPointNotFoundError(ActionThreadsError):
    kind = ErrorKind.NOT_FOUND
    code = ErrorCode.ACTION_POINT_NOT_FOUND

    def __init__(self, action_point_id: uuid.UUID | None = None):
        self.action_point_id = action_point_id
        super().__init__(
            f'Action point with id "{action_point_id}" not found' if action_point_id else "Action point not found"
        )


class DuplicateThreadNameError(ActionThreadsError):
    """Raised when the owner already has a thread with the same (case-sensitive) name."""

    kind = ErrorKind.DUPLICATE
    code = ErrorCode.THREAD_NAME_DUPLICATE

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Thread with name "{name}" already exists')


class ThreadLimitReachedError(ActionThreadsError):
    kind = ErrorKind.LIMIT_REACHED
    code = ErrorCode.THREAD_LIMIT_REACHED

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Maximum number of threads ({limit}) reached")


class AuthRequiredError(ActionThreadsError):
    """Missing, malformed or unverifiable identity."""

    kind = ErrorKind.AUTH_REQUIRED
    code = ErrorCode.AUTH_REQUIRED
    default_message = "Authentication required"


class ActionPointGenerationError(ActionThreadsError):
    """The summarizer was unavailable or returned something that is not a list of titles.

    ``message`` is safe to show to API clients; the underlying cause is kept on
    ``__cause__`` for server-side logging only.
    """

    kind = ErrorKind.INTERNAL
    code = ErrorCode.ACTION_POINT_GENERATION_FAILED
    default_message = "Failed to generate action points"


__all__ = [
    "ErrorKind",
    "ErrorCode",
    "ActionThreadsError",
    "ThreadNotFoundError",
    "TranscriptNotFoundError",
    "ActionPointNotFoundError",
    "DuplicateThreadNameError",
    "ThreadLimitReachedError",
    "AuthRequiredError",
    "ActionPointGenerationError",
]
