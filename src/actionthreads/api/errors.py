"""Translate exceptions into ``{"error": {"code", "message"}}`` responses.

This is the only place that knows HTTP status codes for domain errors.
Routers and services raise ``ActionThreadsError`` subclasses and let them
propagate; the handlers registered here turn them into responses.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from actionthreads.core.errors import ActionThreadsError, ErrorCode, ErrorKind
from actionthreads.schemas.base import ErrorDetail, ErrorResponse

logger = logging.getLogger("actionthreads.api.errors")

GENERIC_INTERNAL_MESSAGE = "An unexpected error occurred"

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTH_REQUIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.DUPLICATE: status.HTTP_409_CONFLICT,
    ErrorKind.LIMIT_REACHED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_unmapped = set(ErrorKind) - set(STATUS_BY_KIND)
if _unmapped:
    raise RuntimeError(f"ErrorKind values without an HTTP status: {sorted(k.value for k in _unmapped)}")

# Internal errors whose message is safe to return and that have a more precise status.
_SURFACED_INTERNAL: dict[str, int] = {
    ErrorCode.ACTION_POINT_GENERATION_FAILED: status.HTTP_502_BAD_GATEWAY,
}

# Request field (body key, query or path parameter) -> (code, message).
FIELD_ERRORS: dict[str, tuple[str, str]] = {
    "name": (ErrorCode.THREAD_NAME_INVALID, "Thread name must be between 1 and 20 characters"),
    "content": (
        ErrorCode.TRANSCRIPT_CONTENT_INVALID,
        "Transcript content must be between 1 and 30,000 characters",
    ),
    "title": (
        ErrorCode.ACTION_POINT_TITLE_INVALID,
        "Action point title must be between 1 and 255 characters",
    ),
    "isCompleted": (ErrorCode.VALIDATION_ERROR, "isCompleted must be a boolean"),
    "completed": (ErrorCode.VALIDATION_ERROR, "Invalid 'completed' parameter. Must be 'true' or 'false'"),
    "thread_id": (ErrorCode.VALIDATION_ERROR, "Invalid thread ID format"),
    "transcript_id": (ErrorCode.VALIDATION_ERROR, "Invalid transcript ID format"),
    "action_point_id": (ErrorCode.VALIDATION_ERROR, "Invalid action point ID format"),
}

_HTTP_CODES: dict[int, str] = {
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def error_response(status_code: int, code: str, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def describe_validation_error(exc: RequestValidationError) -> tuple[str, str]:
    """Pick the code and message for the first failing field of a request."""
    errors = exc.errors()
    if not errors:
        return ErrorCode.VALIDATION_ERROR, "Invalid request"
    first = errors[0]
    loc = tuple(first.get("loc", ()))
    kind = first.get("type", "")
    if kind == "json_invalid":
        return ErrorCode.VALIDATION_ERROR, "Invalid JSON in request body"
    field = next((part for part in loc[1:] if isinstance(part, str)), None)
    if field in FIELD_ERRORS:
        return FIELD_ERRORS[field]
    if loc == ("body",):
        if kind == "missing":
            return ErrorCode.VALIDATION_ERROR, "Request body is required"
        if kind in ("model_attributes_type", "dict_type"):
            return ErrorCode.VALIDATION_ERROR, "Request body must be a JSON object"
    message = str(first.get("msg", "Invalid request")).removeprefix("Value error, ")
    return ErrorCode.VALIDATION_ERROR, message


async def _handle_domain_error(request: Request, exc: ActionThreadsError) -> JSONResponse:
    if exc.kind is ErrorKind.INTERNAL:
        surfaced = _SURFACED_INTERNAL.get(exc.code)
        if surfaced is not None:
            logger.warning("request.failed", extra={"path": request.url.path, "code": exc.code})
            return error_response(surfaced, exc.code, exc.message)
        logger.error("request.internal_error", extra={"path": request.url.path, "code": exc.code}, exc_info=exc)
        return error_response(STATUS_BY_KIND[exc.kind], ErrorCode.INTERNAL_SERVER_ERROR, GENERIC_INTERNAL_MESSAGE)
    headers = {"WWW-Authenticate": "Bearer"} if exc.kind is ErrorKind.AUTH_REQUIRED else None
    return error_response(STATUS_BY_KIND[exc.kind], exc.code, exc.message, headers=headers)


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    code, message = describe_validation_error(exc)
    return error_response(STATUS_BY_KIND[ErrorKind.VALIDATION], code, message)


async def _handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _HTTP_CODES.get(exc.status_code, "HTTP_ERROR")
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, code, message, headers=getattr(exc, "headers", None))


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "request.unhandled_exception",
        extra={"path": request.url.path, "method": request.method, "error_type": exc.__class__.__name__},
        exc_info=exc,
    )
    return error_response(
        STATUS_BY_KIND[ErrorKind.INTERNAL], ErrorCode.INTERNAL_SERVER_ERROR, GENERIC_INTERNAL_MESSAGE
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ActionThreadsError, _handle_domain_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    app.add_exception_handler(SQLAlchemyError, _handle_unexpected)
    app.add_exception_handler(Exception, _handle_unexpected)


__all__ = [
    "STATUS_BY_KIND",
    "FIELD_ERRORS",
    "error_response",
    "describe_validation_error",
    "register_exception_handlers",
]
