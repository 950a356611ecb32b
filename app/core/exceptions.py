# Error taxonomy and global exception handlers
import logging
import traceback
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DataError, DBAPIError, IntegrityError, StatementError
from starlette.exceptions import HTTPException as StarletteHTTPException

LOGGER = logging.getLogger(__name__)

Message = Union[str, List[str]]


class AppException(Exception):
    """
    Base exception for the API.

    Carries the HTTP status it maps to and the message rendered in the
    error body.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: Message, headers: Optional[Dict[str, str]] = None):
        super().__init__(message if isinstance(message, str) else "; ".join(message))
        self.message = message
        self.headers = headers


class BadRequestError(AppException):
    """Raised when a payload or parameter fails validation."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppException):
    """Raised when a record id does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppException):
    """Raised when a write violates a storage constraint (e.g. duplicate email)."""

    status_code = status.HTTP_409_CONFLICT


class TooManyRequestsError(AppException):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS


def error_body(request: Request, status_code: int, message: Message) -> dict:
    """Uniform error payload shared by every handler."""
    return {
        "statusCode": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": request.url.path,
        "message": message,
    }


def _respond(
    request: Request,
    status_code: int,
    message: Message,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    if status_code >= 500:
        LOGGER.error("HTTP %s on %s %s: %s", status_code, request.method, request.url.path, message)
    else:
        LOGGER.warning("HTTP %s on %s %s: %s", status_code, request.method, request.url.path, message)
    return JSONResponse(
        status_code=status_code,
        content=error_body(request, status_code, message),
        headers=headers,
    )


def _format_validation_errors(exc: RequestValidationError) -> List[str]:
    """Turn pydantic error dicts into "field: reason" strings."""
    messages = []
    for error in exc.errors():
        # loc is e.g. ("body", "email") or ("query", "role"); malformed JSON gives ("body", <offset>)
        loc = [part for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        if all(isinstance(part, int) for part in loc):
            field = "body"
        else:
            field = ".".join(str(part) for part in loc)
        messages.append(f"{field}: {error.get('msg', 'invalid value')}")
    return messages


def _normalize_db_message(exc: StatementError) -> str:
    text = str(exc.orig) if getattr(exc, "orig", None) is not None else str(exc)
    return " ".join(text.split())


async def app_exception_handler(request: Request, exc: AppException):
    return _respond(request, exc.status_code, exc.message, exc.headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _respond(request, exc.status_code, exc.detail, getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return _respond(request, status.HTTP_400_BAD_REQUEST, _format_validation_errors(exc))


async def integrity_error_handler(request: Request, exc: IntegrityError):
    return _respond(request, status.HTTP_409_CONFLICT, _normalize_db_message(exc))


async def statement_error_handler(request: Request, exc: StatementError):
    """Storage validation errors map to 422; driver errors such as a lost connection are 500."""
    if isinstance(exc, DBAPIError) and not isinstance(exc, DataError):
        return await general_exception_handler(request, exc)
    return _respond(request, status.HTTP_422_UNPROCESSABLE_ENTITY, _normalize_db_message(exc))


async def general_exception_handler(request: Request, exc: Exception):
    """
    Catch-all exception handler for unhandled errors.
    Logs the full traceback and returns a 500 error.
    """
    LOGGER.error(
        "Unhandled exception on %s %s: %s\n%s",
        request.method,
        request.url.path,
        exc,
        traceback.format_exc(),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler to the app. Starlette picks the most specific class by MRO."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(StatementError, statement_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
