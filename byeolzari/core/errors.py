"""Application error taxonomy and the central error dispatcher.

Every failure the API reports on purpose is an :class:`AppError` carrying a
``kind``, an HTTP ``status_code`` and a short client-facing ``message``.
:func:`dispatch` turns any exception into a ``(status, message)`` pair and
:func:`error_response` renders it; anything unclassified becomes a 500.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple

from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    AUTH_PROVIDER = "auth_provider"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    INVALID_REQUEST = "invalid_request"
    INTERNAL = "internal"


_DEFAULTS: Dict[ErrorKind, Tuple[int, str]] = {
    ErrorKind.UNAUTHORIZED: (401, "Unauthorized"),
    ErrorKind.AUTH_PROVIDER: (502, "Authentication provider error"),
    ErrorKind.CONFLICT: (409, "Conflict"),
    ErrorKind.NOT_FOUND: (404, "Not Found"),
    ErrorKind.INVALID_REQUEST: (422, "Invalid request"),
    ErrorKind.INTERNAL: (500, "Internal Server Error"),
}


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: Optional[str] = None, *, status_code: Optional[int] = None):
        default_status, default_message = _DEFAULTS[self.kind]
        self.status_code = status_code or default_status
        self.message = message or default_message
        super().__init__(self.message)


class UnauthorizedError(AppError):
    kind = ErrorKind.UNAUTHORIZED


class InvalidTokenError(UnauthorizedError):
    """Session token is missing, malformed, tampered with or expired."""


class AuthProviderError(AppError):
    """OAuth exchange failed.

    401 when the provider rejected the exchange, 502 when it could not be
    reached or answered with an error.
    """

    kind = ErrorKind.AUTH_PROVIDER


class ConflictError(AppError):
    kind = ErrorKind.CONFLICT


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND


class InvalidRequestError(AppError):
    """Path, query or body parameters failed validation."""

    kind = ErrorKind.INVALID_REQUEST


class InternalServerError(AppError):
    kind = ErrorKind.INTERNAL


def dispatch(exc: BaseException) -> Tuple[int, str]:
    """Resolve ``exc`` to the status code and message sent to the client."""

    if isinstance(exc, AppError):
        return exc.status_code, exc.message
    return _DEFAULTS[ErrorKind.INTERNAL]


def error_response(
    exc: BaseException, *, headers: Optional[Mapping[str, str]] = None
) -> JSONResponse:
    """Log ``exc`` in full and return only status and message to the client."""

    status_code, message = dispatch(exc)
    level = logging.ERROR if status_code >= 500 else logging.INFO
    logger.log(level, "Request failed (%s): %r", status_code, exc, exc_info=exc)
    return JSONResponse(
        status_code=status_code,
        content={"statusCode": status_code, "message": message},
        headers=dict(headers) if headers else None,
    )


__all__ = [
    "AppError",
    "AuthProviderError",
    "ConflictError",
    "ErrorKind",
    "InternalServerError",
    "InvalidRequestError",
    "InvalidTokenError",
    "NotFoundError",
    "UnauthorizedError",
    "dispatch",
    "error_response",
]
