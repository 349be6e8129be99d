"""Core configuration and infrastructure helpers."""

from .config import ProviderCredentials, Settings, get_settings, load_settings
from .database import create_db_engine, init_db
from .errors import (
    AppError,
    AuthProviderError,
    ConflictError,
    ErrorKind,
    InternalServerError,
    InvalidRequestError,
    InvalidTokenError,
    NotFoundError,
    UnauthorizedError,
    dispatch,
    error_response,
)
from .logs import setup_logging
from .time import utcnow

__all__ = [
    "AppError",
    "AuthProviderError",
    "ConflictError",
    "ErrorKind",
    "InternalServerError",
    "InvalidRequestError",
    "InvalidTokenError",
    "NotFoundError",
    "ProviderCredentials",
    "Settings",
    "UnauthorizedError",
    "create_db_engine",
    "dispatch",
    "error_response",
    "get_settings",
    "init_db",
    "load_settings",
    "setup_logging",
    "utcnow",
]
