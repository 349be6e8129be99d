"""Session verification for protected requests."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, FrozenSet, Iterable

from fastapi import Request
from starlette.responses import Response

from ..core.errors import InvalidTokenError, UnauthorizedError, error_response
from .pipeline import SessionState
from .tokens import SessionTokenCodec

logger = logging.getLogger(__name__)

MUTATING_METHODS: FrozenSet[str] = frozenset({"POST", "PUT", "DELETE"})
# GET routes that need a session; every other GET is public.
PROTECTED_GET_PATHS: FrozenSet[str] = frozenset({"/api/byeol"})


def clear_session_cookie(response: Response, cookie_name: str, codec: SessionTokenCodec) -> None:
    options = codec.cookie_options()
    response.delete_cookie(
        cookie_name,
        secure=options["secure"],
        httponly=options["httponly"],
        samesite=options["samesite"],
    )


class SessionGate:
    """HTTP middleware that verifies the session cookie before protected handlers.

    On success the decoded claims are stored on ``request.state.user``. On
    failure the handler is skipped, the cookie is cleared and a 401 is
    returned.
    """

    def __init__(
        self,
        codec: SessionTokenCodec,
        cookie_name: str,
        *,
        protected_get_paths: Iterable[str] = PROTECTED_GET_PATHS,
    ) -> None:
        self.codec = codec
        self.cookie_name = cookie_name
        self.protected_get_paths = frozenset(protected_get_paths)

    def requires_session(self, method: str, path: str) -> bool:
        method = method.upper()
        if method in MUTATING_METHODS:
            return True
        return method == "GET" and path.rstrip("/") in self.protected_get_paths

    async def __call__(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if not self.requires_session(request.method, request.url.path):
            return await call_next(request)

        token = request.cookies.get(self.cookie_name)
        try:
            request.state.user = self.codec.verify_and_get_payload(token)
        except InvalidTokenError as exc:
            logger.info(
                "Session verification failed for %s %s: %s (state=%s)",
                request.method,
                request.url.path,
                exc.message,
                SessionState.VERIFICATION_FAILED.value,
            )
            response = error_response(UnauthorizedError())
            clear_session_cookie(response, self.cookie_name, self.codec)
            logger.info("Cleared %s cookie", self.cookie_name)
            return response

        logger.info("Session verified for %s %s", request.method, request.url.path)
        return await call_next(request)


__all__ = [
    "MUTATING_METHODS",
    "PROTECTED_GET_PATHS",
    "SessionGate",
    "clear_session_cookie",
]
