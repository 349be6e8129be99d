"""Signed session tokens and the cookie that carries them."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict, Mapping, Optional

import jwt

from ..core.errors import InvalidTokenError
from ..core.time import utcnow

_TIMING_CLAIMS = ("iat", "exp")


class SessionTokenCodec:
    """Issue and verify HMAC-signed JWTs for authenticated users.

    The codec is stateless: tokens are never stored server side, so a
    token stays valid until it expires.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(days=7),
    ) -> None:
        if not secret:
            raise ValueError("A signing secret is required")
        self._secret = secret
        self._algorithm = algorithm
        self.expires_in = expires_in

    def sign(self, claims: Mapping[str, Any]) -> str:
        issued_at = utcnow()
        payload = dict(claims)
        payload["iat"] = issued_at
        payload["exp"] = issued_at + self.expires_in
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify_and_get_payload(self, token: Optional[str]) -> Dict[str, Any]:
        """Return the claims that were signed into ``token``.

        Raises:
            InvalidTokenError: the token is missing, malformed, signed with
                another key or expired.
        """

        if not token:
            raise InvalidTokenError("Missing session token")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("Session token expired") from exc
        except jwt.PyJWTError as exc:
            raise InvalidTokenError("Invalid session token") from exc

        for claim in _TIMING_CLAIMS:
            payload.pop(claim, None)
        return payload

    def cookie_options(self) -> Dict[str, Any]:
        """Attributes every session cookie is set (and cleared) with."""

        return {
            "httponly": True,
            "secure": True,
            "samesite": "strict",
            "max_age": int(self.expires_in.total_seconds()),
        }


__all__ = ["SessionTokenCodec"]
