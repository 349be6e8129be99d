"""OAuth identity providers.

Each provider wraps an authlib Starlette client and knows how to start the
authorization redirect and how to turn the provider callback into a
normalised :class:`UserProfile`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

import httpx
from authlib.integrations.base_client import OAuthError
from authlib.integrations.starlette_client import OAuth
from fastapi import Request
from starlette.responses import Response

from ..core.config import Settings
from ..core.errors import AuthProviderError, NotFoundError

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS: Tuple[str, ...] = ("google", "github")


@dataclass(frozen=True)
class UserProfile:
    """Identity asserted by a provider for the duration of one callback."""

    provider: str
    provider_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None


class IdentityProvider:
    """Common OAuth flow; subclasses normalise the provider's profile."""

    name: str = ""

    def __init__(self, client: Any, *, callback_base_url: str = "") -> None:
        self.client = client
        self.callback_base_url = callback_base_url

    def redirect_uri(self, request: Request) -> str:
        if self.callback_base_url:
            return f"{self.callback_base_url}/auth/{self.name}/callback"
        return str(request.url_for("auth_callback", provider=self.name))

    async def authenticate(self, request: Request) -> Response:
        """Redirect the user agent to the provider's authorization endpoint."""

        try:
            return await self.client.authorize_redirect(request, self.redirect_uri(request))
        except httpx.HTTPError as exc:
            raise AuthProviderError(f"{self.name} is unreachable") from exc

    async def authenticate_callback(self, request: Request) -> UserProfile:
        """Exchange the callback parameters for a verified user profile."""

        try:
            token = await self.client.authorize_access_token(request)
            data = await self.fetch_userinfo(token)
        except OAuthError as exc:
            logger.warning("%s rejected the OAuth exchange: %s", self.name, exc.error)
            raise AuthProviderError(
                f"{self.name} authentication failed", status_code=401
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s exchange failed: %s", self.name, exc)
            raise AuthProviderError(f"{self.name} is unreachable") from exc

        profile = self.to_profile(data)
        if not profile.provider_id:
            raise AuthProviderError(
                f"Unable to read {self.name} profile.", status_code=401
            )
        return profile

    async def fetch_userinfo(self, token: Mapping[str, Any]) -> Mapping[str, Any]:
        raise NotImplementedError

    def to_profile(self, data: Mapping[str, Any]) -> UserProfile:
        raise NotImplementedError


class GitHubProvider(IdentityProvider):
    name = "github"

    async def fetch_userinfo(self, token: Mapping[str, Any]) -> Mapping[str, Any]:
        response = await self.client.get("user", token=token)
        response.raise_for_status()
        return response.json()

    def to_profile(self, data: Mapping[str, Any]) -> UserProfile:
        raw_id = data.get("id")
        return UserProfile(
            provider=self.name,
            provider_id=str(raw_id) if raw_id is not None else "",
            name=data.get("name") or data.get("login"),
            email=data.get("email"),
            avatar_url=data.get("avatar_url"),
        )


class GoogleProvider(IdentityProvider):
    name = "google"

    async def fetch_userinfo(self, token: Mapping[str, Any]) -> Mapping[str, Any]:
        userinfo = token.get("userinfo")
        if userinfo:
            return userinfo
        return await self.client.userinfo(token=token)

    def to_profile(self, data: Mapping[str, Any]) -> UserProfile:
        email = data.get("email")
        return UserProfile(
            provider=self.name,
            provider_id=str(data.get("sub") or ""),
            name=data.get("name") or (email.split("@")[0] if email else None),
            email=email,
            avatar_url=data.get("picture"),
        )


class ProviderRegistry:
    """Ordered, read-only set of the providers the API offers."""

    def __init__(self, providers: Mapping[str, IdentityProvider]) -> None:
        self._providers: Dict[str, IdentityProvider] = dict(providers)

    def __iter__(self) -> Iterator[str]:
        return iter(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def get(self, name: str) -> IdentityProvider:
        try:
            return self._providers[name]
        except KeyError:
            raise NotFoundError(f"Unknown authentication provider: {name}") from None

    def routes(self) -> Dict[str, str]:
        return {name: f"/auth/{name}" for name in self._providers}


_CLIENT_KWARGS: Dict[str, Dict[str, Any]] = {
    "github": {
        "access_token_url": "https://github.com/login/oauth/access_token",
        "authorize_url": "https://github.com/login/oauth/authorize",
        "api_base_url": "https://api.github.com/",
        "client_kwargs": {"scope": "read:user user:email"},
    },
    "google": {
        "server_metadata_url": "https://accounts.google.com/.well-known/openid-configuration",
        "client_kwargs": {"scope": "openid email profile"},
    },
}

_PROVIDER_CLASSES = {
    "github": GitHubProvider,
    "google": GoogleProvider,
}


def build_provider_registry(settings: Settings, oauth: Optional[OAuth] = None) -> ProviderRegistry:
    """Register every supported provider with authlib."""

    oauth = oauth or OAuth()
    providers: Dict[str, IdentityProvider] = {}
    for name in SUPPORTED_PROVIDERS:
        credentials = settings.credentials_for(name)
        if not credentials.configured:
            logger.warning("%s OAuth is not configured; sign-in will fail", name)
        client = oauth.register(
            name=name,
            client_id=credentials.client_id or "unconfigured",
            client_secret=credentials.client_secret or "unconfigured",
            **_CLIENT_KWARGS[name],
        )
        providers[name] = _PROVIDER_CLASSES[name](
            client, callback_base_url=settings.oauth_callback_base_url
        )
    return ProviderRegistry(providers)


__all__ = [
    "GitHubProvider",
    "GoogleProvider",
    "IdentityProvider",
    "ProviderRegistry",
    "SUPPORTED_PROVIDERS",
    "UserProfile",
    "build_provider_registry",
]
