"""OAuth sign-in and session token handling."""

from .providers import (
    SUPPORTED_PROVIDERS,
    GitHubProvider,
    GoogleProvider,
    IdentityProvider,
    ProviderRegistry,
    UserProfile,
    build_provider_registry,
)
from .tokens import SessionTokenCodec

__all__ = [
    "GitHubProvider",
    "GoogleProvider",
    "IdentityProvider",
    "ProviderRegistry",
    "SUPPORTED_PROVIDERS",
    "SessionTokenCodec",
    "UserProfile",
    "build_provider_registry",
]
