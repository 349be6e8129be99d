"""Application settings and environment helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable, List

from dotenv import load_dotenv

load_dotenv(override=False)


def _require_env(name: str) -> str:
    """Return a required environment variable or raise an error."""

    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


@dataclass(frozen=True)
class ProviderCredentials:
    client_id: str = ""
    client_secret: str = ""

    @property
    def configured(self) -> bool:
        return bool(self.client_id and self.client_secret)


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read once at startup."""

    secret_key: str
    jwt_token_name: str = "byeol_token"
    jwt_algorithm: str = "HS256"
    jwt_expires_days: int = 7
    github: ProviderCredentials = field(default_factory=ProviderCredentials)
    google: ProviderCredentials = field(default_factory=ProviderCredentials)
    oauth_callback_base_url: str = ""
    database_url: str = "sqlite:///data/app.db"
    allowed_cors_origins: List[str] = field(default_factory=list)
    db_reset: bool = False
    log_level: str = "INFO"

    def credentials_for(self, provider: str) -> ProviderCredentials:
        return getattr(self, provider, ProviderCredentials())


def load_settings() -> Settings:
    """Build settings from the process environment."""

    return Settings(
        secret_key=_require_env("SECRET_KEY"),
        jwt_token_name=os.getenv("JWT_TOKEN_NAME", "byeol_token"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_expires_days=_env_int("JWT_EXPIRES_DAYS", 7),
        github=ProviderCredentials(
            client_id=os.getenv("GITHUB_CLIENT_ID", ""),
            client_secret=os.getenv("GITHUB_CLIENT_SECRET", ""),
        ),
        google=ProviderCredentials(
            client_id=os.getenv("GOOGLE_CLIENT_ID", ""),
            client_secret=os.getenv("GOOGLE_CLIENT_SECRET", ""),
        ),
        # Public origin the providers redirect back to, without trailing slash.
        oauth_callback_base_url=os.getenv("OAUTH_CALLBACK_BASE_URL", "").rstrip("/"),
        database_url=os.getenv("DATABASE_URL", "sqlite:///data/app.db"),
        allowed_cors_origins=_unique(_split_csv(os.getenv("ALLOWED_CORS_ORIGINS"))),
        db_reset=_env_bool("DB_RESET", False),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


@lru_cache()
def get_settings() -> Settings:
    return load_settings()


__all__ = [
    "ProviderCredentials",
    "Settings",
    "get_settings",
    "load_settings",
]
