"""Service container and the FastAPI dependencies that expose it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from fastapi import Request
from sqlalchemy.engine import Engine

from ..auth.pipeline import Pipeline
from ..auth.providers import ProviderRegistry
from ..auth.tokens import SessionTokenCodec
from ..core.config import Settings
from ..core.errors import UnauthorizedError
from ..services import ByeolService, ZodiacService


@dataclass(frozen=True)
class Services:
    """Everything the routers need, built once in ``create_app``."""

    settings: Settings
    engine: Engine
    codec: SessionTokenCodec
    providers: ProviderRegistry
    byeols: ByeolService
    zodiac: ZodiacService
    callback_pipeline: Pipeline


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_current_user(request: Request) -> Dict[str, Any]:
    """Claims attached by the session gate for protected routes."""

    user = getattr(request.state, "user", None)
    if not user:
        raise UnauthorizedError()
    return user


__all__ = ["Services", "get_current_user", "get_services"]
