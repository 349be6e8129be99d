"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.sessions import SessionMiddleware

from .api import register_routes
from .api.deps import Services
from .auth.gate import SessionGate
from .auth.pipeline import build_callback_pipeline
from .auth.providers import ProviderRegistry, build_provider_registry
from .auth.tokens import SessionTokenCodec
from .core import (
    AppError,
    InvalidRequestError,
    NotFoundError,
    Settings,
    create_db_engine,
    error_response,
    get_settings,
    init_db,
    setup_logging,
)
from .services import ByeolService, ZodiacService

logger = logging.getLogger(__name__)


def build_services(
    settings: Settings,
    *,
    providers: Optional[ProviderRegistry] = None,
    engine: Optional[Engine] = None,
) -> Services:
    """Construct every long-lived collaborator once, at process start."""

    engine = engine or create_db_engine(settings.database_url)
    codec = SessionTokenCodec(
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(days=settings.jwt_expires_days),
    )
    byeols = ByeolService(engine)
    return Services(
        settings=settings,
        engine=engine,
        codec=codec,
        providers=providers or build_provider_registry(settings),
        byeols=byeols,
        zodiac=ZodiacService(engine),
        callback_pipeline=build_callback_pipeline(byeols, codec),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    services: Services = app.state.services
    init_db(services.engine, reset=services.settings.db_reset)
    services.zodiac.seed()
    logger.info("Byeolzari API started (providers: %s)", ", ".join(services.providers))
    yield
    services.engine.dispose()


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        headers = getattr(exc, "headers", None)
        if exc.status_code == 404:
            return error_response(NotFoundError("Page not found"), headers=headers)
        return error_response(
            AppError(str(exc.detail), status_code=exc.status_code), headers=headers
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        error = InvalidRequestError()
        error.__cause__ = exc
        return error_response(error)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        return error_response(exc)


def create_app(
    settings: Optional[Settings] = None,
    *,
    providers: Optional[ProviderRegistry] = None,
    engine: Optional[Engine] = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    services = build_services(settings, providers=providers, engine=engine)

    app = FastAPI(title="Byeolzari API", version="0.1.0", lifespan=lifespan)
    app.state.services = services

    # Starlette runs the most recently added middleware first.
    app.add_middleware(
        BaseHTTPMiddleware,
        dispatch=SessionGate(services.codec, settings.jwt_token_name),
    )
    # OAuth state for the provider round trip; lax so the callback carries it.
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key,
        session_cookie="oauth_state",
        https_only=True,
        same_site="lax",
    )
    if settings.allowed_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.allowed_cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    install_error_handlers(app)
    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("byeolzari.app:app", host="127.0.0.1", port=3000, reload=True)
