"""OAuth sign-in routes."""

from __future__ import annotations

import logging
from typing import Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ...auth.gate import clear_session_cookie
from ...auth.pipeline import AuthContext
from ..deps import Services, get_services

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

SIGN_IN_MESSAGE = "Authentication succeeded. You may close this window."


@router.get("/api/auth")
def auth_possible(services: Services = Depends(get_services)) -> Dict[str, str]:
    """List the available identity providers and their sign-in paths."""

    return services.providers.routes()


@router.get("/auth/{provider}", name="auth_start")
async def auth_start(
    provider: str, request: Request, services: Services = Depends(get_services)
):
    identity_provider = services.providers.get(provider)
    logger.info("Redirecting to %s", identity_provider.name)
    return await identity_provider.authenticate(request)


@router.get("/auth/{provider}/callback", name="auth_callback")
async def auth_callback(
    provider: str, request: Request, services: Services = Depends(get_services)
):
    context = AuthContext(request=request, provider=services.providers.get(provider))
    context = await services.callback_pipeline.run(context)

    response = JSONResponse({"message": SIGN_IN_MESSAGE})
    response.set_cookie(
        services.settings.jwt_token_name,
        context.token,
        **services.codec.cookie_options(),
    )
    return response


@router.post("/auth/logout")
def auth_logout(services: Services = Depends(get_services)):
    response = JSONResponse({"ok": True})
    clear_session_cookie(response, services.settings.jwt_token_name, services.codec)
    return response


__all__ = ["router"]
