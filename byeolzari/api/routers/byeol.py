"""Endpoints for the signed-in user."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...core.errors import NotFoundError
from ...services import byeol_to_dict
from ..deps import Services, get_current_user, get_services

router = APIRouter(prefix="/api/byeol", tags=["byeol"])


@router.get("")
def read_me(
    user: Dict[str, Any] = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    """Return the local record behind the current session."""

    byeol = services.byeols.get(int(user["id"]))
    if not byeol:
        raise NotFoundError("Byeol not found")
    return byeol_to_dict(byeol)


__all__ = ["router"]
