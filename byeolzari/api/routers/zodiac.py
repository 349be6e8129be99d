"""Zodiac reference endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ...core.errors import InternalServerError
from ...services import zodiac_to_dict
from ..deps import Services, get_services

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/zodiac", tags=["zodiac"])


@router.get("")
def read_all(services: Services = Depends(get_services)):
    """List every zodiac sign with its start and end dates."""

    return [zodiac_to_dict(zodiac) for zodiac in services.zodiac.read_all()]


@router.get("/{zodiac_id}")
def read_one(zodiac_id: int, services: Services = Depends(get_services)):
    """Get a single zodiac sign by ID."""

    try:
        zodiac = services.zodiac.read_one(zodiac_id)
    except SQLAlchemyError as exc:
        logger.error("Zodiac lookup failed for id=%s", zodiac_id, exc_info=exc)
        raise InternalServerError() from exc
    if not zodiac:
        return JSONResponse(status_code=404, content={"message": "Not Found Data"})
    return zodiac_to_dict(zodiac)


__all__ = ["router"]
