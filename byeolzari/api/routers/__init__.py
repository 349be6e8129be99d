"""Aggregate API routers."""

from fastapi import APIRouter

from .auth import router as auth_router
from .byeol import router as byeol_router
from .system import router as system_router
from .zodiac import router as zodiac_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    auth_router,
    byeol_router,
    zodiac_router,
)

__all__ = ["ALL_ROUTERS"]
