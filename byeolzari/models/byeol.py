"""Database model for locally provisioned users."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Byeol(SQLModel, table=True):
    """User linked to exactly one identity at one OAuth provider."""

    __tablename__ = "byeol"
    __table_args__ = (
        UniqueConstraint("provider", "provider_id", name="uq_byeol_provider_identity"),
    )

    id: Optional[int] = ORMField(default=None, primary_key=True)
    provider: str = ORMField(index=True)
    provider_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Byeol"]
