"""Local user provisioning for OAuth identities."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..auth.providers import UserProfile
from ..core.errors import ConflictError
from ..models import Byeol

logger = logging.getLogger(__name__)


class ByeolService:
    """Look up or create the local record for a provider identity.

    ``(provider, provider_id)`` is unique in storage. When two first logins
    for the same identity race, the losing insert re-reads the winner's row
    instead of failing.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def user_exists(self, provider_id: str, provider: str) -> bool:
        return self.find_by_identity(provider_id, provider) is not None

    def find_by_identity(self, provider_id: str, provider: str) -> Optional[Byeol]:
        with Session(self.engine) as session:
            return session.exec(
                select(Byeol).where(
                    Byeol.provider == provider, Byeol.provider_id == provider_id
                )
            ).first()

    def get(self, byeol_id: int) -> Optional[Byeol]:
        with Session(self.engine) as session:
            return session.get(Byeol, byeol_id)

    def create(self, profile: UserProfile) -> Byeol:
        byeol = Byeol(
            provider=profile.provider,
            provider_id=profile.provider_id,
            name=profile.name,
            email=profile.email,
            avatar_url=profile.avatar_url,
        )
        with Session(self.engine) as session:
            session.add(byeol)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                logger.info(
                    "Concurrent sign-up for %s:%s, reusing existing record",
                    profile.provider,
                    profile.provider_id,
                )
                existing = self.find_by_identity(profile.provider_id, profile.provider)
                if existing is None:
                    raise ConflictError("Could not provision user") from exc
                return existing
            session.refresh(byeol)
        logger.info("Created byeol %s for %s:%s", byeol.id, byeol.provider, byeol.provider_id)
        return byeol

    def sign_up_if_new_user(self, profile: UserProfile) -> Byeol:
        """Return the local record for ``profile``, creating it on first login."""

        if not self.user_exists(profile.provider_id, profile.provider):
            return self.create(profile)
        existing = self.find_by_identity(profile.provider_id, profile.provider)
        if existing is None:
            # Existence check passed but the row is gone; provision again.
            return self.create(profile)
        return existing


def byeol_to_dict(byeol: Byeol) -> Dict[str, Any]:
    """Serialise a byeol model to API-friendly dict."""

    return {
        "id": byeol.id,
        "provider": byeol.provider,
        "providerId": byeol.provider_id,
        "name": byeol.name,
        "email": byeol.email,
        "avatar_url": byeol.avatar_url,
        "created_at": byeol.created_at.isoformat() if byeol.created_at else None,
    }


__all__ = ["ByeolService", "byeol_to_dict"]
