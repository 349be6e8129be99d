"""OAuth callback pipeline.

The callback runs as an ordered list of named steps over one
:class:`AuthContext`. A step either completes, advancing the context's
:class:`SessionState`, or raises an :class:`~byeolzari.core.errors.AppError`
that stops the remaining steps. The session cookie is only written by the
caller after every step has finished.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence, Tuple

from fastapi import Request

from ..core.errors import AppError
from ..models import Byeol
from ..services.byeols import ByeolService
from .providers import IdentityProvider, UserProfile
from .tokens import SessionTokenCodec

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    ANONYMOUS = "anonymous"
    PROVIDER_REDIRECTED = "provider_redirected"
    CALLBACK_RECEIVED = "callback_received"
    PROVISIONED = "provisioned"
    TOKEN_ISSUED = "token_issued"
    VERIFICATION_FAILED = "verification_failed"


@dataclass
class AuthContext:
    request: Request
    provider: IdentityProvider
    state: SessionState = SessionState.PROVIDER_REDIRECTED
    profile: Optional[UserProfile] = None
    byeol: Optional[Byeol] = None
    claims: Dict[str, Any] = field(default_factory=dict)
    token: Optional[str] = None


Step = Callable[[AuthContext], Awaitable[None]]


class Pipeline:
    def __init__(self, steps: Sequence[Tuple[str, Step]]) -> None:
        self.steps = tuple(steps)

    @property
    def step_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.steps)

    async def run(self, context: AuthContext) -> AuthContext:
        for name, step in self.steps:
            try:
                await step(context)
            except AppError:
                logger.info("%s failed at %s (state=%s)", context.provider.name, name, context.state.value)
                raise
            logger.info("%s: %s -> %s", context.provider.name, name, context.state.value)
        return context


def build_callback_pipeline(byeols: ByeolService, codec: SessionTokenCodec) -> Pipeline:
    """Callback steps: provider exchange, provisioning, token issuance."""

    async def exchange_callback(context: AuthContext) -> None:
        context.profile = await context.provider.authenticate_callback(context.request)
        context.state = SessionState.CALLBACK_RECEIVED

    async def sign_up_if_new_user(context: AuthContext) -> None:
        profile = context.profile
        byeol = byeols.sign_up_if_new_user(profile)
        context.byeol = byeol
        # The session subject is the local id from here on, never the provider's id.
        context.claims = {
            "sub": str(byeol.id),
            "id": byeol.id,
            "provider": byeol.provider,
            "provider_id": byeol.provider_id,
            "name": byeol.name,
        }
        context.state = SessionState.PROVISIONED

    async def issue_token(context: AuthContext) -> None:
        context.token = codec.sign(context.claims)
        context.state = SessionState.TOKEN_ISSUED

    return Pipeline(
        (
            ("exchange_callback", exchange_callback),
            ("sign_up_if_new_user", sign_up_if_new_user),
            ("issue_token", issue_token),
        )
    )


__all__ = [
    "AuthContext",
    "Pipeline",
    "SessionState",
    "Step",
    "build_callback_pipeline",
]
