import os

# byeolzari.app builds a module-level app from the environment on import.
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from starlette.responses import RedirectResponse

from byeolzari.app import create_app
from byeolzari.auth.providers import (
    SUPPORTED_PROVIDERS,
    IdentityProvider,
    ProviderRegistry,
    UserProfile,
)
from byeolzari.core.config import Settings

TOKEN_NAME = "byeol_token"


class FakeProvider(IdentityProvider):
    """Provider that skips the network and returns a fixed profile."""

    def __init__(self, name, profile=None, error=None):
        super().__init__(client=None)
        self.name = name
        self.profile = profile or UserProfile(provider=name, provider_id="42", name="Star")
        self.error = error
        self.callbacks = 0

    async def authenticate(self, request):
        return RedirectResponse(f"https://{self.name}.example/authorize", status_code=302)

    async def authenticate_callback(self, request):
        self.callbacks += 1
        if self.error is not None:
            raise self.error
        return self.profile


@pytest.fixture
def settings():
    return Settings(
        secret_key="test-secret-key",
        jwt_token_name=TOKEN_NAME,
        database_url="sqlite://",
        log_level="WARNING",
    )


@pytest.fixture
def fake_providers():
    return {name: FakeProvider(name) for name in SUPPORTED_PROVIDERS}


@pytest.fixture
def app(settings, fake_providers):
    return create_app(settings, providers=ProviderRegistry(fake_providers))


@pytest.fixture
def services(app):
    return app.state.services


@pytest.fixture
def client(app):
    # https so the Secure session cookie is sent back.
    with TestClient(app, base_url="https://testserver") as c:
        yield c


def session_cookie_header(response, name=TOKEN_NAME):
    for header in response.headers.get_list("set-cookie"):
        if header.startswith(f"{name}="):
            return header
    return None
