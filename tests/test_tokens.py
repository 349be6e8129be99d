from datetime import timedelta

import jwt
import pytest

from byeolzari.auth.tokens import SessionTokenCodec
from byeolzari.core.errors import InvalidTokenError, UnauthorizedError

SECRET = "unit-test-secret"


@pytest.fixture
def codec():
    return SessionTokenCodec(SECRET)


def test_sign_and_verify_returns_original_claims(codec):
    claims = {"sub": "7", "id": 7, "provider": "github", "provider_id": "42", "name": "Star"}
    token = codec.sign(claims)
    assert codec.verify_and_get_payload(token) == claims


def test_signed_token_carries_expiry(codec):
    token = codec.sign({"sub": "1"})
    payload = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())


def test_sign_does_not_mutate_claims(codec):
    claims = {"sub": "1"}
    codec.sign(claims)
    assert claims == {"sub": "1"}


def test_tampered_signature_is_rejected(codec):
    token = codec.sign({"sub": "1"})
    header, body, signature = token.split(".")
    forged = f"{header}.{body}.{'A' if signature[0] != 'A' else 'B'}{signature[1:]}"
    with pytest.raises(InvalidTokenError):
        codec.verify_and_get_payload(forged)


def test_tampered_payload_is_rejected(codec):
    token = codec.sign({"sub": "1"})
    other = codec.sign({"sub": "2"})
    header, _, signature = token.split(".")
    _, other_body, _ = other.split(".")
    with pytest.raises(InvalidTokenError):
        codec.verify_and_get_payload(f"{header}.{other_body}.{signature}")


def test_token_from_another_secret_is_rejected(codec):
    token = SessionTokenCodec("someone-else").sign({"sub": "1"})
    with pytest.raises(InvalidTokenError):
        codec.verify_and_get_payload(token)


def test_expired_token_is_rejected():
    codec = SessionTokenCodec(SECRET, expires_in=timedelta(seconds=-30))
    token = codec.sign({"sub": "1"})
    with pytest.raises(InvalidTokenError) as excinfo:
        codec.verify_and_get_payload(token)
    assert "expired" in excinfo.value.message


def test_token_without_expiry_is_rejected(codec):
    token = jwt.encode({"sub": "1"}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        codec.verify_and_get_payload(token)


@pytest.mark.parametrize("token", [None, "", "not-a-jwt", "a.b.c"])
def test_missing_or_malformed_token_is_rejected(codec, token):
    with pytest.raises(UnauthorizedError) as excinfo:
        codec.verify_and_get_payload(token)
    assert excinfo.value.status_code == 401


def test_cookie_options_are_locked_down(codec):
    assert codec.cookie_options() == {
        "httponly": True,
        "secure": True,
        "samesite": "strict",
        "max_age": 60 * 60 * 24 * 7,
    }


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        SessionTokenCodec("")
