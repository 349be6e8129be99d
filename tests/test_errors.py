import json

import pytest

from byeolzari.core.errors import (
    AuthProviderError,
    ConflictError,
    ErrorKind,
    InternalServerError,
    InvalidRequestError,
    InvalidTokenError,
    NotFoundError,
    UnauthorizedError,
    _DEFAULTS,
    dispatch,
    error_response,
)


@pytest.mark.parametrize(
    "error, expected",
    [
        (UnauthorizedError(), (401, "Unauthorized")),
        (InvalidTokenError(), (401, "Unauthorized")),
        (AuthProviderError(), (502, "Authentication provider error")),
        (AuthProviderError("denied", status_code=401), (401, "denied")),
        (ConflictError(), (409, "Conflict")),
        (NotFoundError("Page not found"), (404, "Page not found")),
        (InvalidRequestError(), (422, "Invalid request")),
        (InternalServerError(), (500, "Internal Server Error")),
    ],
)
def test_dispatch_maps_each_kind(error, expected):
    assert dispatch(error) == expected


def test_unclassified_exception_becomes_500():
    assert dispatch(ValueError("secret detail")) == (500, "Internal Server Error")


def test_error_response_hides_detail():
    response = error_response(KeyError("db password"))
    body = json.loads(response.body)
    assert response.status_code == 500
    assert body == {"statusCode": 500, "message": "Internal Server Error"}


def test_error_response_uses_app_error_message():
    response = error_response(NotFoundError("Page not found"))
    assert response.status_code == 404
    assert json.loads(response.body) == {"statusCode": 404, "message": "Page not found"}


def test_every_kind_has_a_default_status():
    assert set(_DEFAULTS) == set(ErrorKind)


def test_error_response_passes_headers_through():
    response = error_response(UnauthorizedError(), headers={"WWW-Authenticate": "Cookie"})
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Cookie"


@pytest.mark.parametrize("error", [NotFoundError("Page not found"), RuntimeError("boom")])
def test_error_response_logs_traceback(error, caplog):
    try:
        raise error
    except Exception as exc:
        with caplog.at_level("INFO", logger="byeolzari.core.errors"):
            error_response(exc)

    record = caplog.records[-1]
    assert record.exc_info is not None
    assert record.exc_info[1] is error
