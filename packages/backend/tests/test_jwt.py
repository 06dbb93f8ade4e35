"""Token codec and gate unit tests."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from tasktrack.auth.dependencies import CurrentIdentity, authenticate, parse_bearer
from tasktrack.auth.jwt import TokenError, create_access_token, verify_token
from tasktrack.config import settings
from tasktrack.errors import Unauthenticated


def test_token_round_trip_claims():
    token = create_access_token("user-1", "a@example.com")
    claims = verify_token(token)
    assert claims["id"] == "user-1"
    assert claims["email"] == "a@example.com"


def test_token_expires_after_one_hour():
    token = create_access_token("user-1", "a@example.com")
    claims = verify_token(token)
    assert claims["exp"] - claims["iat"] == settings.access_token_expire_minutes * 60


def test_expired_token_raises():
    token = create_access_token("user-1", "a@example.com", expires_minutes=-1)
    with pytest.raises(TokenError, match="expired"):
        verify_token(token)


def test_tampered_token_raises():
    token = create_access_token("user-1", "a@example.com")
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])
    with pytest.raises(TokenError):
        verify_token(tampered)


def test_unsigned_token_raises():
    token = jwt.encode(
        {"id": "u", "email": "e", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        key=None,
        algorithm="none",
    )
    with pytest.raises(TokenError):
        verify_token(token)


def test_token_without_identity_claims_raises():
    token = jwt.encode(
        {"sub": "u", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(TokenError):
        verify_token(token)


@pytest.mark.parametrize(
    "header, expected",
    [
        (None, None),
        ("", None),
        ("Bearer", None),
        ("Bearer ", None),
        ("Basic abc", None),
        ("bearer abc", None),
        ("Bearer abc", "abc"),
        ("Bearer  abc", " abc"),
    ],
)
def test_parse_bearer(header, expected):
    assert parse_bearer(header) == expected


def test_authenticate_builds_minimal_identity():
    token = create_access_token("user-9", "nine@example.com")
    identity = authenticate(f"Bearer {token}")
    assert identity == CurrentIdentity(id="user-9", email="nine@example.com", name="")


def test_authenticate_rejects_missing_header():
    with pytest.raises(Unauthenticated) as exc:
        authenticate(None)
    assert exc.value.status_code == 401
    assert exc.value.message == "missing token"


def test_authenticate_rejects_bad_token():
    with pytest.raises(Unauthenticated) as exc:
        authenticate("Bearer garbage")
    assert exc.value.message == "invalid token"
