"""Token service and password hashing tests."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from restaurant_api.core.errors import InvalidTokenError
from restaurant_api.core.security import (
    TOKEN_EXPIRES_IN_SECONDS,
    TokenService,
    get_password_hash,
    verify_password,
)

SECRET = "test-secret"


def _service_at(offset_seconds: int) -> TokenService:
    issued_at = datetime.now(timezone.utc) - timedelta(seconds=offset_seconds)
    return TokenService(SECRET, clock=lambda: issued_at)


def test_issue_then_verify_returns_user_id() -> None:
    service = TokenService(SECRET)
    token_data = service.issue(42)

    assert token_data.expires_in == 3600 == TOKEN_EXPIRES_IN_SECONDS
    assert service.verify(token_data.token) == 42


def test_token_only_carries_subject_and_expiry() -> None:
    token = TokenService(SECRET).issue(7).token

    claims = jwt.get_unverified_claims(token)

    assert set(claims) == {"sub", "exp"}
    assert claims["sub"] == "7"


def test_token_still_valid_just_before_expiry() -> None:
    token = _service_at(3590).issue(1).token

    assert TokenService(SECRET).verify(token) == 1


def test_token_rejected_after_expiry() -> None:
    token = _service_at(3601).issue(1).token

    with pytest.raises(InvalidTokenError):
        TokenService(SECRET).verify(token)


def test_token_signed_with_other_secret_is_rejected() -> None:
    token = TokenService("another-secret").issue(1).token

    with pytest.raises(InvalidTokenError):
        TokenService(SECRET).verify(token)


def test_malformed_token_is_rejected() -> None:
    with pytest.raises(InvalidTokenError):
        TokenService(SECRET).verify("not-a-jwt")


def test_token_without_numeric_subject_is_rejected() -> None:
    expire = datetime.now(timezone.utc) + timedelta(minutes=5)
    token = jwt.encode({"sub": "abc", "exp": expire}, SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        TokenService(SECRET).verify(token)


def test_password_hash_roundtrip() -> None:
    hashed = get_password_hash("secret123")

    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
