"""Unit tests for JWT handler."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from config.settings import settings
from src.cp_common.errors import InvalidCredentialsError
from src.cp_gateway.auth.jwt_handler import (
    access_token_ttl_seconds,
    create_access_token,
    decode_token,
)


def test_access_token_contains_correct_claims() -> None:
    token = create_access_token("user-123", "a@example.com", "ADMIN")
    payload = jwt.get_unverified_claims(token)
    assert payload["sub"] == "user-123"
    assert payload["email"] == "a@example.com"
    assert payload["role"] == "ADMIN"
    assert payload["type"] == "access"


def test_decode_valid_access_token() -> None:
    token = create_access_token("user-abc", "a@example.com", "USER")
    payload = decode_token(token)
    assert payload["sub"] == "user-abc"


def test_wrong_token_type_raises() -> None:
    token = create_access_token("user-abc", "a@example.com", "USER")
    with pytest.raises(InvalidCredentialsError):
        decode_token(token, expected_type="refresh")


def test_expired_access_token_raises_credentials_error() -> None:
    past = datetime.now(UTC) - timedelta(hours=1)
    token = jwt.encode(
        {"sub": "u", "type": "access", "iat": past, "exp": past + timedelta(minutes=1)},
        settings.JWT_SECRET,
        algorithm="HS256",
    )
    with pytest.raises(InvalidCredentialsError):
        decode_token(token)


def test_tampered_token_raises() -> None:
    token = create_access_token("user-abc", "a@example.com", "USER")
    with pytest.raises(InvalidCredentialsError):
        decode_token(token + "x")


def test_token_signed_with_other_secret_raises() -> None:
    token = jwt.encode({"sub": "u", "type": "access"}, "other-secret", algorithm="HS256")
    with pytest.raises(InvalidCredentialsError):
        decode_token(token)


def test_ttl_is_fifteen_minutes_by_default() -> None:
    assert access_token_ttl_seconds() == settings.JWT_EXPIRE_MINUTES * 60
