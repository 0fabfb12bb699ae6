"""Unit tests for opaque selector:verifier refresh tokens."""

from datetime import UTC, datetime, timedelta

import pytest

from config.settings import settings
from src.cp_common.errors import InvalidRefreshTokenError
from src.cp_gateway.auth.refresh_tokens import (
    issue_refresh_token,
    parse_refresh_token,
    verify_verifier,
)

SELECTOR = "a" * 32
VERIFIER = "b" * 64


class TestIssue:
    def test_token_shape(self) -> None:
        issued = issue_refresh_token()
        selector, verifier = issued.token.split(":")
        assert selector == issued.selector
        assert len(selector) == 32
        assert len(verifier) == 64

    def test_only_hash_of_verifier_is_kept(self) -> None:
        issued = issue_refresh_token()
        _, verifier = issued.token.split(":")
        assert verifier not in issued.verifier_hash
        assert verify_verifier(verifier, issued.verifier_hash)
        assert not verify_verifier("c" * 64, issued.verifier_hash)

    def test_expiry(self) -> None:
        now = datetime(2026, 1, 1, tzinfo=UTC)
        issued = issue_refresh_token(now)
        assert issued.expires_at == now + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)


class TestParse:
    def test_valid(self) -> None:
        assert parse_refresh_token(f"{SELECTOR}:{VERIFIER}") == (SELECTOR, VERIFIER)

    def test_uppercase_hex_accepted(self) -> None:
        assert parse_refresh_token(f"{SELECTOR.upper()}:{VERIFIER}")[0] == SELECTOR.upper()

    @pytest.mark.parametrize(
        "token",
        [
            "",
            SELECTOR + VERIFIER,
            f"{SELECTOR}:{VERIFIER}:extra",
            f"{SELECTOR[:-1]}:{VERIFIER}",
            f"{SELECTOR}:{VERIFIER[:-1]}",
            f"{'z' * 32}:{VERIFIER}",
            f"{SELECTOR}:{'g' * 64}",
        ],
    )
    def test_malformed_rejected(self, token: str) -> None:
        with pytest.raises(InvalidRefreshTokenError):
            parse_refresh_token(token)
