"""Unit tests for AuthService login, refresh rotation and cleanup."""

from datetime import timedelta
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.cp_common.datetime_utils import utc_now
from src.cp_common.errors import (
    AccountDisabledError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
)
from src.cp_gateway.auth.jwt_handler import decode_token
from src.cp_gateway.auth.password import hash_password
from src.cp_gateway.auth.refresh_tokens import issue_refresh_token
from src.cp_gateway.user.db_models import RefreshTokenModel
from src.cp_gateway.user.service import AuthService
from tests.factories import build_user

PASSWORD = "Secret123!"


def _result(value: Any) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


def _deleted(rowcount: int) -> MagicMock:
    result = MagicMock()
    result.rowcount = rowcount
    return result


def _db(*values: Any) -> MagicMock:
    db = MagicMock()
    db.execute = AsyncMock(
        side_effect=[v if isinstance(v, MagicMock) else _result(v) for v in values]
    )
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    return db


@pytest.fixture
def service() -> AuthService:
    return AuthService(audit=AsyncMock())


class TestLogin:
    async def test_success_issues_tokens_and_session(self, service: AuthService) -> None:
        user = build_user(password_hash=hash_password(PASSWORD))
        db = _db(user)

        returned, access, refresh = await service.login(db, "Admin@Example.com", PASSWORD)

        assert returned is user
        assert decode_token(access)["sub"] == str(user.id)
        assert len(refresh) == 97
        assert db.add.call_count == 2
        db.commit.assert_awaited_once()

    async def test_unknown_email_and_wrong_password_look_the_same(
        self, service: AuthService
    ) -> None:
        user = build_user(password_hash=hash_password(PASSWORD))
        with pytest.raises(InvalidCredentialsError):
            await service.login(_db(None), "nobody@example.com", PASSWORD)
        with pytest.raises(InvalidCredentialsError):
            await service.login(_db(user), "admin@example.com", "Wrong123!")

    async def test_disabled_account(self, service: AuthService) -> None:
        user = build_user(password_hash=hash_password(PASSWORD), is_active=False)
        with pytest.raises(AccountDisabledError):
            await service.login(_db(user), "admin@example.com", PASSWORD)


class TestRefresh:
    def _stored(self, token_expires_in: timedelta) -> tuple[str, RefreshTokenModel]:
        issued = issue_refresh_token()
        stored = RefreshTokenModel(
            selector=issued.selector,
            verifier_hash=issued.verifier_hash,
            expires_at=utc_now() + token_expires_in,
        )
        return issued.token, stored

    async def test_rotation_is_single_use(self, service: AuthService) -> None:
        user = build_user()
        token, stored = self._stored(timedelta(days=1))
        stored.user_id = user.id
        db = _db(stored, user, _deleted(1))

        _, access, new_token = await service.refresh(db, token)

        assert new_token != token
        assert decode_token(access)["email"] == user.email
        assert db.execute.await_count == 3
        db.add.assert_called_once()
        db.commit.assert_awaited_once()

    async def test_token_consumed_by_concurrent_refresh(self, service: AuthService) -> None:
        user = build_user()
        token, stored = self._stored(timedelta(days=1))
        stored.user_id = user.id
        db = _db(stored, user, _deleted(0))

        with pytest.raises(InvalidRefreshTokenError):
            await service.refresh(db, token)

        db.add.assert_not_called()
        db.commit.assert_not_awaited()
        db.rollback.assert_awaited_once()

    async def test_selector_lookup_locks_row(self, service: AuthService) -> None:
        token, stored = self._stored(timedelta(seconds=-1))
        db = _db(stored)

        with pytest.raises(InvalidRefreshTokenError):
            await service.refresh(db, token)

        stmt = db.execute.await_args_list[0].args[0]
        assert stmt._for_update_arg is not None

    async def test_expired(self, service: AuthService) -> None:
        token, stored = self._stored(timedelta(seconds=-1))
        with pytest.raises(InvalidRefreshTokenError):
            await service.refresh(_db(stored), token)

    async def test_verifier_mismatch(self, service: AuthService) -> None:
        token, stored = self._stored(timedelta(days=1))
        selector = token.split(":")[0]
        with pytest.raises(InvalidRefreshTokenError):
            await service.refresh(_db(stored), f"{selector}:{'0' * 64}")

    async def test_malformed_token_never_hits_db(self, service: AuthService) -> None:
        db = _db()
        with pytest.raises(InvalidRefreshTokenError):
            await service.refresh(db, "not-a-token")
        db.execute.assert_not_awaited()


class TestCleanup:
    async def test_nothing_expired(self, service: AuthService) -> None:
        db = MagicMock()
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        db.execute = AsyncMock(return_value=result)
        db.commit = AsyncMock()

        assert await service.cleanup_expired_tokens(db) == 0
        db.commit.assert_not_awaited()
