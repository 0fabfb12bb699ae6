"""Unit tests for UserAdminService role rules and broker provisioning."""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.cp_common.errors import (
    CannotDeleteSelfError,
    EmailExistsError,
    InsufficientRoleError,
    UserNotFoundError,
)
from src.cp_gateway.auth.password import verify_password
from src.cp_users.application.schemas import CreateUserRequest
from src.cp_users.application.service import UserAdminService, split_full_name
from tests.factories import assign_id, build_user


def _db() -> MagicMock:
    db = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    return db


def _request(role: str) -> CreateUserRequest:
    return CreateUserRequest(
        email="New.Person@Example.com",
        password="Secret123!",
        first_name="New",
        last_name="Person",
        role=role,
    )


@pytest.fixture
def repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_email.return_value = None
    repo.add.side_effect = assign_id
    return repo


@pytest.fixture
def service(repo: AsyncMock) -> UserAdminService:
    return UserAdminService(repo=repo, audit=AsyncMock())


class TestCreateUser:
    async def test_admin_cannot_create_super_admin(
        self, service: UserAdminService, repo: AsyncMock
    ) -> None:
        with pytest.raises(InsufficientRoleError):
            await service.create_user(_db(), build_user("ADMIN"), _request("SUPER_ADMIN"))
        repo.add.assert_not_awaited()

    async def test_super_admin_can_create_super_admin(self, service: UserAdminService) -> None:
        user = await service.create_user(
            _db(), build_user("SUPER_ADMIN", "root@example.com"), _request("SUPER_ADMIN")
        )
        assert user.role == "SUPER_ADMIN"

    async def test_email_is_lowercased_and_password_hashed(
        self, service: UserAdminService
    ) -> None:
        user = await service.create_user(_db(), build_user("ADMIN"), _request("MANAGER"))
        assert user.email == "new.person@example.com"
        assert verify_password("Secret123!", user.password_hash)

    async def test_duplicate_email(self, service: UserAdminService, repo: AsyncMock) -> None:
        repo.get_by_email.return_value = build_user("USER", "new.person@example.com")
        with pytest.raises(EmailExistsError):
            await service.create_user(_db(), build_user("ADMIN"), _request("USER"))


class TestDeleteUser:
    async def test_cannot_delete_self(self, service: UserAdminService, repo: AsyncMock) -> None:
        actor = build_user("SUPER_ADMIN")
        with pytest.raises(CannotDeleteSelfError):
            await service.delete_user(_db(), actor, actor.id)
        repo.delete.assert_not_awaited()

    async def test_missing_user(self, service: UserAdminService, repo: AsyncMock) -> None:
        repo.get_by_id.return_value = None
        with pytest.raises(UserNotFoundError):
            await service.delete_user(_db(), build_user("ADMIN"), uuid.uuid4())

    async def test_deletes_other_user(self, service: UserAdminService, repo: AsyncMock) -> None:
        target = build_user("USER", "old@example.com")
        repo.get_by_id.return_value = target
        db = _db()

        await service.delete_user(db, build_user("ADMIN"), target.id)

        repo.delete.assert_awaited_once_with(db, target)
        db.commit.assert_awaited_once()


class TestSplitFullName:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Jane Broker", ("Jane", "Broker")),
            ("Mary Anne van Dyke", ("Mary", "Anne van Dyke")),
            ("Cher", ("Cher", "User")),
            ("   ", ("Broker", "User")),
            (None, ("Broker", "User")),
        ],
    )
    def test_split(self, name: str | None, expected: tuple[str, str]) -> None:
        assert split_full_name(name) == expected


class TestEnsureBrokerAccount:
    async def test_existing_account_untouched(
        self, service: UserAdminService, repo: AsyncMock
    ) -> None:
        repo.get_by_email.return_value = build_user("BROKER", "agent@broker.com")

        provision = await service.ensure_broker_account(_db(), "Agent@Broker.com", "Al Agent")

        assert provision.created is False
        assert provision.password is None
        repo.add.assert_not_awaited()

    async def test_new_account_gets_broker_role(
        self, service: UserAdminService, repo: AsyncMock
    ) -> None:
        db = _db()

        provision = await service.ensure_broker_account(db, "Agent@Broker.com", "Al Agent")

        created = repo.add.await_args.args[1]
        assert provision.created is True
        assert provision.email == "agent@broker.com"
        assert len(provision.password) == 12
        assert (created.first_name, created.last_name) == ("Al", "Agent")
        assert created.role == "BROKER"
        assert verify_password(provision.password, created.password_hash)
        db.commit.assert_not_awaited()
