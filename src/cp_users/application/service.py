"""UserAdminService — admin CRUD over users plus broker auto-provisioning."""

import logging
import uuid
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_audit.application.service import AuditService
from src.cp_audit.domain.models import AuditEntry
from src.cp_common.enums import ADMIN_ROLES, AuditAction, AuditResource, UserRole
from src.cp_common.errors import (
    CannotDeleteSelfError,
    EmailExistsError,
    InsufficientRoleError,
    UserNotFoundError,
)
from src.cp_common.pagination import Page, PageParams
from src.cp_gateway.auth.password import generate_password, hash_password
from src.cp_gateway.user.db_models import UserModel
from src.cp_gateway.user.schemas import UserInfo
from src.cp_users.application.schemas import CreateUserRequest, UpdateUserRequest
from src.cp_users.domain.repository import UserRepositoryProtocol
from src.cp_users.infrastructure.persistence import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class BrokerProvision:
    email: str
    created: bool
    password: str | None = None  # only set for new accounts, never logged


def split_full_name(name: str | None) -> tuple[str, str]:
    parts = (name or "").split()
    first = parts[0] if parts else "Broker"
    last = " ".join(parts[1:]) if len(parts) > 1 else "User"
    return first, last


class UserAdminService:
    def __init__(
        self,
        repo: UserRepositoryProtocol | None = None,
        audit: AuditService | None = None,
    ) -> None:
        self._repo: UserRepositoryProtocol = repo or UserRepository()
        self._audit = audit or AuditService()

    async def create_user(
        self, db: AsyncSession, actor: UserModel, body: CreateUserRequest
    ) -> UserModel:
        if body.role == UserRole.SUPER_ADMIN and actor.role != UserRole.SUPER_ADMIN.value:
            raise InsufficientRoleError(actor.role)
        if await self._repo.get_by_email(db, body.email) is not None:
            raise EmailExistsError()

        try:
            user = await self._repo.add(
                db,
                UserModel(
                    email=body.email.lower(),
                    password_hash=hash_password(body.password),
                    first_name=body.first_name,
                    last_name=body.last_name,
                    role=body.role.value,
                    is_active=True,
                ),
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await self._audit.log(
            AuditEntry(
                action=AuditAction.CREATE.value,
                resource=AuditResource.USER.value,
                user_id=str(actor.id),
                resource_id=str(user.id),
                metadata={"role": user.role},
            )
        )
        return user

    async def list_users(self, db: AsyncSession, params: PageParams) -> Page:
        users, total = await self._repo.list_users(db, params.offset, params.limit)
        items = [UserInfo.model_validate(u).model_dump(mode="json") for u in users]
        return Page.build(items, total, params)

    async def get_user(
        self, db: AsyncSession, actor: UserModel, user_id: uuid.UUID
    ) -> UserModel:
        if actor.role not in {r.value for r in ADMIN_ROLES} and actor.id != user_id:
            raise InsufficientRoleError(actor.role)
        user = await self._repo.get_by_id(db, user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user

    async def update_user(
        self,
        db: AsyncSession,
        actor: UserModel,
        user_id: uuid.UUID,
        body: UpdateUserRequest,
    ) -> UserModel:
        user = await self._repo.get_by_id(db, user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        if body.role == UserRole.SUPER_ADMIN and actor.role != UserRole.SUPER_ADMIN.value:
            raise InsufficientRoleError(actor.role)

        changes = body.model_dump(exclude_unset=True, exclude={"password"})
        if body.email is not None:
            changes["email"] = body.email.lower()
            if changes["email"] != user.email and await self._repo.get_by_email(db, body.email):
                raise EmailExistsError()

        try:
            for field_name, value in changes.items():
                setattr(user, field_name, value.value if isinstance(value, UserRole) else value)
            if body.password is not None:
                user.password_hash = hash_password(body.password)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await self._audit.log(
            AuditEntry(
                action=AuditAction.UPDATE.value,
                resource=AuditResource.USER.value,
                user_id=str(actor.id),
                resource_id=str(user.id),
                changes={
                    k: (v.value if isinstance(v, UserRole) else v) for k, v in changes.items()
                },
                metadata={"password_changed": body.password is not None},
            )
        )
        return user

    async def delete_user(
        self, db: AsyncSession, actor: UserModel, user_id: uuid.UUID
    ) -> None:
        if actor.id == user_id:
            raise CannotDeleteSelfError()
        user = await self._repo.get_by_id(db, user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        try:
            await self._repo.delete(db, user)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await self._audit.log(
            AuditEntry(
                action=AuditAction.DELETE.value,
                resource=AuditResource.USER.value,
                user_id=str(actor.id),
                resource_id=str(user_id),
            )
        )

    async def ensure_broker_account(
        self, db: AsyncSession, email: str, name: str | None
    ) -> BrokerProvision:
        """Find or create a BROKER login for a broker contact.

        Runs inside the caller's transaction; the caller commits.
        """
        email = email.lower()
        if await self._repo.get_by_email(db, email) is not None:
            return BrokerProvision(email=email, created=False)

        password = generate_password()
        first_name, last_name = split_full_name(name)
        await self._repo.add(
            db,
            UserModel(
                email=email,
                password_hash=hash_password(password),
                first_name=first_name,
                last_name=last_name,
                role=UserRole.BROKER.value,
                is_active=True,
            ),
        )
        logger.info("Provisioned broker account for %s", email)
        return BrokerProvision(email=email, created=True, password=password)
