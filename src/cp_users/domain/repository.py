"""Repository Protocol — dependency inversion for testability."""

import uuid
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_gateway.user.db_models import UserModel


class UserRepositoryProtocol(Protocol):
    async def get_by_id(self, db: AsyncSession, user_id: uuid.UUID) -> UserModel | None: ...

    async def get_by_email(self, db: AsyncSession, email: str) -> UserModel | None: ...

    async def add(self, db: AsyncSession, user: UserModel) -> UserModel: ...

    async def list_users(
        self, db: AsyncSession, offset: int, limit: int
    ) -> tuple[list[UserModel], int]: ...

    async def delete(self, db: AsyncSession, user: UserModel) -> None: ...
