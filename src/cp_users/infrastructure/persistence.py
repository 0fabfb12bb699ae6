"""UserRepository — users table access for admin management."""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_gateway.user.db_models import UserModel


class UserRepository:
    async def get_by_id(self, db: AsyncSession, user_id: uuid.UUID) -> UserModel | None:
        result = await db.execute(select(UserModel).where(UserModel.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, db: AsyncSession, email: str) -> UserModel | None:
        result = await db.execute(select(UserModel).where(UserModel.email == email.lower()))
        return result.scalar_one_or_none()

    async def add(self, db: AsyncSession, user: UserModel) -> UserModel:
        db.add(user)
        await db.flush()
        return user

    async def list_users(
        self, db: AsyncSession, offset: int, limit: int
    ) -> tuple[list[UserModel], int]:
        total = await db.scalar(select(func.count()).select_from(UserModel))
        result = await db.execute(
            select(UserModel).order_by(UserModel.created_at.desc()).offset(offset).limit(limit)
        )
        return list(result.scalars().all()), int(total or 0)

    async def delete(self, db: AsyncSession, user: UserModel) -> None:
        await db.delete(user)
        await db.flush()
