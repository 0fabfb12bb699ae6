"""NotificationRepository — every query is scoped to the owning user."""

import uuid

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.datetime_utils import utc_now
from src.cp_notifications.infrastructure.db_models import NotificationModel


class NotificationRepository:
    async def add(self, db: AsyncSession, notification: NotificationModel) -> NotificationModel:
        db.add(notification)
        await db.flush()
        return notification

    async def get_for_user(
        self, db: AsyncSession, notification_id: uuid.UUID, user_id: uuid.UUID
    ) -> NotificationModel | None:
        result = await db.execute(
            select(NotificationModel).where(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        notification_type: str | None,
        read: bool | None,
    ) -> list[NotificationModel]:
        stmt = select(NotificationModel).where(NotificationModel.user_id == user_id)
        if notification_type:
            stmt = stmt.where(NotificationModel.type == notification_type)
        if read is not None:
            stmt = stmt.where(NotificationModel.read == read)
        result = await db.execute(stmt.order_by(NotificationModel.created_at.desc()))
        return list(result.scalars().all())

    async def count_unread(self, db: AsyncSession, user_id: uuid.UUID) -> int:
        total = await db.scalar(
            select(func.count())
            .select_from(NotificationModel)
            .where(NotificationModel.user_id == user_id, NotificationModel.read.is_(False))
        )
        return int(total or 0)

    async def mark_all_read(self, db: AsyncSession, user_id: uuid.UUID) -> int:
        result = await db.execute(
            update(NotificationModel)
            .where(NotificationModel.user_id == user_id, NotificationModel.read.is_(False))
            .values(read=True, read_at=utc_now())
        )
        return result.rowcount or 0

    async def delete(self, db: AsyncSession, notification: NotificationModel) -> None:
        await db.delete(notification)
        await db.flush()
