"""Repository Protocol — dependency inversion for testability."""

import uuid
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_notifications.infrastructure.db_models import NotificationModel


class NotificationRepositoryProtocol(Protocol):
    async def add(self, db: AsyncSession, notification: NotificationModel) -> NotificationModel: ...

    async def get_for_user(
        self, db: AsyncSession, notification_id: uuid.UUID, user_id: uuid.UUID
    ) -> NotificationModel | None: ...

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        notification_type: str | None,
        read: bool | None,
    ) -> list[NotificationModel]: ...

    async def count_unread(self, db: AsyncSession, user_id: uuid.UUID) -> int: ...

    async def mark_all_read(self, db: AsyncSession, user_id: uuid.UUID) -> int: ...

    async def delete(self, db: AsyncSession, notification: NotificationModel) -> None: ...
