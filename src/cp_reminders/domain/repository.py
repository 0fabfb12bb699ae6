"""Repository Protocol — dependency inversion for testability."""

import uuid
from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_reminders.infrastructure.db_models import ExpirationReminderModel


class ReminderRepositoryProtocol(Protocol):
    async def get_by_id(
        self, db: AsyncSession, reminder_id: uuid.UUID
    ) -> ExpirationReminderModel | None: ...

    async def add(
        self, db: AsyncSession, reminder: ExpirationReminderModel
    ) -> ExpirationReminderModel: ...

    async def sent_between(
        self,
        db: AsyncSession,
        coi_id: uuid.UUID,
        policy_type: str,
        reminder_type: str,
        start: datetime,
        end: datetime,
    ) -> bool: ...

    async def list_for_coi(
        self, db: AsyncSession, coi_id: uuid.UUID
    ) -> list[ExpirationReminderModel]: ...

    async def list_pending(self, db: AsyncSession) -> list[ExpirationReminderModel]: ...

    async def count_by_type(self, db: AsyncSession) -> dict[str, int]: ...

    async def count_acknowledged(self, db: AsyncSession) -> int: ...
