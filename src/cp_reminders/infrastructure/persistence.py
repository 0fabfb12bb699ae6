"""ReminderRepository — concrete implementation of ReminderRepositoryProtocol."""

import uuid
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_reminders.infrastructure.db_models import ExpirationReminderModel


class ReminderRepository:
    async def get_by_id(
        self, db: AsyncSession, reminder_id: uuid.UUID
    ) -> ExpirationReminderModel | None:
        result = await db.execute(
            select(ExpirationReminderModel).where(ExpirationReminderModel.id == reminder_id)
        )
        return result.scalar_one_or_none()

    async def add(
        self, db: AsyncSession, reminder: ExpirationReminderModel
    ) -> ExpirationReminderModel:
        db.add(reminder)
        await db.flush()
        return reminder

    async def sent_between(
        self,
        db: AsyncSession,
        coi_id: uuid.UUID,
        policy_type: str,
        reminder_type: str,
        start: datetime,
        end: datetime,
    ) -> bool:
        result = await db.execute(
            select(func.count())
            .select_from(ExpirationReminderModel)
            .where(
                ExpirationReminderModel.coi_id == coi_id,
                ExpirationReminderModel.policy_type == policy_type,
                ExpirationReminderModel.reminder_type == reminder_type,
                ExpirationReminderModel.sent_at >= start,
                ExpirationReminderModel.sent_at < end,
            )
        )
        return result.scalar_one() > 0

    async def list_for_coi(
        self, db: AsyncSession, coi_id: uuid.UUID
    ) -> list[ExpirationReminderModel]:
        result = await db.execute(
            select(ExpirationReminderModel)
            .where(ExpirationReminderModel.coi_id == coi_id)
            .order_by(ExpirationReminderModel.sent_at.desc())
        )
        return list(result.scalars().all())

    async def list_pending(self, db: AsyncSession) -> list[ExpirationReminderModel]:
        result = await db.execute(
            select(ExpirationReminderModel)
            .where(ExpirationReminderModel.acknowledged.is_(False))
            .order_by(ExpirationReminderModel.sent_at.desc())
        )
        return list(result.scalars().all())

    async def count_by_type(self, db: AsyncSession) -> dict[str, int]:
        result = await db.execute(
            select(ExpirationReminderModel.reminder_type, func.count()).group_by(
                ExpirationReminderModel.reminder_type
            )
        )
        return {row[0]: row[1] for row in result.all()}

    async def count_acknowledged(self, db: AsyncSession) -> int:
        result = await db.execute(
            select(func.count())
            .select_from(ExpirationReminderModel)
            .where(ExpirationReminderModel.acknowledged.is_(True))
        )
        return result.scalar_one()
