"""DeficiencyRepository — concrete implementation of DeficiencyRepositoryProtocol."""

import uuid
from datetime import datetime

from sqlalchemy import case, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.enums import DeficiencySeverity, DeficiencyStatus
from src.cp_deficiencies.infrastructure.db_models import (
    DeficiencyModel,
    DeficiencyReminderModel,
)

# CRITICAL first
_SEVERITY_RANK = case(
    {s.value: rank for rank, s in enumerate(DeficiencySeverity)},
    value=DeficiencyModel.severity,
    else_=99,
)

_OPEN = (DeficiencyStatus.OPEN.value, DeficiencyStatus.IN_PROGRESS.value)


class DeficiencyRepository:
    async def get_by_id(
        self, db: AsyncSession, deficiency_id: uuid.UUID
    ) -> DeficiencyModel | None:
        result = await db.execute(
            select(DeficiencyModel).where(DeficiencyModel.id == deficiency_id)
        )
        return result.scalar_one_or_none()

    async def add(self, db: AsyncSession, deficiency: DeficiencyModel) -> DeficiencyModel:
        db.add(deficiency)
        await db.flush()
        return deficiency

    async def list_deficiencies(
        self, db: AsyncSession, review_id: uuid.UUID | None, status: str | None
    ) -> list[DeficiencyModel]:
        stmt = select(DeficiencyModel)
        if review_id is not None:
            stmt = stmt.where(DeficiencyModel.review_id == review_id)
        if status is not None:
            stmt = stmt.where(DeficiencyModel.status == status)
        stmt = stmt.order_by(_SEVERITY_RANK, DeficiencyModel.due_date.asc().nulls_last())
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def overdue(self, db: AsyncSession, now: datetime) -> list[DeficiencyModel]:
        result = await db.execute(
            select(DeficiencyModel)
            .where(DeficiencyModel.status.in_(_OPEN), DeficiencyModel.due_date < now)
            .order_by(DeficiencyModel.due_date.asc())
        )
        return list(result.scalars().all())

    async def add_reminder(
        self, db: AsyncSession, reminder: DeficiencyReminderModel
    ) -> DeficiencyReminderModel:
        db.add(reminder)
        await db.flush()
        return reminder
