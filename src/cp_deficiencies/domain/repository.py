"""Repository Protocol — dependency inversion for testability."""

import uuid
from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_deficiencies.infrastructure.db_models import (
    DeficiencyModel,
    DeficiencyReminderModel,
)


class DeficiencyRepositoryProtocol(Protocol):
    async def get_by_id(
        self, db: AsyncSession, deficiency_id: uuid.UUID
    ) -> DeficiencyModel | None: ...

    async def add(self, db: AsyncSession, deficiency: DeficiencyModel) -> DeficiencyModel: ...

    async def list_deficiencies(
        self, db: AsyncSession, review_id: uuid.UUID | None, status: str | None
    ) -> list[DeficiencyModel]: ...

    async def overdue(self, db: AsyncSession, now: datetime) -> list[DeficiencyModel]: ...

    async def add_reminder(
        self, db: AsyncSession, reminder: DeficiencyReminderModel
    ) -> DeficiencyReminderModel: ...
