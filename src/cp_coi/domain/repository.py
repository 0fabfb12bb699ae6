"""Repository Protocol — dependency inversion for testability."""

import uuid
from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_coi.infrastructure.db_models import GeneratedCOIModel
from src.cp_gateway.user.db_models import UserModel


class COIRepositoryProtocol(Protocol):
    async def get_by_id(self, db: AsyncSession, coi_id: uuid.UUID) -> GeneratedCOIModel | None: ...

    async def add(self, db: AsyncSession, coi: GeneratedCOIModel) -> GeneratedCOIModel: ...

    async def earliest_active_for_subcontractor(
        self, db: AsyncSession, subcontractor_id: uuid.UUID
    ) -> GeneratedCOIModel | None: ...

    async def list_visible(self, db: AsyncSession, user: UserModel) -> list[GeneratedCOIModel]: ...

    async def list_expiring(
        self, db: AsyncSession, start: datetime, end: datetime
    ) -> list[GeneratedCOIModel]: ...

    async def list_lapsed(self, db: AsyncSession, before: datetime) -> list[GeneratedCOIModel]: ...

    async def list_for_reminders(self, db: AsyncSession) -> list[GeneratedCOIModel]: ...
