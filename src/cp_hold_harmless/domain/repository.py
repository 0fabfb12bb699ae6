"""Repository Protocol — dependency inversion for testability."""

import uuid
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_hold_harmless.infrastructure.db_models import HoldHarmlessModel


class HoldHarmlessRepositoryProtocol(Protocol):
    async def get_by_id(
        self, db: AsyncSession, agreement_id: uuid.UUID
    ) -> HoldHarmlessModel | None: ...

    async def get_by_coi(self, db: AsyncSession, coi_id: uuid.UUID) -> HoldHarmlessModel | None: ...

    async def get_by_token(self, db: AsyncSession, token: str) -> HoldHarmlessModel | None: ...

    async def add(self, db: AsyncSession, agreement: HoldHarmlessModel) -> HoldHarmlessModel: ...

    async def list_agreements(
        self, db: AsyncSession, statuses: list[str] | None
    ) -> list[HoldHarmlessModel]: ...

    async def count_by_status(self, db: AsyncSession) -> dict[str, int]: ...
