"""Repository Protocol — dependency inversion for testability."""

import uuid
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_contractors.infrastructure.db_models import ContractorModel


class ContractorRepositoryProtocol(Protocol):
    async def get_by_id(
        self, db: AsyncSession, contractor_id: uuid.UUID
    ) -> ContractorModel | None: ...

    async def get_by_email(self, db: AsyncSession, email: str) -> ContractorModel | None: ...

    async def add(self, db: AsyncSession, contractor: ContractorModel) -> ContractorModel: ...

    async def delete(self, db: AsyncSession, contractor: ContractorModel) -> None: ...

    async def list_contractors(
        self, db: AsyncSession, offset: int, limit: int, status: str | None
    ) -> tuple[list[ContractorModel], int]: ...

    async def search(self, db: AsyncSession, query: str, limit: int) -> list[ContractorModel]: ...

    async def search_brokers(self, db: AsyncSession, query: str) -> list[ContractorModel]: ...

    async def coi_statuses(
        self, db: AsyncSession, contractor_id: uuid.UUID
    ) -> list[tuple[uuid.UUID, str]]: ...
