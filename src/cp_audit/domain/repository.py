"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_audit.domain.models import AuditFilter
from src.cp_audit.infrastructure.db_models import AuditLogModel


class AuditRepositoryProtocol(Protocol):
    async def add(self, db: AsyncSession, log: AuditLogModel) -> None: ...

    async def list_logs(
        self, db: AsyncSession, filters: AuditFilter, skip: int, take: int
    ) -> tuple[list[AuditLogModel], int]: ...

    async def list_for_resource(
        self, db: AsyncSession, resource: str, resource_id: str
    ) -> list[AuditLogModel]: ...
