"""AuditRepository — concrete implementation of AuditRepositoryProtocol."""

import uuid

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_audit.domain.models import AuditFilter
from src.cp_audit.infrastructure.db_models import AuditLogModel


def _apply_filters(stmt: Select, filters: AuditFilter) -> Select:
    if filters.user_id:
        stmt = stmt.where(AuditLogModel.user_id == uuid.UUID(filters.user_id))
    if filters.action:
        stmt = stmt.where(AuditLogModel.action == filters.action)
    if filters.resource:
        stmt = stmt.where(AuditLogModel.resource == filters.resource)
    if filters.resource_id:
        stmt = stmt.where(AuditLogModel.resource_id == filters.resource_id)
    if filters.start_date:
        stmt = stmt.where(AuditLogModel.timestamp >= filters.start_date)
    if filters.end_date:
        stmt = stmt.where(AuditLogModel.timestamp <= filters.end_date)
    return stmt


class AuditRepository:
    async def add(self, db: AsyncSession, log: AuditLogModel) -> None:
        db.add(log)
        await db.flush()

    async def list_logs(
        self, db: AsyncSession, filters: AuditFilter, skip: int, take: int
    ) -> tuple[list[AuditLogModel], int]:
        stmt = _apply_filters(select(AuditLogModel), filters)
        total = await db.scalar(
            _apply_filters(select(func.count()).select_from(AuditLogModel), filters)
        )
        result = await db.execute(
            stmt.order_by(AuditLogModel.timestamp.desc()).offset(skip).limit(take)
        )
        return list(result.scalars().all()), int(total or 0)

    async def list_for_resource(
        self, db: AsyncSession, resource: str, resource_id: str
    ) -> list[AuditLogModel]:
        result = await db.execute(
            select(AuditLogModel)
            .where(AuditLogModel.resource == resource, AuditLogModel.resource_id == resource_id)
            .order_by(AuditLogModel.timestamp.desc())
        )
        return list(result.scalars().all())
