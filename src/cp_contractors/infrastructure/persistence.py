"""ContractorRepository — concrete implementation of ContractorRepositoryProtocol."""

import uuid

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_coi.infrastructure.db_models import GeneratedCOIModel
from src.cp_contractors.domain.brokers import BROKER_FIELDS
from src.cp_contractors.infrastructure.db_models import ContractorModel


class ContractorRepository:
    async def get_by_id(
        self, db: AsyncSession, contractor_id: uuid.UUID
    ) -> ContractorModel | None:
        result = await db.execute(
            select(ContractorModel).where(ContractorModel.id == contractor_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, db: AsyncSession, email: str) -> ContractorModel | None:
        result = await db.execute(
            select(ContractorModel).where(func.lower(ContractorModel.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def add(self, db: AsyncSession, contractor: ContractorModel) -> ContractorModel:
        db.add(contractor)
        await db.flush()
        return contractor

    async def delete(self, db: AsyncSession, contractor: ContractorModel) -> None:
        await db.delete(contractor)
        await db.flush()

    async def list_contractors(
        self, db: AsyncSession, offset: int, limit: int, status: str | None
    ) -> tuple[list[ContractorModel], int]:
        stmt = select(ContractorModel)
        count_stmt = select(func.count()).select_from(ContractorModel)
        if status:
            stmt = stmt.where(ContractorModel.status == status)
            count_stmt = count_stmt.where(ContractorModel.status == status)
        total = await db.scalar(count_stmt)
        result = await db.execute(
            stmt.order_by(ContractorModel.created_at.desc()).offset(offset).limit(limit)
        )
        return list(result.scalars().all()), int(total or 0)

    async def search(self, db: AsyncSession, query: str, limit: int) -> list[ContractorModel]:
        pattern = f"%{query}%"
        result = await db.execute(
            select(ContractorModel)
            .where(
                or_(
                    ContractorModel.name.ilike(pattern),
                    ContractorModel.company.ilike(pattern),
                    ContractorModel.email.ilike(pattern),
                )
            )
            .order_by(ContractorModel.name)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def search_brokers(self, db: AsyncSession, query: str) -> list[ContractorModel]:
        pattern = f"%{query}%"
        clauses = []
        for name_attr, email_attr, _ in BROKER_FIELDS.values():
            clauses.append(getattr(ContractorModel, name_attr).ilike(pattern))
            clauses.append(getattr(ContractorModel, email_attr).ilike(pattern))
        result = await db.execute(select(ContractorModel).where(or_(*clauses)))
        return list(result.scalars().all())

    async def coi_statuses(
        self, db: AsyncSession, contractor_id: uuid.UUID
    ) -> list[tuple[uuid.UUID, str]]:
        result = await db.execute(
            select(GeneratedCOIModel.id, GeneratedCOIModel.status).where(
                GeneratedCOIModel.subcontractor_id == contractor_id
            )
        )
        return [(row.id, row.status) for row in result.all()]
