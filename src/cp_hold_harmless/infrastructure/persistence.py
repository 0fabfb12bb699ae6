"""HoldHarmlessRepository — concrete implementation of HoldHarmlessRepositoryProtocol."""

import uuid

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_hold_harmless.infrastructure.db_models import HoldHarmlessModel


class HoldHarmlessRepository:
    async def get_by_id(
        self, db: AsyncSession, agreement_id: uuid.UUID
    ) -> HoldHarmlessModel | None:
        result = await db.execute(
            select(HoldHarmlessModel).where(HoldHarmlessModel.id == agreement_id)
        )
        return result.scalar_one_or_none()

    async def get_by_coi(self, db: AsyncSession, coi_id: uuid.UUID) -> HoldHarmlessModel | None:
        result = await db.execute(
            select(HoldHarmlessModel).where(HoldHarmlessModel.coi_id == coi_id)
        )
        return result.scalar_one_or_none()

    async def get_by_token(self, db: AsyncSession, token: str) -> HoldHarmlessModel | None:
        result = await db.execute(
            select(HoldHarmlessModel).where(
                or_(
                    HoldHarmlessModel.sub_signature_token == token,
                    HoldHarmlessModel.gc_signature_token == token,
                )
            )
        )
        return result.scalar_one_or_none()

    async def add(self, db: AsyncSession, agreement: HoldHarmlessModel) -> HoldHarmlessModel:
        db.add(agreement)
        await db.flush()
        return agreement

    async def list_agreements(
        self, db: AsyncSession, statuses: list[str] | None
    ) -> list[HoldHarmlessModel]:
        stmt = select(HoldHarmlessModel)
        if statuses:
            stmt = stmt.where(HoldHarmlessModel.status.in_(statuses))
        result = await db.execute(stmt.order_by(HoldHarmlessModel.generated_at.desc()))
        return list(result.scalars().all())

    async def count_by_status(self, db: AsyncSession) -> dict[str, int]:
        result = await db.execute(
            select(HoldHarmlessModel.status, func.count()).group_by(HoldHarmlessModel.status)
        )
        return {status: int(count) for status, count in result.all()}
