"""COIRepository — concrete implementation of COIRepositoryProtocol."""

import uuid
from datetime import datetime

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_coi.infrastructure.db_models import GeneratedCOIModel
from src.cp_coi.infrastructure.visibility import coi_visibility_clause
from src.cp_common.enums import COIStatus
from src.cp_gateway.user.db_models import UserModel

_EXPIRATION_COLUMNS = (
    GeneratedCOIModel.gl_expiration_date,
    GeneratedCOIModel.umbrella_expiration_date,
    GeneratedCOIModel.auto_expiration_date,
    GeneratedCOIModel.wc_expiration_date,
)


class COIRepository:
    async def get_by_id(self, db: AsyncSession, coi_id: uuid.UUID) -> GeneratedCOIModel | None:
        result = await db.execute(select(GeneratedCOIModel).where(GeneratedCOIModel.id == coi_id))
        return result.scalar_one_or_none()

    async def add(self, db: AsyncSession, coi: GeneratedCOIModel) -> GeneratedCOIModel:
        db.add(coi)
        await db.flush()
        return coi

    async def earliest_active_for_subcontractor(
        self, db: AsyncSession, subcontractor_id: uuid.UUID
    ) -> GeneratedCOIModel | None:
        result = await db.execute(
            select(GeneratedCOIModel)
            .where(
                GeneratedCOIModel.subcontractor_id == subcontractor_id,
                GeneratedCOIModel.status == COIStatus.ACTIVE.value,
            )
            .order_by(GeneratedCOIModel.created_at)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_visible(self, db: AsyncSession, user: UserModel) -> list[GeneratedCOIModel]:
        result = await db.execute(
            select(GeneratedCOIModel)
            .where(coi_visibility_clause(user))
            .order_by(GeneratedCOIModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_expiring(
        self, db: AsyncSession, start: datetime, end: datetime
    ) -> list[GeneratedCOIModel]:
        result = await db.execute(
            select(GeneratedCOIModel)
            .where(
                GeneratedCOIModel.status == COIStatus.ACTIVE.value,
                or_(*(and_(col >= start, col <= end) for col in _EXPIRATION_COLUMNS)),
            )
            .order_by(GeneratedCOIModel.gl_expiration_date.asc().nulls_last())
        )
        return list(result.scalars().all())

    async def list_lapsed(self, db: AsyncSession, before: datetime) -> list[GeneratedCOIModel]:
        result = await db.execute(
            select(GeneratedCOIModel).where(
                GeneratedCOIModel.status == COIStatus.ACTIVE.value,
                or_(*(col < before for col in _EXPIRATION_COLUMNS)),
            )
        )
        return list(result.scalars().all())

    async def list_for_reminders(self, db: AsyncSession) -> list[GeneratedCOIModel]:
        result = await db.execute(
            select(GeneratedCOIModel).where(
                GeneratedCOIModel.status.in_(
                    [COIStatus.ACTIVE.value, COIStatus.AWAITING_ADMIN_REVIEW.value]
                ),
                or_(*(col.is_not(None) for col in _EXPIRATION_COLUMNS)),
            )
        )
        return list(result.scalars().all())
