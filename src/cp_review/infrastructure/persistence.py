"""ReviewRepository — concrete implementation of ReviewRepositoryProtocol."""

import uuid
from datetime import datetime

from sqlalchemy import case, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.enums import ReviewPriority, ReviewStatus
from src.cp_review.infrastructure.db_models import COIReviewModel

# URGENT first
_PRIORITY_RANK = case(
    {p.value: rank for rank, p in enumerate(
        (ReviewPriority.URGENT, ReviewPriority.HIGH, ReviewPriority.NORMAL, ReviewPriority.LOW)
    )},
    value=COIReviewModel.priority,
    else_=99,
)

OPEN_STATUSES = (ReviewStatus.PENDING.value, ReviewStatus.IN_REVIEW.value)


class ReviewRepository:
    async def get_by_id(self, db: AsyncSession, review_id: uuid.UUID) -> COIReviewModel | None:
        result = await db.execute(select(COIReviewModel).where(COIReviewModel.id == review_id))
        return result.scalar_one_or_none()

    async def add(self, db: AsyncSession, review: COIReviewModel) -> COIReviewModel:
        db.add(review)
        await db.flush()
        return review

    async def queue(
        self, db: AsyncSession, reviewer_id: uuid.UUID | None, status: str | None
    ) -> list[COIReviewModel]:
        stmt = select(COIReviewModel)
        if reviewer_id is not None:
            stmt = stmt.where(COIReviewModel.assigned_to == reviewer_id)
        if status is not None:
            stmt = stmt.where(COIReviewModel.status == status)
        stmt = stmt.order_by(_PRIORITY_RANK, COIReviewModel.due_date.asc())
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def overdue(self, db: AsyncSession, now: datetime) -> list[COIReviewModel]:
        result = await db.execute(
            select(COIReviewModel)
            .where(
                COIReviewModel.status.in_(OPEN_STATUSES),
                COIReviewModel.due_date < now,
            )
            .order_by(COIReviewModel.due_date.asc())
        )
        return list(result.scalars().all())
