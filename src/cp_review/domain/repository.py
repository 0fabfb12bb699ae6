"""Repository Protocol — dependency inversion for testability."""

import uuid
from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_review.infrastructure.db_models import COIReviewModel


class ReviewRepositoryProtocol(Protocol):
    async def get_by_id(self, db: AsyncSession, review_id: uuid.UUID) -> COIReviewModel | None: ...

    async def add(self, db: AsyncSession, review: COIReviewModel) -> COIReviewModel: ...

    async def queue(
        self, db: AsyncSession, reviewer_id: uuid.UUID | None, status: str | None
    ) -> list[COIReviewModel]: ...

    async def overdue(self, db: AsyncSession, now: datetime) -> list[COIReviewModel]: ...
