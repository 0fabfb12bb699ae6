"""ReviewService — COI review queue.

PENDING -> IN_REVIEW on assignment; the assigned reviewer's decision closes
the review (CONDITIONAL_APPROVAL is stored as REQUIRES_CHANGES).
"""

import html
import logging
import uuid
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cp_common.datetime_utils import utc_now
from src.cp_common.enums import ReviewDecision, ReviewStatus
from src.cp_common.errors import (
    ContractorNotFoundError,
    NotAssignedReviewerError,
    ReviewNotFoundError,
    ReviewNotPendingError,
    UserNotFoundError,
)
from src.cp_contractors.domain.repository import ContractorRepositoryProtocol
from src.cp_contractors.infrastructure.persistence import ContractorRepository
from src.cp_deficiencies.application.schemas import DeficiencyItem
from src.cp_deficiencies.domain.repository import DeficiencyRepositoryProtocol
from src.cp_deficiencies.infrastructure.persistence import DeficiencyRepository
from src.cp_gateway.user.db_models import UserModel
from src.cp_notifications.application.service import NotificationService
from src.cp_notifications.infrastructure.mailer import Mailer, get_mailer
from src.cp_review.application.schemas import (
    ReviewDecisionRequest,
    ReviewDetail,
    ReviewItem,
    SubmitReviewRequest,
)
from src.cp_review.domain.repository import ReviewRepositoryProtocol
from src.cp_review.infrastructure.db_models import COIReviewModel
from src.cp_review.infrastructure.persistence import ReviewRepository
from src.cp_users.domain.repository import UserRepositoryProtocol
from src.cp_users.infrastructure.persistence import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_REVIEW_DAYS = 3

_DECISION_STATUS = {
    ReviewDecision.APPROVED: ReviewStatus.APPROVED,
    ReviewDecision.REJECTED: ReviewStatus.REJECTED,
    ReviewDecision.CONDITIONAL_APPROVAL: ReviewStatus.REQUIRES_CHANGES,
}


def status_for_decision(decision: ReviewDecision) -> ReviewStatus:
    return _DECISION_STATUS[decision]


class ReviewService:
    def __init__(
        self,
        repo: ReviewRepositoryProtocol | None = None,
        deficiency_repo: DeficiencyRepositoryProtocol | None = None,
        contractor_repo: ContractorRepositoryProtocol | None = None,
        user_repo: UserRepositoryProtocol | None = None,
        notifications: NotificationService | None = None,
        mailer: Mailer | None = None,
    ) -> None:
        self._repo: ReviewRepositoryProtocol = repo or ReviewRepository()
        self._deficiencies: DeficiencyRepositoryProtocol = deficiency_repo or DeficiencyRepository()
        self._contractors: ContractorRepositoryProtocol = contractor_repo or ContractorRepository()
        self._users: UserRepositoryProtocol = user_repo or UserRepository()
        self._notifications = notifications or NotificationService(user_repo=self._users)
        self._mailer = mailer

    @property
    def mailer(self) -> Mailer:
        return self._mailer or get_mailer()

    async def submit(
        self, db: AsyncSession, actor: UserModel, body: SubmitReviewRequest
    ) -> ReviewItem:
        if await self._contractors.get_by_id(db, body.contractor_id) is None:
            raise ContractorNotFoundError(str(body.contractor_id))
        try:
            review = await self._repo.add(
                db,
                COIReviewModel(
                    contractor_id=body.contractor_id,
                    document_id=body.document_id,
                    submitted_by=actor.id,
                    status=ReviewStatus.PENDING.value,
                    priority=body.priority.value,
                    due_date=body.due_date or utc_now() + timedelta(days=DEFAULT_REVIEW_DAYS),
                ),
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("COI review %s submitted by %s", review.id, actor.id)
        return ReviewItem.model_validate(review)

    async def assign(
        self, db: AsyncSession, review_id: uuid.UUID, reviewer_id: uuid.UUID
    ) -> ReviewItem:
        review = await self._get(db, review_id)
        if review.status != ReviewStatus.PENDING.value:
            raise ReviewNotPendingError(review.status)
        if await self._users.get_by_id(db, reviewer_id) is None:
            raise UserNotFoundError(str(reviewer_id))
        try:
            review.assigned_to = reviewer_id
            review.status = ReviewStatus.IN_REVIEW.value
            await self._notifications.notify_review_assigned(db, reviewer_id, review.id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return ReviewItem.model_validate(review)

    async def decide(
        self,
        db: AsyncSession,
        actor: UserModel,
        review_id: uuid.UUID,
        body: ReviewDecisionRequest,
    ) -> ReviewItem:
        review = await self._get(db, review_id)
        if review.assigned_to != actor.id:
            raise NotAssignedReviewerError()
        try:
            review.decision = body.decision.value
            review.status = status_for_decision(body.decision).value
            review.notes = body.notes
            review.reviewed_at = utc_now()
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("COI review %s decided: %s", review.id, review.decision)
        await self._email_submitter(db, review)
        return ReviewItem.model_validate(review)

    async def _email_submitter(self, db: AsyncSession, review: COIReviewModel) -> None:
        try:
            submitter = await self._users.get_by_id(db, review.submitted_by)
            if submitter is None:
                return
            body = (
                "<h2>COI Review Completed</h2>"
                f"<p>Decision: {html.escape(review.decision or '')}</p>"
                f"<p>{html.escape(review.notes or '')}</p>"
                f'<p><a href="{settings.FRONTEND_URL}/coi-review/{review.id}">View review</a></p>'
            )
            await self.mailer.send(submitter.email, "COI Review Completed", body)
        except Exception:
            logger.warning("Review decision email for %s failed", review.id, exc_info=True)

    async def queue(
        self,
        db: AsyncSession,
        reviewer_id: uuid.UUID | None = None,
        status: str | None = None,
    ) -> list[ReviewItem]:
        rows = await self._repo.queue(db, reviewer_id, status)
        return [ReviewItem.model_validate(r) for r in rows]

    async def overdue(self, db: AsyncSession) -> list[ReviewItem]:
        rows = await self._repo.overdue(db, utc_now())
        return [ReviewItem.model_validate(r) for r in rows]

    async def get(self, db: AsyncSession, review_id: uuid.UUID) -> ReviewDetail:
        review = await self._get(db, review_id)
        deficiencies = await self._deficiencies.list_deficiencies(db, review.id, None)
        detail = ReviewDetail.model_validate(review)
        detail.deficiencies = [DeficiencyItem.model_validate(d) for d in deficiencies]
        return detail

    async def _get(self, db: AsyncSession, review_id: uuid.UUID) -> COIReviewModel:
        review = await self._repo.get_by_id(db, review_id)
        if review is None:
            raise ReviewNotFoundError(str(review_id))
        return review
