"""DeficiencyService — deficiencies raised during a COI review."""

import html
import logging
import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cp_common.datetime_utils import utc_now
from src.cp_common.enums import DeficiencyStatus
from src.cp_common.errors import DeficiencyNotFoundError, ReviewNotFoundError
from src.cp_deficiencies.application.schemas import (
    DeficiencyCreate,
    DeficiencyItem,
    DeficiencyReminderItem,
    ResolveDeficiencyRequest,
)
from src.cp_deficiencies.domain.repository import DeficiencyRepositoryProtocol
from src.cp_deficiencies.domain.templates import TEMPLATES
from src.cp_deficiencies.infrastructure.db_models import (
    DeficiencyModel,
    DeficiencyReminderModel,
)
from src.cp_deficiencies.infrastructure.persistence import DeficiencyRepository
from src.cp_gateway.user.db_models import UserModel
from src.cp_notifications.application.service import NotificationService
from src.cp_notifications.infrastructure.mailer import Mailer, get_mailer
from src.cp_review.domain.repository import ReviewRepositoryProtocol
from src.cp_review.infrastructure.persistence import ReviewRepository
from src.cp_users.domain.repository import UserRepositoryProtocol
from src.cp_users.infrastructure.persistence import UserRepository

logger = logging.getLogger(__name__)


class DeficiencyService:
    def __init__(
        self,
        repo: DeficiencyRepositoryProtocol | None = None,
        review_repo: ReviewRepositoryProtocol | None = None,
        user_repo: UserRepositoryProtocol | None = None,
        notifications: NotificationService | None = None,
        mailer: Mailer | None = None,
    ) -> None:
        self._repo: DeficiencyRepositoryProtocol = repo or DeficiencyRepository()
        self._reviews: ReviewRepositoryProtocol = review_repo or ReviewRepository()
        self._users: UserRepositoryProtocol = user_repo or UserRepository()
        self._notifications = notifications or NotificationService(user_repo=self._users)
        self._mailer = mailer

    @property
    def mailer(self) -> Mailer:
        return self._mailer or get_mailer()

    @staticmethod
    def templates() -> list[dict[str, Any]]:
        return [t.as_dict() for t in TEMPLATES]

    async def create(self, db: AsyncSession, body: DeficiencyCreate) -> DeficiencyItem:
        review = await self._reviews.get_by_id(db, body.review_id)
        if review is None:
            raise ReviewNotFoundError(str(body.review_id))
        try:
            deficiency = await self._repo.add(
                db,
                DeficiencyModel(
                    review_id=review.id,
                    category=body.category.value,
                    severity=body.severity.value,
                    description=body.description,
                    required_action=body.required_action,
                    due_date=body.due_date,
                    status=DeficiencyStatus.OPEN.value,
                ),
            )
            await self._notifications.notify_deficiency_created(
                db, review.submitted_by, review.id, body.description
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Deficiency %s created on review %s", deficiency.id, review.id)
        return DeficiencyItem.model_validate(deficiency)

    async def resolve(
        self,
        db: AsyncSession,
        actor: UserModel,
        deficiency_id: uuid.UUID,
        body: ResolveDeficiencyRequest,
    ) -> DeficiencyItem:
        deficiency = await self._get(db, deficiency_id)
        try:
            deficiency.status = DeficiencyStatus.RESOLVED.value
            deficiency.resolved_by = actor.id
            deficiency.resolved_at = utc_now()
            deficiency.resolution_notes = body.resolution_notes
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return DeficiencyItem.model_validate(deficiency)

    async def list_deficiencies(
        self,
        db: AsyncSession,
        review_id: uuid.UUID | None = None,
        status: str | None = None,
    ) -> list[DeficiencyItem]:
        rows = await self._repo.list_deficiencies(db, review_id, status)
        return [DeficiencyItem.model_validate(r) for r in rows]

    async def overdue(self, db: AsyncSession) -> list[DeficiencyItem]:
        rows = await self._repo.overdue(db, utc_now())
        return [DeficiencyItem.model_validate(r) for r in rows]

    async def send_reminder(
        self, db: AsyncSession, deficiency_id: uuid.UUID, user_id: uuid.UUID
    ) -> DeficiencyReminderItem:
        deficiency = await self._get(db, deficiency_id)
        try:
            reminder = await self._repo.add_reminder(
                db, DeficiencyReminderModel(deficiency_id=deficiency.id, sent_to=user_id)
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        emailed = False
        user = await self._users.get_by_id(db, user_id)
        if user is not None:
            body = (
                "<h2>Deficiency Reminder</h2>"
                f"<p>{html.escape(deficiency.description)}</p>"
                f"<p>Required action: {html.escape(deficiency.required_action)}</p>"
                f'<p><a href="{settings.FRONTEND_URL}/coi-review/{deficiency.review_id}">'
                "View review</a></p>"
            )
            try:
                emailed = await self.mailer.send(user.email, "Reminder: Open Deficiency", body)
            except Exception:
                logger.warning("Deficiency reminder email to %s failed", user_id, exc_info=True)
        item = DeficiencyReminderItem.model_validate(reminder)
        item.emailed = emailed
        return item

    async def _get(self, db: AsyncSession, deficiency_id: uuid.UUID) -> DeficiencyModel:
        deficiency = await self._repo.get_by_id(db, deficiency_id)
        if deficiency is None:
            raise DeficiencyNotFoundError(str(deficiency_id))
        return deficiency
