"""NotificationService — in-app notifications with a best-effort email copy.

``create_notification`` and the ``notify_*`` helpers run inside the caller's
transaction (flush only); the caller commits. The user-facing read/delete
operations commit on their own.
"""

import html
import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cp_common.datetime_utils import utc_now
from src.cp_common.enums import NotificationType
from src.cp_common.errors import NotificationNotFoundError
from src.cp_notifications.application.schemas import NotificationItem
from src.cp_notifications.domain.repository import NotificationRepositoryProtocol
from src.cp_notifications.infrastructure.db_models import NotificationModel
from src.cp_notifications.infrastructure.mailer import Mailer, get_mailer
from src.cp_notifications.infrastructure.persistence import NotificationRepository
from src.cp_users.domain.repository import UserRepositoryProtocol
from src.cp_users.infrastructure.persistence import UserRepository

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(
        self,
        repo: NotificationRepositoryProtocol | None = None,
        user_repo: UserRepositoryProtocol | None = None,
        mailer: Mailer | None = None,
    ) -> None:
        self._repo: NotificationRepositoryProtocol = repo or NotificationRepository()
        self._users: UserRepositoryProtocol = user_repo or UserRepository()
        self._mailer = mailer

    @property
    def mailer(self) -> Mailer:
        return self._mailer or get_mailer()

    async def create_notification(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        notification_type: NotificationType,
        title: str,
        message: str,
        link: str | None = None,
    ) -> NotificationModel:
        notification = await self._repo.add(
            db,
            NotificationModel(
                user_id=user_id,
                type=notification_type.value,
                title=title,
                message=message,
                link=link,
                read=False,
            ),
        )
        await self._email_copy(db, user_id, title, message, link)
        return notification

    async def _email_copy(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        title: str,
        message: str,
        link: str | None,
    ) -> None:
        try:
            user = await self._users.get_by_id(db, user_id)
            if user is None:
                return
            body = f"<h2>{html.escape(title)}</h2><p>{html.escape(message)}</p>"
            if link:
                body += f'<p><a href="{settings.FRONTEND_URL}{link}">View details</a></p>'
            await self.mailer.send(user.email, title, body)
        except Exception:
            logger.warning("Notification email to user %s failed", user_id, exc_info=True)

    async def notify_coi_expiring(
        self, db: AsyncSession, user_id: uuid.UUID, coi_id: uuid.UUID, days: int
    ) -> NotificationModel:
        return await self.create_notification(
            db,
            user_id,
            NotificationType.COI_EXPIRING,
            "COI Expiring Soon",
            f"A certificate of insurance expires in {days} days.",
            f"/coi/{coi_id}",
        )

    async def notify_review_assigned(
        self, db: AsyncSession, reviewer_id: uuid.UUID, review_id: uuid.UUID
    ) -> NotificationModel:
        return await self.create_notification(
            db,
            reviewer_id,
            NotificationType.REVIEW_ASSIGNED,
            "New COI Review Assigned",
            "A certificate of insurance has been assigned to you for review.",
            f"/coi-review/{review_id}",
        )

    async def notify_deficiency_created(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        review_id: uuid.UUID,
        description: str,
    ) -> NotificationModel:
        return await self.create_notification(
            db,
            user_id,
            NotificationType.DEFICIENCY_CREATED,
            "Deficiency Reported",
            f"A deficiency was reported on your submission: {description}",
            f"/coi-review/{review_id}",
        )

    async def notify_approval_required(
        self, db: AsyncSession, user_id: uuid.UUID, coi_id: uuid.UUID
    ) -> NotificationModel:
        return await self.create_notification(
            db,
            user_id,
            NotificationType.APPROVAL_REQUIRED,
            "Approval Required",
            "A certificate of insurance is waiting for your approval.",
            f"/coi/{coi_id}",
        )

    async def list_notifications(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        notification_type: str | None = None,
        read: bool | None = None,
    ) -> list[NotificationItem]:
        rows = await self._repo.list_for_user(db, user_id, notification_type, read)
        return [NotificationItem.model_validate(r) for r in rows]

    async def unread_count(self, db: AsyncSession, user_id: uuid.UUID) -> int:
        return await self._repo.count_unread(db, user_id)

    async def mark_read(
        self, db: AsyncSession, user_id: uuid.UUID, notification_id: uuid.UUID
    ) -> NotificationItem:
        notification = await self._repo.get_for_user(db, notification_id, user_id)
        if notification is None:
            raise NotificationNotFoundError(str(notification_id))
        if not notification.read:
            try:
                notification.read = True
                notification.read_at = utc_now()
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        return NotificationItem.model_validate(notification)

    async def mark_all_read(self, db: AsyncSession, user_id: uuid.UUID) -> int:
        try:
            count = await self._repo.mark_all_read(db, user_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return count

    async def delete(
        self, db: AsyncSession, user_id: uuid.UUID, notification_id: uuid.UUID
    ) -> None:
        notification = await self._repo.get_for_user(db, notification_id, user_id)
        if notification is None:
            raise NotificationNotFoundError(str(notification_id))
        try:
            await self._repo.delete(db, notification)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
