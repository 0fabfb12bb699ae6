"""ReminderService — daily policy expiration reminders.

Each (COI, policy, reminder type) is sent at most once per UTC day. Every
reminder commits on its own so one failure does not undo the others.
"""

import html
import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cp_coi.domain.policies import expiration_dates, policy_broker_email
from src.cp_coi.domain.repository import COIRepositoryProtocol
from src.cp_coi.infrastructure.persistence import COIRepository
from src.cp_common.datetime_utils import days_between, start_of_day, utc_now
from src.cp_common.enums import POLICY_DISPLAY_NAMES, PolicyType
from src.cp_common.errors import ReminderNotFoundError
from src.cp_gateway.user.db_models import UserModel
from src.cp_notifications.application.service import NotificationService
from src.cp_notifications.infrastructure.mailer import Mailer, get_mailer
from src.cp_reminders.application.schemas import (
    ReminderItem,
    ReminderRunResult,
    ReminderStats,
)
from src.cp_reminders.domain.repository import ReminderRepositoryProtocol
from src.cp_reminders.domain.schedule import (
    ReminderSlot,
    classify,
    reminder_recipients,
    reminder_subject,
)
from src.cp_reminders.infrastructure.db_models import ExpirationReminderModel
from src.cp_reminders.infrastructure.persistence import ReminderRepository
from src.cp_users.domain.repository import UserRepositoryProtocol
from src.cp_users.infrastructure.persistence import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PolicyDue:
    """Plain snapshot of one policy on one COI; survives a session rollback."""

    coi_id: uuid.UUID
    policy: PolicyType
    expiration_date: datetime
    slot: ReminderSlot
    recipients: list[str]
    assigned_admin_email: str | None
    subcontractor_name: str | None
    project_name: str | None


def _as_utc_date(value: datetime) -> date:
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(timezone.utc).date()


def reminder_body(due: PolicyDue) -> str:
    name = POLICY_DISPLAY_NAMES[due.policy]
    days = due.slot.days_before_expiry
    if days > 0:
        when = f"expires in {days} days"
    elif days == 0:
        when = "expires today"
    else:
        when = f"expired {abs(days)} days ago"
    return (
        f"<h2>{html.escape(name)} Policy Expiration Notice</h2>"
        f"<p>The {html.escape(name)} policy for "
        f"{html.escape(due.subcontractor_name or 'the subcontractor')} on "
        f"{html.escape(due.project_name or 'the project')} {when} "
        f"({_as_utc_date(due.expiration_date).isoformat()}).</p>"
        "<p>Please upload a renewed policy as soon as possible.</p>"
        f'<p><a href="{settings.FRONTEND_URL}/coi/{due.coi_id}">View certificate</a></p>'
    )


class ReminderService:
    def __init__(
        self,
        repo: ReminderRepositoryProtocol | None = None,
        coi_repo: COIRepositoryProtocol | None = None,
        user_repo: UserRepositoryProtocol | None = None,
        notifications: NotificationService | None = None,
        mailer: Mailer | None = None,
    ) -> None:
        self._repo: ReminderRepositoryProtocol = repo or ReminderRepository()
        self._cois: COIRepositoryProtocol = coi_repo or COIRepository()
        self._users: UserRepositoryProtocol = user_repo or UserRepository()
        self._notifications = notifications or NotificationService(user_repo=self._users)
        self._mailer = mailer

    @property
    def mailer(self) -> Mailer:
        return self._mailer or get_mailer()

    async def check_expiring_policies(self, db: AsyncSession, today: date) -> ReminderRunResult:
        cois = await self._cois.list_for_reminders(db)
        due_list: list[PolicyDue] = []
        for coi in cois:
            for policy, expires in expiration_dates(coi):
                slot = classify(days_between(today, _as_utc_date(expires)))
                if slot is None:
                    continue
                due_list.append(
                    PolicyDue(
                        coi_id=coi.id,
                        policy=policy,
                        expiration_date=expires,
                        slot=slot,
                        recipients=reminder_recipients(
                            policy_broker_email(coi, policy),
                            coi.broker_email,
                            coi.assigned_admin_email,
                            settings.ADMIN_EMAIL,
                        ),
                        assigned_admin_email=coi.assigned_admin_email,
                        subcontractor_name=coi.subcontractor_name,
                        project_name=coi.project_name,
                    )
                )

        day_start = start_of_day(today)
        day_end = day_start + timedelta(days=1)
        sent = 0
        for due in due_list:
            try:
                if await self._send_one(db, due, day_start, day_end):
                    sent += 1
            except Exception:
                await db.rollback()
                logger.error(
                    "Reminder for COI %s %s failed", due.coi_id, due.policy.value, exc_info=True
                )

        logger.info("Expiration check: %d COIs checked, %d reminders sent", len(cois), sent)
        return ReminderRunResult(cois_checked=len(cois), reminders_sent=sent)

    async def _send_one(
        self, db: AsyncSession, due: PolicyDue, day_start: datetime, day_end: datetime
    ) -> bool:
        reminder_type = due.slot.reminder_type.value
        if await self._repo.sent_between(
            db, due.coi_id, due.policy.value, reminder_type, day_start, day_end
        ):
            return False

        subject = reminder_subject(due.slot, due.policy)
        body = reminder_body(due)
        delivered: list[str] = []
        for email in due.recipients:
            if await self.mailer.send(email, subject, body):
                delivered.append(email)
        if not delivered:
            logger.warning("No recipient accepted reminder %s for COI %s", subject, due.coi_id)
            return False

        await self._repo.add(
            db,
            ExpirationReminderModel(
                coi_id=due.coi_id,
                policy_type=due.policy.value,
                expiration_date=due.expiration_date,
                days_before_expiry=due.slot.days_before_expiry,
                reminder_type=reminder_type,
                sent_to=delivered,
                email_subject=subject,
                email_body=body,
                acknowledged=False,
            ),
        )
        if due.assigned_admin_email and due.slot.days_before_expiry > 0:
            admin = await self._users.get_by_email(db, due.assigned_admin_email)
            if admin is not None:
                await self._notifications.notify_coi_expiring(
                    db, admin.id, due.coi_id, due.slot.days_before_expiry
                )
        await db.commit()
        return True

    async def history(self, db: AsyncSession, coi_id: uuid.UUID) -> list[ReminderItem]:
        rows = await self._repo.list_for_coi(db, coi_id)
        return [ReminderItem.model_validate(r) for r in rows]

    async def pending(self, db: AsyncSession) -> list[ReminderItem]:
        rows = await self._repo.list_pending(db)
        return [ReminderItem.model_validate(r) for r in rows]

    async def acknowledge(
        self, db: AsyncSession, actor: UserModel, reminder_id: uuid.UUID
    ) -> ReminderItem:
        reminder = await self._repo.get_by_id(db, reminder_id)
        if reminder is None:
            raise ReminderNotFoundError(str(reminder_id))
        try:
            reminder.acknowledged = True
            reminder.acknowledged_at = utc_now()
            reminder.acknowledged_by = actor.email
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return ReminderItem.model_validate(reminder)

    async def stats(self, db: AsyncSession) -> ReminderStats:
        by_type = await self._repo.count_by_type(db)
        total = sum(by_type.values())
        acknowledged = await self._repo.count_acknowledged(db)
        return ReminderStats(
            total=total,
            acknowledged=acknowledged,
            pending=total - acknowledged,
            by_type=by_type,
        )
