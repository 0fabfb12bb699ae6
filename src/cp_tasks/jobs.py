"""Daily jobs: refresh-token cleanup and COI expiration + reminders."""

import asyncio
import logging

from config.settings import settings
from src.cp_coi.application.service import COIService
from src.cp_common.database import async_session_factory
from src.cp_common.datetime_utils import utc_today
from src.cp_gateway.user.service import AuthService
from src.cp_reminders.application.service import ReminderService
from src.cp_tasks.scheduler import Scheduler

logger = logging.getLogger(__name__)

CLEANUP_PAUSE_SECONDS = 1.0


async def cleanup_refresh_tokens(
    auth: AuthService | None = None,
    batch_size: int | None = None,
    pause: float = CLEANUP_PAUSE_SECONDS,
) -> int:
    """Delete expired refresh tokens in batches until a batch comes back short."""
    auth = auth or AuthService()
    batch_size = batch_size or settings.TOKEN_CLEANUP_BATCH_SIZE
    total = 0
    while True:
        async with async_session_factory() as db:
            deleted = await auth.cleanup_expired_tokens(db, batch_size)
        total += deleted
        if deleted < batch_size:
            break
        await asyncio.sleep(pause)
    logger.info("Removed %d expired refresh tokens", total)
    return total


async def expire_and_remind(
    cois: COIService | None = None,
    reminders: ReminderService | None = None,
) -> None:
    cois = cois or COIService()
    reminders = reminders or ReminderService()
    today = utc_today()
    async with async_session_factory() as db:
        expired = await cois.expire_lapsed_cois(db, today)
    async with async_session_factory() as db:
        result = await reminders.check_expiring_policies(db, today)
    logger.info(
        "Daily expiration run: %d expired, %d reminders sent",
        expired,
        result.reminders_sent,
    )


def build_scheduler() -> Scheduler:
    scheduler = Scheduler()
    scheduler.add_daily(
        "refresh-token-cleanup", settings.TOKEN_CLEANUP_HOUR_UTC, cleanup_refresh_tokens
    )
    scheduler.add_daily("coi-expiration", settings.REMINDER_HOUR_UTC, expire_and_remind)
    return scheduler
