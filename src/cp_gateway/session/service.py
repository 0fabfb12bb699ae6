"""Login session queries and revocation, always scoped to the owner."""

import logging
import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.datetime_utils import utc_now
from src.cp_common.errors import SessionNotFoundError
from src.cp_gateway.session.db_models import SessionModel
from src.cp_gateway.user.db_models import UserModel

logger = logging.getLogger(__name__)


class SessionService:
    async def list_sessions(self, db: AsyncSession, user: UserModel) -> list[SessionModel]:
        result = await db.execute(
            select(SessionModel)
            .where(SessionModel.user_id == user.id, SessionModel.expires_at > utc_now())
            .order_by(SessionModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def revoke(self, db: AsyncSession, user: UserModel, session_id: uuid.UUID) -> None:
        result = await db.execute(
            select(SessionModel).where(
                SessionModel.id == session_id,
                SessionModel.user_id == user.id,
                SessionModel.expires_at > utc_now(),
            )
        )
        session = result.scalar_one_or_none()
        if session is None:
            raise SessionNotFoundError(str(session_id))
        try:
            await db.delete(session)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Session %s revoked by user %s", session_id, user.id)

    async def revoke_all(self, db: AsyncSession, user: UserModel) -> int:
        try:
            result = await db.execute(delete(SessionModel).where(SessionModel.user_id == user.id))
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return result.rowcount or 0
