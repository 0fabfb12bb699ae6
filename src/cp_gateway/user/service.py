"""Auth service: login, refresh-token rotation, logout, token cleanup.

Login and refresh both return a fresh access JWT plus a new opaque refresh
token. Rotation inserts the new refresh row and deletes the presented one in
the same transaction, so a refresh token is single use.
"""

import logging
from datetime import timedelta

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cp_audit.application.service import AuditService
from src.cp_audit.domain.models import AuditEntry
from src.cp_common.datetime_utils import utc_now
from src.cp_common.enums import AuditAction, AuditResource
from src.cp_common.errors import (
    AccountDisabledError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
)
from src.cp_gateway.auth.jwt_handler import create_access_token
from src.cp_gateway.auth.password import verify_password
from src.cp_gateway.auth.refresh_tokens import (
    issue_refresh_token,
    parse_refresh_token,
    verify_verifier,
)
from src.cp_gateway.session.db_models import SessionModel
from src.cp_gateway.user.db_models import RefreshTokenModel, UserModel

logger = logging.getLogger(__name__)


class AuthService:
    """Stateless service — instantiate once, reuse across requests."""

    def __init__(self, audit: AuditService | None = None) -> None:
        self._audit = audit or AuditService()

    async def login(
        self,
        db: AsyncSession,
        email: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> tuple[UserModel, str, str]:
        """Authenticate and return (user, access_token, refresh_token).

        Unknown email and wrong password both raise InvalidCredentialsError
        so that the endpoint cannot be used to enumerate accounts.
        """
        result = await db.execute(select(UserModel).where(UserModel.email == email.lower()))
        user = result.scalar_one_or_none()

        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt for %s from %s", email, ip_address)
            raise InvalidCredentialsError()

        if not user.is_active:
            logger.warning("Login attempt on disabled account %s", user.id)
            raise AccountDisabledError()

        issued = issue_refresh_token()
        try:
            db.add(
                RefreshTokenModel(
                    user_id=user.id,
                    selector=issued.selector,
                    verifier_hash=issued.verifier_hash,
                    expires_at=issued.expires_at,
                )
            )
            db.add(
                SessionModel(
                    user_id=user.id,
                    ip_address=ip_address,
                    user_agent=user_agent[:255] if user_agent else None,
                    expires_at=utc_now() + timedelta(days=settings.SESSION_EXPIRE_DAYS),
                )
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await self._audit.log(
            AuditEntry(
                action=AuditAction.LOGIN.value,
                resource=AuditResource.USER.value,
                user_id=str(user.id),
                resource_id=str(user.id),
                ip_address=ip_address,
                user_agent=user_agent,
            )
        )
        logger.info("User %s logged in", user.id)
        return user, create_access_token(str(user.id), user.email, user.role), issued.token

    async def refresh(
        self, db: AsyncSession, refresh_token: str
    ) -> tuple[UserModel, str, str]:
        """Rotate a refresh token. Returns (user, access_token, new_refresh_token)."""
        selector, verifier = parse_refresh_token(refresh_token)

        # Row lock serializes concurrent refreshes of the same token.
        result = await db.execute(
            select(RefreshTokenModel)
            .where(RefreshTokenModel.selector == selector)
            .with_for_update()
        )
        stored = result.scalar_one_or_none()
        if stored is None or stored.expires_at <= utc_now():
            raise InvalidRefreshTokenError()
        if not verify_verifier(verifier, stored.verifier_hash):
            logger.warning("Refresh token verifier mismatch for selector %s", selector)
            raise InvalidRefreshTokenError()

        result = await db.execute(select(UserModel).where(UserModel.id == stored.user_id))
        user = result.scalar_one_or_none()
        if user is None:
            raise InvalidRefreshTokenError()
        if not user.is_active:
            raise AccountDisabledError()

        issued = issue_refresh_token()
        try:
            deleted = await db.execute(
                delete(RefreshTokenModel).where(RefreshTokenModel.id == stored.id)
            )
            if deleted.rowcount != 1:
                raise InvalidRefreshTokenError()
            db.add(
                RefreshTokenModel(
                    user_id=user.id,
                    selector=issued.selector,
                    verifier_hash=issued.verifier_hash,
                    expires_at=issued.expires_at,
                )
            )
            await db.commit()
        except InvalidRefreshTokenError:
            await db.rollback()
            logger.warning("Refresh token for selector %s was already used", selector)
            raise
        except Exception:
            await db.rollback()
            logger.error("Refresh token rotation failed for user %s", user.id, exc_info=True)
            raise

        return user, create_access_token(str(user.id), user.email, user.role), issued.token

    async def logout(self, db: AsyncSession, user: UserModel) -> tuple[int, int]:
        """Revoke every refresh token and session of the user."""
        try:
            tokens = await db.execute(
                delete(RefreshTokenModel).where(RefreshTokenModel.user_id == user.id)
            )
            sessions = await db.execute(
                delete(SessionModel).where(SessionModel.user_id == user.id)
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await self._audit.log(
            AuditEntry(
                action=AuditAction.LOGOUT.value,
                resource=AuditResource.USER.value,
                user_id=str(user.id),
                resource_id=str(user.id),
            )
        )
        return tokens.rowcount or 0, sessions.rowcount or 0

    async def cleanup_expired_tokens(self, db: AsyncSession, batch_size: int = 1000) -> int:
        """Delete up to ``batch_size`` expired refresh tokens. Returns the count."""
        result = await db.execute(
            select(RefreshTokenModel.id)
            .where(RefreshTokenModel.expires_at < utc_now())
            .limit(batch_size)
        )
        ids = list(result.scalars().all())
        if not ids:
            return 0
        try:
            await db.execute(delete(RefreshTokenModel).where(RefreshTokenModel.id.in_(ids)))
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return len(ids)
