"""AuditService — append-only audit trail.

Writes go through their own session so that a failing audit insert can never
roll back or fail the business request that triggered it.
"""

import logging
import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.cp_audit.application.schemas import AuditListResponse, AuditLogItem
from src.cp_audit.domain.models import AuditEntry, AuditFilter
from src.cp_audit.domain.repository import AuditRepositoryProtocol
from src.cp_audit.infrastructure.db_models import AuditLogModel
from src.cp_audit.infrastructure.persistence import AuditRepository
from src.cp_common.database import async_session_factory

logger = logging.getLogger(__name__)

SENSITIVE_KEYS = frozenset(
    {"password", "token", "secret", "apikey", "api_key", "authorization", "refresh_token"}
)
REDACTED = "[REDACTED]"
USER_AGENT_MAX_LEN = 200
MAX_TAKE = 200


def redact(metadata: dict[str, Any] | None) -> dict[str, Any]:
    """Replace values of sensitive keys (case-insensitive), recursing into dicts."""
    if not metadata:
        return {}
    cleaned: dict[str, Any] = {}
    for key, value in metadata.items():
        if key.lower() in SENSITIVE_KEYS:
            cleaned[key] = REDACTED
        elif isinstance(value, dict):
            cleaned[key] = redact(value)
        else:
            cleaned[key] = value
    return cleaned


class AuditService:
    def __init__(
        self,
        repo: AuditRepositoryProtocol | None = None,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        self._repo: AuditRepositoryProtocol = repo or AuditRepository()
        self._session_factory = session_factory or async_session_factory

    async def log(self, entry: AuditEntry) -> None:
        metadata = redact(entry.metadata)
        user_agent = entry.user_agent[:USER_AGENT_MAX_LEN] if entry.user_agent else None
        logger.info(
            "AUDIT %s %s/%s by %s",
            entry.action,
            entry.resource,
            entry.resource_id or "-",
            entry.user_id or "anonymous",
        )
        try:
            async with self._session_factory() as db:
                await self._repo.add(
                    db,
                    AuditLogModel(
                        user_id=uuid.UUID(entry.user_id) if entry.user_id else None,
                        action=entry.action,
                        resource=entry.resource,
                        resource_id=entry.resource_id,
                        changes=entry.changes,
                        extra=metadata,
                        ip_address=entry.ip_address,
                        user_agent=user_agent,
                    ),
                )
                await db.commit()
        except Exception:
            logger.error(
                "Failed to persist audit log %s %s", entry.action, entry.resource, exc_info=True
            )

    async def list_logs(
        self, db: AsyncSession, filters: AuditFilter, skip: int = 0, take: int = 50
    ) -> AuditListResponse:
        take = max(1, min(take, MAX_TAKE))
        rows, total = await self._repo.list_logs(db, filters, max(skip, 0), take)
        return AuditListResponse(
            items=[AuditLogItem.model_validate(r) for r in rows], total=total
        )

    async def resource_logs(
        self, db: AsyncSession, resource: str, resource_id: str
    ) -> list[AuditLogItem]:
        rows = await self._repo.list_for_resource(db, resource, resource_id)
        return [AuditLogItem.model_validate(r) for r in rows]
