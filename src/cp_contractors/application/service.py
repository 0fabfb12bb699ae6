"""ContractorService — CRUD, search and derived insurance status.

Reads are cached for five minutes; every write invalidates the contractor's
own key and all list pages.
"""

import logging
import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_audit.application.service import AuditService
from src.cp_audit.domain.models import AuditEntry
from src.cp_common.cache import CacheService, cache
from src.cp_common.enums import AuditAction, AuditResource
from src.cp_common.errors import (
    ContractorEmailExistsError,
    ContractorNotFoundError,
    InvalidSearchQueryError,
)
from src.cp_common.pagination import Page, PageParams
from src.cp_contractors.application.schemas import (
    BrokerSearchItem,
    ContractorCreate,
    ContractorItem,
    ContractorUpdate,
    COIStatusRef,
    InsuranceStatusResponse,
)
from src.cp_contractors.domain.brokers import broker_contacts
from src.cp_contractors.domain.insurance import derive_insurance_status
from src.cp_contractors.domain.repository import ContractorRepositoryProtocol
from src.cp_contractors.infrastructure.db_models import ContractorModel
from src.cp_contractors.infrastructure.persistence import ContractorRepository
from src.cp_gateway.user.db_models import UserModel

logger = logging.getLogger(__name__)

CACHE_PREFIX = "contractor:"
CACHE_TTL_SECONDS = 300
MIN_SEARCH_LENGTH = 2


def _item_key(contractor_id: uuid.UUID | str) -> str:
    return f"{CACHE_PREFIX}{contractor_id}"


def _list_key(page: int, limit: int, status: str | None) -> str:
    return f"{CACHE_PREFIX}list:{page}:{limit}:{status or 'all'}"


def _dump(contractor: ContractorModel) -> dict[str, Any]:
    return ContractorItem.model_validate(contractor).model_dump(mode="json")


class ContractorService:
    def __init__(
        self,
        repo: ContractorRepositoryProtocol | None = None,
        cache_service: CacheService | None = None,
        audit: AuditService | None = None,
    ) -> None:
        self._repo: ContractorRepositoryProtocol = repo or ContractorRepository()
        self._cache = cache_service or cache
        self._audit = audit or AuditService()

    async def _invalidate(self, contractor_id: uuid.UUID | None = None) -> None:
        if contractor_id is not None:
            await self._cache.delete(_item_key(contractor_id))
        await self._cache.delete_pattern(f"{CACHE_PREFIX}list:*")

    async def create(
        self, db: AsyncSession, actor: UserModel, body: ContractorCreate
    ) -> dict[str, Any]:
        if await self._repo.get_by_email(db, body.email) is not None:
            raise ContractorEmailExistsError(body.email)
        try:
            contractor = await self._repo.add(
                db,
                ContractorModel(
                    **body.model_dump(mode="json"),
                    insurance_status="PENDING",
                    created_by_id=actor.id,
                ),
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await self._invalidate()
        await self._audit.log(
            AuditEntry(
                action=AuditAction.CREATE.value,
                resource=AuditResource.CONTRACTOR.value,
                user_id=str(actor.id),
                resource_id=str(contractor.id),
            )
        )
        return _dump(contractor)

    async def list_contractors(
        self, db: AsyncSession, params: PageParams, status: str | None = None
    ) -> dict[str, Any]:
        key = _list_key(params.page, params.limit, status)
        cached = await self._cache.get(key)
        if cached is not None:
            return cached
        rows, total = await self._repo.list_contractors(db, params.offset, params.limit, status)
        page = Page.build([_dump(r) for r in rows], total, params).model_dump()
        await self._cache.set(key, page, CACHE_TTL_SECONDS)
        return page

    async def get(self, db: AsyncSession, contractor_id: uuid.UUID) -> dict[str, Any]:
        cached = await self._cache.get(_item_key(contractor_id))
        if cached is not None:
            return cached
        contractor = await self._repo.get_by_id(db, contractor_id)
        if contractor is None:
            raise ContractorNotFoundError(str(contractor_id))
        data = _dump(contractor)
        await self._cache.set(_item_key(contractor_id), data, CACHE_TTL_SECONDS)
        return data

    async def update(
        self,
        db: AsyncSession,
        actor: UserModel,
        contractor_id: uuid.UUID,
        body: ContractorUpdate,
    ) -> dict[str, Any]:
        contractor = await self._repo.get_by_id(db, contractor_id)
        if contractor is None:
            raise ContractorNotFoundError(str(contractor_id))
        changes = body.model_dump(mode="json", exclude_unset=True)
        new_email = changes.get("email")
        if new_email and new_email.lower() != contractor.email.lower():
            if await self._repo.get_by_email(db, new_email) is not None:
                raise ContractorEmailExistsError(new_email)
        try:
            for field_name, value in changes.items():
                setattr(contractor, field_name, value)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await self._invalidate(contractor_id)
        await self._audit.log(
            AuditEntry(
                action=AuditAction.UPDATE.value,
                resource=AuditResource.CONTRACTOR.value,
                user_id=str(actor.id),
                resource_id=str(contractor_id),
                changes=changes,
            )
        )
        return _dump(contractor)

    async def delete(
        self, db: AsyncSession, actor: UserModel, contractor_id: uuid.UUID
    ) -> None:
        contractor = await self._repo.get_by_id(db, contractor_id)
        if contractor is None:
            raise ContractorNotFoundError(str(contractor_id))
        try:
            await self._repo.delete(db, contractor)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await self._invalidate(contractor_id)
        await self._audit.log(
            AuditEntry(
                action=AuditAction.DELETE.value,
                resource=AuditResource.CONTRACTOR.value,
                user_id=str(actor.id),
                resource_id=str(contractor_id),
            )
        )

    async def insurance_status(
        self, db: AsyncSession, contractor_id: uuid.UUID
    ) -> InsuranceStatusResponse:
        contractor = await self._repo.get_by_id(db, contractor_id)
        if contractor is None:
            raise ContractorNotFoundError(str(contractor_id))

        cois = await self._repo.coi_statuses(db, contractor_id)
        status = derive_insurance_status(s for _, s in cois)
        if contractor.insurance_status != status.value:
            logger.info(
                "Contractor %s insurance status %s -> %s",
                contractor_id,
                contractor.insurance_status,
                status.value,
            )
            try:
                contractor.insurance_status = status.value
                await db.commit()
            except Exception:
                await db.rollback()
                raise
            await self._invalidate(contractor_id)

        return InsuranceStatusResponse(
            contractor_id=contractor_id,
            status=status,
            cois=[COIStatusRef(id=coi_id, status=s) for coi_id, s in cois],
        )

    async def search(self, db: AsyncSession, query: str, limit: int = 10) -> list[dict[str, Any]]:
        query = query.strip()
        if len(query) < MIN_SEARCH_LENGTH:
            raise InvalidSearchQueryError()
        return [_dump(c) for c in await self._repo.search(db, query, limit)]

    async def search_brokers(
        self, db: AsyncSession, query: str, policy_type: str | None = None, limit: int = 10
    ) -> list[BrokerSearchItem]:
        query = query.strip()
        if len(query) < MIN_SEARCH_LENGTH:
            raise InvalidSearchQueryError()
        needle = query.lower()
        seen: set[tuple[str, str]] = set()
        brokers: list[BrokerSearchItem] = []
        for contractor in await self._repo.search_brokers(db, query):
            for contact in broker_contacts(contractor, policy_type):
                key = (contact.email.lower(), contact.policy_type)
                if key in seen:
                    continue
                if not any(needle in s.lower() for s in (contact.email, contact.name or "")):
                    continue
                seen.add(key)
                brokers.append(
                    BrokerSearchItem(
                        name=contact.name,
                        email=contact.email,
                        phone=contact.phone,
                        policy_type=contact.policy_type,
                    )
                )
                if len(brokers) >= limit:
                    return brokers
        return brokers
