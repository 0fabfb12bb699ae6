"""Unit tests for ContractorService caching and insurance status."""

import uuid
from unittest.mock import AsyncMock

import pytest

from src.cp_common.cache import CacheService
from src.cp_common.errors import (
    ContractorEmailExistsError,
    ContractorNotFoundError,
    InvalidSearchQueryError,
)
from src.cp_common.pagination import PageParams
from src.cp_contractors.application.schemas import ContractorCreate, ContractorUpdate
from src.cp_contractors.application.service import ContractorService
from src.cp_contractors.infrastructure.db_models import ContractorModel
from tests.factories import assign_id, build_user


def _contractor(**kwargs: object) -> ContractorModel:
    contractor = ContractorModel(
        name="Sparks Electric",
        email="sparks@example.com",
        trades=["Electrical"],
        contractor_type="SUBCONTRACTOR",
        status="ACTIVE",
        insurance_status="PENDING",
        **kwargs,
    )
    contractor.id = uuid.uuid4()
    return contractor


@pytest.fixture
def cache() -> CacheService:
    return CacheService(use_redis=False)


@pytest.fixture
def repo() -> AsyncMock:
    repo = AsyncMock()
    repo.add.side_effect = assign_id
    return repo


@pytest.fixture
def service(repo: AsyncMock, cache: CacheService) -> ContractorService:
    return ContractorService(repo=repo, cache_service=cache, audit=AsyncMock())


class TestCaching:
    async def test_get_is_cached(self, service: ContractorService, repo: AsyncMock) -> None:
        contractor = _contractor()
        repo.get_by_id.return_value = contractor

        first = await service.get(AsyncMock(), contractor.id)
        second = await service.get(AsyncMock(), contractor.id)

        assert first == second
        assert first["name"] == "Sparks Electric"
        repo.get_by_id.assert_awaited_once()

    async def test_update_invalidates_item_and_lists(
        self, service: ContractorService, repo: AsyncMock, cache: CacheService
    ) -> None:
        contractor = _contractor()
        repo.get_by_id.return_value = contractor
        repo.list_contractors.return_value = ([contractor], 1)
        await service.get(AsyncMock(), contractor.id)
        await service.list_contractors(AsyncMock(), PageParams())
        assert await cache.exists(f"contractor:{contractor.id}")

        await service.update(
            AsyncMock(), build_user(), contractor.id, ContractorUpdate(phone="555-0100")
        )

        assert not await cache.exists(f"contractor:{contractor.id}")
        assert await cache.delete_pattern("contractor:list:*") == 0

    async def test_create_rejects_duplicate_email(
        self, service: ContractorService, repo: AsyncMock
    ) -> None:
        repo.get_by_email.return_value = _contractor()
        with pytest.raises(ContractorEmailExistsError):
            await service.create(
                AsyncMock(),
                build_user(),
                ContractorCreate(name="Other", email="sparks@example.com"),
            )

    async def test_create_starts_pending(
        self, service: ContractorService, repo: AsyncMock
    ) -> None:
        repo.get_by_email.return_value = None
        data = await service.create(
            AsyncMock(), build_user(), ContractorCreate(name="Acme", email="acme@example.com")
        )
        assert data["insurance_status"] == "PENDING"
        assert data["status"] == "PENDING"


class TestInsuranceStatus:
    async def test_recomputed_and_persisted(
        self, service: ContractorService, repo: AsyncMock
    ) -> None:
        contractor = _contractor()
        repo.get_by_id.return_value = contractor
        coi_id = uuid.uuid4()
        repo.coi_statuses.return_value = [(coi_id, "DEFICIENCY_PENDING")]
        db = AsyncMock()

        result = await service.insurance_status(db, contractor.id)

        assert result.status.value == "NON_COMPLIANT"
        assert result.cois[0].id == coi_id
        assert contractor.insurance_status == "NON_COMPLIANT"
        db.commit.assert_awaited_once()

    async def test_unknown_contractor(self, service: ContractorService, repo: AsyncMock) -> None:
        repo.get_by_id.return_value = None
        with pytest.raises(ContractorNotFoundError):
            await service.insurance_status(AsyncMock(), uuid.uuid4())


class TestSearch:
    async def test_short_query_rejected(self, service: ContractorService) -> None:
        with pytest.raises(InvalidSearchQueryError):
            await service.search(AsyncMock(), " a ")
