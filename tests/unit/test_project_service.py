"""Unit tests for ProjectService contractor assignment."""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.cp_common.errors import (
    ContractorAlreadyAssignedError,
    ContractorNotFoundError,
    ProjectNotFoundError,
)
from src.cp_projects.application.schemas import AssignContractorRequest
from src.cp_projects.application.service import ProjectService
from src.cp_projects.infrastructure.db_models import ProjectContractorModel
from tests.factories import assign_id


def _db() -> MagicMock:
    db = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    return db


@pytest.fixture
def repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id.return_value = MagicMock()
    repo.get_link.return_value = None
    repo.add_link.side_effect = assign_id
    return repo


@pytest.fixture
def contractors() -> AsyncMock:
    contractors = AsyncMock()
    contractors.get_by_id.return_value = MagicMock()
    return contractors


@pytest.fixture
def service(repo: AsyncMock, contractors: AsyncMock) -> ProjectService:
    return ProjectService(repo=repo, contractor_repo=contractors, audit=AsyncMock())


class TestAssignContractor:
    async def test_assigns_with_role(self, service: ProjectService) -> None:
        project_id, contractor_id = uuid.uuid4(), uuid.uuid4()
        db = _db()

        link = await service.assign_contractor(
            db,
            project_id,
            AssignContractorRequest(contractor_id=contractor_id, role="GENERAL_CONTRACTOR"),
        )

        assert link.project_id == project_id
        assert link.contractor_id == contractor_id
        assert link.role == "GENERAL_CONTRACTOR"
        db.commit.assert_awaited_once()

    async def test_duplicate_is_conflict(self, service: ProjectService, repo: AsyncMock) -> None:
        project_id, contractor_id = uuid.uuid4(), uuid.uuid4()
        repo.get_link.return_value = ProjectContractorModel(
            project_id=project_id, contractor_id=contractor_id, role="SUBCONTRACTOR"
        )
        db = _db()

        with pytest.raises(ContractorAlreadyAssignedError) as exc_info:
            await service.assign_contractor(
                db, project_id, AssignContractorRequest(contractor_id=contractor_id)
            )

        assert exc_info.value.http_status == 409
        repo.add_link.assert_not_awaited()
        db.commit.assert_not_awaited()

    async def test_unknown_project(self, service: ProjectService, repo: AsyncMock) -> None:
        repo.get_by_id.return_value = None
        with pytest.raises(ProjectNotFoundError):
            await service.assign_contractor(
                _db(), uuid.uuid4(), AssignContractorRequest(contractor_id=uuid.uuid4())
            )

    async def test_unknown_contractor(
        self, service: ProjectService, contractors: AsyncMock
    ) -> None:
        contractors.get_by_id.return_value = None
        with pytest.raises(ContractorNotFoundError):
            await service.assign_contractor(
                _db(), uuid.uuid4(), AssignContractorRequest(contractor_id=uuid.uuid4())
            )
