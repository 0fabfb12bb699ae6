"""Unit tests for ProgramService."""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.cp_common.errors import ProgramNotFoundError, ProjectNotFoundError
from src.cp_programs.application.schemas import ProgramCreate, ProgramUpdate
from src.cp_programs.application.service import ProgramService
from src.cp_programs.infrastructure.db_models import ProgramModel, ProjectProgramModel
from tests.factories import assign_id, build_user


def _db() -> MagicMock:
    db = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    return db


def _program(**kwargs: object) -> ProgramModel:
    program = ProgramModel(name="Standard GL", requires_hold_harmless=False, **kwargs)
    program.id = uuid.uuid4()
    return program


@pytest.fixture
def repo() -> AsyncMock:
    repo = AsyncMock()
    repo.add.side_effect = assign_id
    repo.add_assignment.side_effect = assign_id
    return repo


@pytest.fixture
def projects() -> AsyncMock:
    projects = AsyncMock()
    projects.get_by_id.return_value = MagicMock()
    return projects


@pytest.fixture
def audit() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def service(repo: AsyncMock, projects: AsyncMock, audit: AsyncMock) -> ProgramService:
    return ProgramService(repo=repo, project_repo=projects, audit=audit)


class TestProgramCrud:
    async def test_create_records_creator(
        self, service: ProgramService, repo: AsyncMock, audit: AsyncMock
    ) -> None:
        actor = build_user()
        body = ProgramCreate(
            name="<b>Hold Harmless</b> Program",
            requires_hold_harmless=True,
            hold_harmless_template_url="https://files.example.com/hh.pdf",
        )

        item = await service.create(_db(), actor, body)

        assert item.name == "Hold Harmless Program"
        assert item.requires_hold_harmless is True
        assert repo.add.await_args.args[1].created_by_id == actor.id
        audit.log.assert_awaited_once()

    async def test_update_applies_only_set_fields(
        self, service: ProgramService, repo: AsyncMock
    ) -> None:
        program = _program(description="Baseline")
        repo.get_by_id.return_value = program

        item = await service.update(
            _db(), build_user(), program.id, ProgramUpdate(requires_hold_harmless=True)
        )

        assert item.requires_hold_harmless is True
        assert item.description == "Baseline"

    async def test_get_missing(self, service: ProgramService, repo: AsyncMock) -> None:
        repo.get_by_id.return_value = None
        with pytest.raises(ProgramNotFoundError):
            await service.get(_db(), uuid.uuid4())


class TestAssignToProject:
    async def test_creates_assignment(self, service: ProgramService, repo: AsyncMock) -> None:
        program = _program()
        repo.get_by_id.return_value = program
        repo.get_assignment.return_value = None
        project_id = uuid.uuid4()
        db = _db()

        item = await service.assign_to_project(db, program.id, project_id)

        assert item.program_id == program.id
        assert item.project_id == project_id
        db.commit.assert_awaited_once()

    async def test_existing_assignment_is_returned(
        self, service: ProgramService, repo: AsyncMock
    ) -> None:
        program = _program()
        project_id = uuid.uuid4()
        existing = ProjectProgramModel(project_id=project_id, program_id=program.id)
        existing.id = uuid.uuid4()
        repo.get_by_id.return_value = program
        repo.get_assignment.return_value = existing
        db = _db()

        item = await service.assign_to_project(db, program.id, project_id)

        assert item.id == existing.id
        repo.add_assignment.assert_not_awaited()
        db.commit.assert_not_awaited()

    async def test_unknown_program(self, service: ProgramService, repo: AsyncMock) -> None:
        repo.get_by_id.return_value = None
        with pytest.raises(ProgramNotFoundError):
            await service.assign_to_project(_db(), uuid.uuid4(), uuid.uuid4())

    async def test_unknown_project(
        self, service: ProgramService, repo: AsyncMock, projects: AsyncMock
    ) -> None:
        repo.get_by_id.return_value = _program()
        projects.get_by_id.return_value = None
        with pytest.raises(ProjectNotFoundError):
            await service.assign_to_project(_db(), uuid.uuid4(), uuid.uuid4())
