"""Repository Protocol — dependency inversion for testability."""

import uuid
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_programs.infrastructure.db_models import ProgramModel, ProjectProgramModel


class ProgramRepositoryProtocol(Protocol):
    async def get_by_id(self, db: AsyncSession, program_id: uuid.UUID) -> ProgramModel | None: ...

    async def add(self, db: AsyncSession, program: ProgramModel) -> ProgramModel: ...

    async def list_programs(self, db: AsyncSession) -> list[ProgramModel]: ...

    async def get_assignment(
        self, db: AsyncSession, project_id: uuid.UUID, program_id: uuid.UUID
    ) -> ProjectProgramModel | None: ...

    async def add_assignment(
        self, db: AsyncSession, assignment: ProjectProgramModel
    ) -> ProjectProgramModel: ...

    async def first_program_for_project(
        self, db: AsyncSession, project_id: uuid.UUID
    ) -> ProgramModel | None: ...
