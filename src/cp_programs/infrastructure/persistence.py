"""ProgramRepository — concrete implementation of ProgramRepositoryProtocol."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_programs.infrastructure.db_models import ProgramModel, ProjectProgramModel


class ProgramRepository:
    async def get_by_id(self, db: AsyncSession, program_id: uuid.UUID) -> ProgramModel | None:
        result = await db.execute(select(ProgramModel).where(ProgramModel.id == program_id))
        return result.scalar_one_or_none()

    async def add(self, db: AsyncSession, program: ProgramModel) -> ProgramModel:
        db.add(program)
        await db.flush()
        return program

    async def list_programs(self, db: AsyncSession) -> list[ProgramModel]:
        result = await db.execute(select(ProgramModel).order_by(ProgramModel.name))
        return list(result.scalars().all())

    async def get_assignment(
        self, db: AsyncSession, project_id: uuid.UUID, program_id: uuid.UUID
    ) -> ProjectProgramModel | None:
        result = await db.execute(
            select(ProjectProgramModel).where(
                ProjectProgramModel.project_id == project_id,
                ProjectProgramModel.program_id == program_id,
            )
        )
        return result.scalar_one_or_none()

    async def add_assignment(
        self, db: AsyncSession, assignment: ProjectProgramModel
    ) -> ProjectProgramModel:
        db.add(assignment)
        await db.flush()
        return assignment

    async def first_program_for_project(
        self, db: AsyncSession, project_id: uuid.UUID
    ) -> ProgramModel | None:
        result = await db.execute(
            select(ProgramModel)
            .join(ProjectProgramModel, ProjectProgramModel.program_id == ProgramModel.id)
            .where(ProjectProgramModel.project_id == project_id)
            .order_by(ProjectProgramModel.assigned_at)
            .limit(1)
        )
        return result.scalar_one_or_none()
