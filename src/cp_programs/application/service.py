"""ProgramService — insurance programs and their assignment to projects."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_audit.application.service import AuditService
from src.cp_audit.domain.models import AuditEntry
from src.cp_common.enums import AuditAction, AuditResource
from src.cp_common.errors import ProgramNotFoundError, ProjectNotFoundError
from src.cp_gateway.user.db_models import UserModel
from src.cp_programs.application.schemas import (
    ProgramCreate,
    ProgramItem,
    ProgramUpdate,
    ProjectProgramItem,
)
from src.cp_programs.domain.repository import ProgramRepositoryProtocol
from src.cp_programs.infrastructure.db_models import ProgramModel, ProjectProgramModel
from src.cp_programs.infrastructure.persistence import ProgramRepository
from src.cp_projects.domain.repository import ProjectRepositoryProtocol
from src.cp_projects.infrastructure.persistence import ProjectRepository


class ProgramService:
    def __init__(
        self,
        repo: ProgramRepositoryProtocol | None = None,
        project_repo: ProjectRepositoryProtocol | None = None,
        audit: AuditService | None = None,
    ) -> None:
        self._repo: ProgramRepositoryProtocol = repo or ProgramRepository()
        self._projects: ProjectRepositoryProtocol = project_repo or ProjectRepository()
        self._audit = audit or AuditService()

    async def create(
        self, db: AsyncSession, actor: UserModel, body: ProgramCreate
    ) -> ProgramItem:
        try:
            program = await self._repo.add(
                db, ProgramModel(**body.model_dump(), created_by_id=actor.id)
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        await self._audit.log(
            AuditEntry(
                action=AuditAction.CREATE.value,
                resource=AuditResource.PROGRAM.value,
                user_id=str(actor.id),
                resource_id=str(program.id),
            )
        )
        return ProgramItem.model_validate(program)

    async def update(
        self,
        db: AsyncSession,
        actor: UserModel,
        program_id: uuid.UUID,
        body: ProgramUpdate,
    ) -> ProgramItem:
        program = await self._repo.get_by_id(db, program_id)
        if program is None:
            raise ProgramNotFoundError(str(program_id))
        changes = body.model_dump(exclude_unset=True)
        try:
            for field_name, value in changes.items():
                setattr(program, field_name, value)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        await self._audit.log(
            AuditEntry(
                action=AuditAction.UPDATE.value,
                resource=AuditResource.PROGRAM.value,
                user_id=str(actor.id),
                resource_id=str(program_id),
                changes=changes,
            )
        )
        return ProgramItem.model_validate(program)

    async def get(self, db: AsyncSession, program_id: uuid.UUID) -> ProgramItem:
        program = await self._repo.get_by_id(db, program_id)
        if program is None:
            raise ProgramNotFoundError(str(program_id))
        return ProgramItem.model_validate(program)

    async def list_programs(self, db: AsyncSession) -> list[ProgramItem]:
        return [ProgramItem.model_validate(p) for p in await self._repo.list_programs(db)]

    async def assign_to_project(
        self, db: AsyncSession, program_id: uuid.UUID, project_id: uuid.UUID
    ) -> ProjectProgramItem:
        if await self._repo.get_by_id(db, program_id) is None:
            raise ProgramNotFoundError(str(program_id))
        if await self._projects.get_by_id(db, project_id) is None:
            raise ProjectNotFoundError(str(project_id))

        existing = await self._repo.get_assignment(db, project_id, program_id)
        if existing is not None:
            return ProjectProgramItem.model_validate(existing)
        try:
            assignment = await self._repo.add_assignment(
                db, ProjectProgramModel(project_id=project_id, program_id=program_id)
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return ProjectProgramItem.model_validate(assignment)
