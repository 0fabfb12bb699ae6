"""ProjectService — projects, contractor assignment and role-scoped listing."""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_audit.application.service import AuditService
from src.cp_audit.domain.models import AuditEntry
from src.cp_common.enums import AuditAction, AuditResource, ContractorType
from src.cp_common.errors import (
    ContractorAlreadyAssignedError,
    ContractorNotFoundError,
    ProjectNotFoundError,
)
from src.cp_contractors.domain.repository import ContractorRepositoryProtocol
from src.cp_contractors.infrastructure.persistence import ContractorRepository
from src.cp_gateway.user.db_models import UserModel
from src.cp_projects.application.schemas import (
    AssignContractorRequest,
    ProjectContractorItem,
    ProjectCreate,
    ProjectDetail,
    ProjectItem,
    ProjectUpdate,
)
from src.cp_projects.domain.repository import ProjectRepositoryProtocol
from src.cp_projects.infrastructure.db_models import ProjectContractorModel, ProjectModel
from src.cp_projects.infrastructure.persistence import ProjectRepository

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(
        self,
        repo: ProjectRepositoryProtocol | None = None,
        contractor_repo: ContractorRepositoryProtocol | None = None,
        audit: AuditService | None = None,
    ) -> None:
        self._repo: ProjectRepositoryProtocol = repo or ProjectRepository()
        self._contractors: ContractorRepositoryProtocol = contractor_repo or ContractorRepository()
        self._audit = audit or AuditService()

    async def create(
        self, db: AsyncSession, actor: UserModel, body: ProjectCreate
    ) -> ProjectDetail:
        fields = body.model_dump(mode="json", exclude={"gc_id", "start_date", "end_date"})
        if body.gc_id is not None and await self._contractors.get_by_id(db, body.gc_id) is None:
            raise ContractorNotFoundError(str(body.gc_id))

        links: list[ProjectContractorModel] = []
        try:
            project = await self._repo.add(
                db,
                ProjectModel(
                    **fields,
                    start_date=body.start_date,
                    end_date=body.end_date,
                    created_by_id=actor.id,
                ),
            )
            if body.gc_id is not None:
                links.append(
                    await self._repo.add_link(
                        db,
                        ProjectContractorModel(
                            project_id=project.id,
                            contractor_id=body.gc_id,
                            role=ContractorType.GENERAL_CONTRACTOR.value,
                        ),
                    )
                )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await self._audit.log(
            AuditEntry(
                action=AuditAction.CREATE.value,
                resource=AuditResource.PROJECT.value,
                user_id=str(actor.id),
                resource_id=str(project.id),
            )
        )
        return self._detail(project, links)

    async def get(self, db: AsyncSession, project_id: uuid.UUID) -> ProjectDetail:
        project = await self._repo.get_by_id(db, project_id)
        if project is None:
            raise ProjectNotFoundError(str(project_id))
        return self._detail(project, await self._repo.list_links(db, project_id))

    async def update(
        self,
        db: AsyncSession,
        actor: UserModel,
        project_id: uuid.UUID,
        body: ProjectUpdate,
    ) -> ProjectItem:
        project = await self._repo.get_by_id(db, project_id)
        if project is None:
            raise ProjectNotFoundError(str(project_id))
        changes = body.model_dump(exclude_unset=True)
        try:
            for field_name, value in changes.items():
                setattr(project, field_name, getattr(value, "value", value))
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await self._audit.log(
            AuditEntry(
                action=AuditAction.UPDATE.value,
                resource=AuditResource.PROJECT.value,
                user_id=str(actor.id),
                resource_id=str(project_id),
                changes=body.model_dump(mode="json", exclude_unset=True),
            )
        )
        return ProjectItem.model_validate(project)

    async def assign_contractor(
        self,
        db: AsyncSession,
        project_id: uuid.UUID,
        body: AssignContractorRequest,
    ) -> ProjectContractorItem:
        if await self._repo.get_by_id(db, project_id) is None:
            raise ProjectNotFoundError(str(project_id))
        if await self._contractors.get_by_id(db, body.contractor_id) is None:
            raise ContractorNotFoundError(str(body.contractor_id))
        if await self._repo.get_link(db, project_id, body.contractor_id) is not None:
            raise ContractorAlreadyAssignedError(str(body.contractor_id), str(project_id))
        try:
            link = await self._repo.add_link(
                db,
                ProjectContractorModel(
                    project_id=project_id,
                    contractor_id=body.contractor_id,
                    role=body.role.value,
                ),
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Contractor %s assigned to project %s", body.contractor_id, project_id)
        return ProjectContractorItem.model_validate(link)

    async def list_projects(
        self,
        db: AsyncSession,
        user: UserModel,
        search: str | None = None,
        status: str | None = None,
    ) -> list[ProjectItem]:
        rows = await self._repo.list_visible(db, user, search, status)
        return [ProjectItem.model_validate(p) for p in rows]

    async def list_for_contractor(
        self, db: AsyncSession, contractor_id: uuid.UUID
    ) -> list[ProjectItem]:
        rows = await self._repo.list_for_contractor(db, contractor_id)
        return [ProjectItem.model_validate(p) for p in rows]

    @staticmethod
    def _detail(project: ProjectModel, links: list[ProjectContractorModel]) -> ProjectDetail:
        detail = ProjectDetail.model_validate(project)
        detail.contractors = [ProjectContractorItem.model_validate(link) for link in links]
        return detail
