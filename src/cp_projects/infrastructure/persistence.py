"""ProjectRepository — concrete implementation of ProjectRepositoryProtocol."""

import uuid

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_gateway.user.db_models import UserModel
from src.cp_projects.infrastructure.db_models import ProjectContractorModel, ProjectModel
from src.cp_projects.infrastructure.visibility import project_visibility_clause


class ProjectRepository:
    async def get_by_id(self, db: AsyncSession, project_id: uuid.UUID) -> ProjectModel | None:
        result = await db.execute(select(ProjectModel).where(ProjectModel.id == project_id))
        return result.scalar_one_or_none()

    async def add(self, db: AsyncSession, project: ProjectModel) -> ProjectModel:
        db.add(project)
        await db.flush()
        return project

    async def add_link(
        self, db: AsyncSession, link: ProjectContractorModel
    ) -> ProjectContractorModel:
        db.add(link)
        await db.flush()
        return link

    async def get_link(
        self, db: AsyncSession, project_id: uuid.UUID, contractor_id: uuid.UUID
    ) -> ProjectContractorModel | None:
        result = await db.execute(
            select(ProjectContractorModel).where(
                ProjectContractorModel.project_id == project_id,
                ProjectContractorModel.contractor_id == contractor_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_links(
        self, db: AsyncSession, project_id: uuid.UUID
    ) -> list[ProjectContractorModel]:
        result = await db.execute(
            select(ProjectContractorModel)
            .where(ProjectContractorModel.project_id == project_id)
            .order_by(ProjectContractorModel.assigned_at)
        )
        return list(result.scalars().all())

    async def list_visible(
        self, db: AsyncSession, user: UserModel, search: str | None, status: str | None
    ) -> list[ProjectModel]:
        stmt = select(ProjectModel).where(project_visibility_clause(user))
        if status:
            stmt = stmt.where(ProjectModel.status == status)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    ProjectModel.name.ilike(pattern),
                    ProjectModel.address.ilike(pattern),
                    ProjectModel.gc_name.ilike(pattern),
                    ProjectModel.description.ilike(pattern),
                )
            )
        result = await db.execute(stmt.order_by(ProjectModel.created_at.desc()))
        return list(result.scalars().all())

    async def list_for_contractor(
        self, db: AsyncSession, contractor_id: uuid.UUID
    ) -> list[ProjectModel]:
        result = await db.execute(
            select(ProjectModel)
            .join(ProjectContractorModel, ProjectContractorModel.project_id == ProjectModel.id)
            .where(ProjectContractorModel.contractor_id == contractor_id)
            .order_by(ProjectModel.created_at.desc())
        )
        return list(result.scalars().all())
