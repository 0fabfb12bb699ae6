"""Repository Protocol — dependency inversion for testability."""

import uuid
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_gateway.user.db_models import UserModel
from src.cp_projects.infrastructure.db_models import ProjectContractorModel, ProjectModel


class ProjectRepositoryProtocol(Protocol):
    async def get_by_id(self, db: AsyncSession, project_id: uuid.UUID) -> ProjectModel | None: ...

    async def add(self, db: AsyncSession, project: ProjectModel) -> ProjectModel: ...

    async def add_link(
        self, db: AsyncSession, link: ProjectContractorModel
    ) -> ProjectContractorModel: ...

    async def get_link(
        self, db: AsyncSession, project_id: uuid.UUID, contractor_id: uuid.UUID
    ) -> ProjectContractorModel | None: ...

    async def list_links(
        self, db: AsyncSession, project_id: uuid.UUID
    ) -> list[ProjectContractorModel]: ...

    async def list_visible(
        self, db: AsyncSession, user: UserModel, search: str | None, status: str | None
    ) -> list[ProjectModel]: ...

    async def list_for_contractor(
        self, db: AsyncSession, contractor_id: uuid.UUID
    ) -> list[ProjectModel]: ...
