"""DashboardRepository — role-scoped counters.

Reuses the project and COI visibility clauses so the numbers match what the
caller can list.
"""

from datetime import datetime

from sqlalchemy import ColumnElement, and_, func, or_, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_coi.infrastructure.db_models import GeneratedCOIModel
from src.cp_coi.infrastructure.visibility import coi_visibility_clause
from src.cp_common.enums import AWAITING_COI_STATUSES, STAFF_ROLES, COIStatus
from src.cp_contractors.infrastructure.db_models import ContractorModel
from src.cp_gateway.user.db_models import UserModel
from src.cp_projects.infrastructure.db_models import ProjectContractorModel, ProjectModel
from src.cp_projects.infrastructure.visibility import project_visibility_clause

PENDING_COI_STATUSES = (
    *(s.value for s in AWAITING_COI_STATUSES),
    COIStatus.DEFICIENCY_PENDING.value,
)

_EXPIRATION_COLUMNS = (
    GeneratedCOIModel.gl_expiration_date,
    GeneratedCOIModel.umbrella_expiration_date,
    GeneratedCOIModel.auto_expiration_date,
    GeneratedCOIModel.wc_expiration_date,
)


def contractor_visibility_clause(user: UserModel) -> ColumnElement[bool]:
    """Staff see every contractor; others the contractors on their visible projects."""
    if user.role in {r.value for r in STAFF_ROLES}:
        return true()
    return ContractorModel.id.in_(
        select(ProjectContractorModel.contractor_id)
        .join(ProjectModel, ProjectModel.id == ProjectContractorModel.project_id)
        .where(project_visibility_clause(user))
    )


class DashboardRepository:
    async def count_projects(
        self, db: AsyncSession, user: UserModel, status: str | None = None
    ) -> int:
        stmt = select(func.count()).select_from(ProjectModel).where(project_visibility_clause(user))
        if status is not None:
            stmt = stmt.where(ProjectModel.status == status)
        return (await db.execute(stmt)).scalar_one()

    async def count_contractors(
        self, db: AsyncSession, user: UserModel, insurance_status: str | None = None
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(ContractorModel)
            .where(contractor_visibility_clause(user))
        )
        if insurance_status is not None:
            stmt = stmt.where(ContractorModel.insurance_status == insurance_status)
        return (await db.execute(stmt)).scalar_one()

    async def count_pending_cois(self, db: AsyncSession, user: UserModel) -> int:
        stmt = (
            select(func.count())
            .select_from(GeneratedCOIModel)
            .where(
                coi_visibility_clause(user),
                GeneratedCOIModel.status.in_(PENDING_COI_STATUSES),
            )
        )
        return (await db.execute(stmt)).scalar_one()

    async def count_expiring_cois(
        self, db: AsyncSession, user: UserModel, start: datetime, end: datetime
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(GeneratedCOIModel)
            .where(
                coi_visibility_clause(user),
                GeneratedCOIModel.status == COIStatus.ACTIVE.value,
                or_(*(and_(col >= start, col <= end) for col in _EXPIRATION_COLUMNS)),
            )
        )
        return (await db.execute(stmt)).scalar_one()
