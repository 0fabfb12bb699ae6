"""DashboardService — headline counters for the signed-in user."""

from datetime import timedelta

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.datetime_utils import utc_now
from src.cp_common.enums import InsuranceStatus, ProjectStatus
from src.cp_dashboard.infrastructure.persistence import DashboardRepository
from src.cp_gateway.user.db_models import UserModel

EXPIRING_WINDOW_DAYS = 30


class DashboardStats(BaseModel):
    total_projects: int
    active_projects: int
    total_contractors: int
    compliant_contractors: int
    pending_cois: int
    expiring_soon: int


class DashboardService:
    def __init__(self, repo: DashboardRepository | None = None) -> None:
        self._repo = repo or DashboardRepository()

    async def stats(self, db: AsyncSession, user: UserModel) -> DashboardStats:
        now = utc_now()
        return DashboardStats(
            total_projects=await self._repo.count_projects(db, user),
            active_projects=await self._repo.count_projects(db, user, ProjectStatus.ACTIVE.value),
            total_contractors=await self._repo.count_contractors(db, user),
            compliant_contractors=await self._repo.count_contractors(
                db, user, InsuranceStatus.COMPLIANT.value
            ),
            pending_cois=await self._repo.count_pending_cois(db, user),
            expiring_soon=await self._repo.count_expiring_cois(
                db, user, now, now + timedelta(days=EXPIRING_WINDOW_DAYS)
            ),
        )
