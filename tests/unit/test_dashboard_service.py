"""Unit tests for dashboard counters."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from src.cp_dashboard.application.service import EXPIRING_WINDOW_DAYS, DashboardService
from src.cp_dashboard.infrastructure.persistence import (
    PENDING_COI_STATUSES,
    DashboardRepository,
    contractor_visibility_clause,
)
from tests.factories import build_user


class TestDashboardService:
    async def test_stats_collects_counters(self) -> None:
        repo = AsyncMock()
        repo.count_projects.side_effect = [12, 5]
        repo.count_contractors.side_effect = [40, 31]
        repo.count_pending_cois.return_value = 7
        repo.count_expiring_cois.return_value = 2
        user = build_user("MANAGER", "m@example.com")
        db = MagicMock()

        stats = await DashboardService(repo=repo).stats(db, user)

        assert stats.model_dump() == {
            "total_projects": 12,
            "active_projects": 5,
            "total_contractors": 40,
            "compliant_contractors": 31,
            "pending_cois": 7,
            "expiring_soon": 2,
        }
        assert repo.count_projects.await_args_list[1].args == (db, user, "ACTIVE")
        assert repo.count_contractors.await_args_list[1].args == (db, user, "COMPLIANT")

    async def test_expiring_window(self) -> None:
        repo = AsyncMock()
        repo.count_projects.return_value = 0
        repo.count_contractors.return_value = 0
        repo.count_pending_cois.return_value = 0
        repo.count_expiring_cois.return_value = 0

        await DashboardService(repo=repo).stats(MagicMock(), build_user())

        _, _, start, end = repo.count_expiring_cois.await_args.args
        assert (end - start).days == EXPIRING_WINDOW_DAYS


class TestContractorVisibility:
    @pytest.mark.parametrize("role", ["SUPER_ADMIN", "ADMIN", "MANAGER"])
    def test_staff_see_all(self, role: str) -> None:
        clause = contractor_visibility_clause(build_user(role))
        assert str(clause.compile(dialect=postgresql.dialect())) == "true"

    def test_subcontractor_limited_to_visible_projects(self) -> None:
        clause = contractor_visibility_clause(build_user("SUBCONTRACTOR", "s@example.com"))
        sql = str(clause.compile(dialect=postgresql.dialect()))
        assert sql.startswith("contractors.id IN")
        assert "project_contractors" in sql


class TestDashboardRepository:
    async def test_pending_counts_deficiency_pending(self) -> None:
        result = MagicMock()
        result.scalar_one.return_value = 3
        db = MagicMock()
        db.execute = AsyncMock(return_value=result)

        count = await DashboardRepository().count_pending_cois(db, build_user("MANAGER"))

        assert count == 3
        assert "DEFICIENCY_PENDING" in PENDING_COI_STATUSES
        assert "AWAITING_ADMIN_REVIEW" in PENDING_COI_STATUSES
