"""Unit tests for DeficiencyService."""

import uuid
from unittest.mock import AsyncMock

import pytest

from src.cp_common.errors import DeficiencyNotFoundError, ReviewNotFoundError
from src.cp_deficiencies.application.schemas import DeficiencyCreate, ResolveDeficiencyRequest
from src.cp_deficiencies.application.service import DeficiencyService
from src.cp_deficiencies.infrastructure.db_models import DeficiencyModel
from src.cp_notifications.infrastructure.mailer import LoggingMailer
from src.cp_review.infrastructure.db_models import COIReviewModel
from tests.factories import assign_id, build_user


def _deficiency() -> DeficiencyModel:
    deficiency = DeficiencyModel(
        review_id=uuid.uuid4(),
        category="COVERAGE_AMOUNT",
        severity="HIGH",
        description="GL aggregate below $2M",
        required_action="Increase GL aggregate",
        status="OPEN",
    )
    deficiency.id = uuid.uuid4()
    return deficiency


class _Deps:
    def __init__(self, mailer: LoggingMailer) -> None:
        self.repo = AsyncMock()
        self.repo.add.side_effect = assign_id
        self.repo.add_reminder.side_effect = assign_id
        self.reviews = AsyncMock()
        self.users = AsyncMock()
        self.notifications = AsyncMock()
        self.service = DeficiencyService(
            repo=self.repo,
            review_repo=self.reviews,
            user_repo=self.users,
            notifications=self.notifications,
            mailer=mailer,
        )


@pytest.fixture
def deps(mailer: LoggingMailer) -> _Deps:
    return _Deps(mailer)


class TestTemplates:
    def test_five_templates(self) -> None:
        templates = DeficiencyService.templates()
        assert len(templates) == 5
        by_category = {t["category"]: t["severity"] for t in templates}
        assert by_category["EXPIRED_POLICY"] == "CRITICAL"
        assert by_category["CERTIFICATE_HOLDER"] == "LOW"


class TestCreate:
    async def test_create_notifies_submitter(self, deps: _Deps) -> None:
        review = COIReviewModel(submitted_by=uuid.uuid4())
        review.id = uuid.uuid4()
        deps.reviews.get_by_id.return_value = review

        item = await deps.service.create(
            AsyncMock(),
            DeficiencyCreate(
                review_id=review.id,
                category="MISSING_ENDORSEMENT",
                severity="MEDIUM",
                description="Waiver of subrogation missing",
                required_action="Add waiver endorsement",
            ),
        )

        assert item.status == "OPEN"
        assert item.review_id == review.id
        deps.notifications.notify_deficiency_created.assert_awaited_once()
        assert deps.notifications.notify_deficiency_created.await_args.args[1] == (
            review.submitted_by
        )

    async def test_unknown_review(self, deps: _Deps) -> None:
        deps.reviews.get_by_id.return_value = None
        with pytest.raises(ReviewNotFoundError):
            await deps.service.create(
                AsyncMock(),
                DeficiencyCreate(
                    review_id=uuid.uuid4(),
                    category="OTHER",
                    severity="LOW",
                    description="x",
                    required_action="y",
                ),
            )


class TestResolve:
    async def test_resolve(self, deps: _Deps) -> None:
        deficiency = _deficiency()
        deps.repo.get_by_id.return_value = deficiency
        actor = build_user("MANAGER", "m@example.com")

        item = await deps.service.resolve(
            AsyncMock(), actor, deficiency.id, ResolveDeficiencyRequest(resolution_notes="Fixed")
        )

        assert item.status == "RESOLVED"
        assert item.resolved_by == actor.id
        assert item.resolved_at is not None

    async def test_not_found(self, deps: _Deps) -> None:
        deps.repo.get_by_id.return_value = None
        with pytest.raises(DeficiencyNotFoundError):
            await deps.service.resolve(
                AsyncMock(),
                build_user(),
                uuid.uuid4(),
                ResolveDeficiencyRequest(resolution_notes="x"),
            )


class TestReminder:
    async def test_reminder_recorded_and_emailed(
        self, deps: _Deps, mailer: LoggingMailer
    ) -> None:
        deficiency = _deficiency()
        deps.repo.get_by_id.return_value = deficiency
        user = build_user("SUBCONTRACTOR", "sub@example.com")
        deps.users.get_by_id.return_value = user

        item = await deps.service.send_reminder(AsyncMock(), deficiency.id, user.id)

        assert item.sent_to == user.id
        assert item.emailed is True
        assert mailer.outbox[0].to == "sub@example.com"

    async def test_unknown_user_recorded_without_email(
        self, deps: _Deps, mailer: LoggingMailer
    ) -> None:
        deps.repo.get_by_id.return_value = _deficiency()
        deps.users.get_by_id.return_value = None

        item = await deps.service.send_reminder(AsyncMock(), uuid.uuid4(), uuid.uuid4())

        assert item.emailed is False
        assert len(mailer.outbox) == 0
