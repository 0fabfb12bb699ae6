"""Unit tests for COIService (repositories and collaborators mocked)."""

import uuid
from datetime import UTC, date, datetime
from typing import Any
from unittest.mock import AsyncMock

import pytest

from src.cp_coi.application.schemas import (
    BrokerInfoRequest,
    COICreate,
    ReviewCOIRequest,
    UploadPoliciesRequest,
)
from src.cp_coi.application.service import ROLLBACK_NOTE, COIService, rollback_notes
from src.cp_coi.infrastructure.db_models import GeneratedCOIModel
from src.cp_common.errors import (
    COINotFoundError,
    HoldHarmlessGenerationFailedError,
    HoldHarmlessTemplateMissingError,
    InvalidCOITransitionError,
    ProjectNotFoundError,
)
from src.cp_contractors.infrastructure.db_models import ContractorModel
from src.cp_notifications.infrastructure.mailer import LoggingMailer
from src.cp_projects.infrastructure.db_models import ProjectModel
from src.cp_users.application.service import BrokerProvision
from tests.factories import assign_id, build_user


def _coi(status: str = "AWAITING_BROKER_INFO", **kwargs: Any) -> GeneratedCOIModel:
    coi = GeneratedCOIModel(
        project_id=uuid.uuid4(),
        subcontractor_id=uuid.uuid4(),
        status=status,
        **kwargs,
    )
    coi.id = uuid.uuid4()
    return coi


def _project() -> ProjectModel:
    project = ProjectModel(name="Harbor Tower", gc_name="BuildCo")
    project.id = uuid.uuid4()
    return project


def _contractor() -> ContractorModel:
    contractor = ContractorModel(name="Sparks Electric", email="sparks@example.com")
    contractor.id = uuid.uuid4()
    return contractor


class _Deps:
    def __init__(self, mailer: LoggingMailer) -> None:
        self.repo = AsyncMock()
        self.repo.add.side_effect = assign_id
        self.projects = AsyncMock()
        self.contractors = AsyncMock()
        self.user_repo = AsyncMock()
        self.users = AsyncMock()
        self.hold_harmless = AsyncMock()
        self.notifications = AsyncMock()
        self.audit = AsyncMock()
        self.mailer = mailer
        self.service = COIService(
            repo=self.repo,
            project_repo=self.projects,
            contractor_repo=self.contractors,
            user_repo=self.user_repo,
            users=self.users,
            hold_harmless=self.hold_harmless,
            notifications=self.notifications,
            audit=self.audit,
            mailer=mailer,
        )


@pytest.fixture
def deps(mailer: LoggingMailer) -> _Deps:
    return _Deps(mailer)


@pytest.fixture
def db() -> AsyncMock:
    return AsyncMock()


class TestCreate:
    async def test_without_master_waits_for_broker_info(self, deps: _Deps, db: AsyncMock) -> None:
        project, sub = _project(), _contractor()
        deps.projects.get_by_id.return_value = project
        deps.contractors.get_by_id.return_value = sub
        deps.repo.earliest_active_for_subcontractor.return_value = None

        item = await deps.service.create(
            db, build_user(), COICreate(project_id=project.id, subcontractor_id=sub.id)
        )

        assert item.status == "AWAITING_BROKER_INFO"
        assert item.gc_name == "BuildCo"
        assert item.subcontractor_name == "Sparks Electric"
        assert item.project_name == "Harbor Tower"
        db.commit.assert_awaited_once()
        deps.audit.log.assert_awaited_once()

    async def test_with_master_copies_and_skips_to_review(
        self, deps: _Deps, db: AsyncMock
    ) -> None:
        project, sub = _project(), _contractor()
        master = _coi(
            "ACTIVE",
            broker_type="GLOBAL",
            broker_name="Jane",
            broker_email="jane@broker.com",
            gl_policy_url="https://files.example.com/gl.pdf",
            gl_expiration_date=datetime(2027, 1, 1, tzinfo=UTC),
            gc_name="OtherGC",
            subcontractor_name="Sparks Electric",
        )
        deps.projects.get_by_id.return_value = project
        deps.contractors.get_by_id.return_value = sub
        deps.repo.earliest_active_for_subcontractor.return_value = master

        item = await deps.service.create(
            db, build_user(), COICreate(project_id=project.id, subcontractor_id=sub.id)
        )

        assert item.status == "AWAITING_ADMIN_REVIEW"
        assert item.broker_email == "jane@broker.com"
        assert item.gl_policy_url == "https://files.example.com/gl.pdf"
        assert item.project_id == project.id
        assert str(master.id) in (item.deficiency_notes or "")

    async def test_missing_project(self, deps: _Deps, db: AsyncMock) -> None:
        deps.projects.get_by_id.return_value = None
        with pytest.raises(ProjectNotFoundError):
            await deps.service.create(
                db,
                build_user(),
                COICreate(project_id=uuid.uuid4(), subcontractor_id=uuid.uuid4()),
            )
        db.commit.assert_not_awaited()


class TestBrokerInfo:
    async def test_sets_fields_and_emails_new_brokers(
        self, deps: _Deps, db: AsyncMock, mailer: LoggingMailer
    ) -> None:
        coi = _coi()
        deps.repo.get_by_id.return_value = coi
        deps.users.ensure_broker_account.return_value = BrokerProvision(
            email="jane@broker.com", created=True, password="Temp1234!abc"
        )
        body = BrokerInfoRequest(
            broker_type="GLOBAL", broker_name="Jane", broker_email="Jane@Broker.com"
        )

        result = await deps.service.update_broker_info(db, build_user(), coi.id, body)

        assert result.coi.status == "AWAITING_BROKER_UPLOAD"
        assert result.coi.broker_email == "jane@broker.com"
        assert result.coi.broker_type == "GLOBAL"
        assert [a.email for a in result.broker_accounts] == ["jane@broker.com"]
        assert len(mailer.outbox) == 1
        assert "Temp1234!abc" in mailer.outbox[0].html

    async def test_existing_broker_gets_no_email(
        self, deps: _Deps, db: AsyncMock, mailer: LoggingMailer
    ) -> None:
        coi = _coi()
        deps.repo.get_by_id.return_value = coi
        deps.users.ensure_broker_account.return_value = BrokerProvision(
            email="jane@broker.com", created=False
        )
        body = BrokerInfoRequest(
            broker_type="GLOBAL", broker_name="Jane", broker_email="jane@broker.com"
        )
        await deps.service.update_broker_info(db, build_user(), coi.id, body)
        assert len(mailer.outbox) == 0

    async def test_wrong_status(self, deps: _Deps, db: AsyncMock) -> None:
        deps.repo.get_by_id.return_value = _coi("ACTIVE")
        body = BrokerInfoRequest(
            broker_type="GLOBAL", broker_name="Jane", broker_email="jane@broker.com"
        )
        with pytest.raises(InvalidCOITransitionError):
            await deps.service.update_broker_info(db, build_user(), uuid.uuid4(), body)


class TestUpload:
    async def test_first_coi_flag(self, deps: _Deps, db: AsyncMock) -> None:
        coi = _coi("AWAITING_BROKER_UPLOAD")
        deps.repo.get_by_id.return_value = coi
        body = UploadPoliciesRequest(
            gl_policy_url="https://files.example.com/gl.pdf",
            first_coi_url="https://files.example.com/acord.pdf",
        )
        item = await deps.service.upload_policies(db, build_user("BROKER"), coi.id, body)
        assert item.status == "AWAITING_BROKER_SIGNATURE"
        assert item.first_coi_uploaded is True


class TestReview:
    async def test_approve_generates_hold_harmless(self, deps: _Deps, db: AsyncMock) -> None:
        coi = _coi("AWAITING_ADMIN_REVIEW")
        deps.repo.get_by_id.return_value = coi

        item = await deps.service.review(
            db, build_user(), coi.id, ReviewCOIRequest(approved=True)
        )

        assert item.status == "ACTIVE"
        deps.hold_harmless.generate_for_coi.assert_awaited_once_with(db, coi.id)
        db.flush.assert_awaited_once()
        db.commit.assert_awaited_once()
        db.rollback.assert_not_awaited()

    async def test_approve_rolls_back_when_generation_fails(
        self, deps: _Deps, db: AsyncMock
    ) -> None:
        coi = _coi("AWAITING_ADMIN_REVIEW")
        deps.repo.get_by_id.return_value = coi
        deps.hold_harmless.generate_for_coi.side_effect = HoldHarmlessTemplateMissingError(
            "Program A"
        )

        with pytest.raises(HoldHarmlessGenerationFailedError) as exc_info:
            await deps.service.review(
                db,
                build_user(),
                coi.id,
                ReviewCOIRequest(approved=True, deficiency_notes="Looks good"),
            )

        assert "Program A" in exc_info.value.message
        db.rollback.assert_awaited_once()
        assert coi.status == "AWAITING_ADMIN_REVIEW"
        assert coi.deficiency_notes == f"Looks good\n\n{ROLLBACK_NOTE}"
        deps.audit.log.assert_not_awaited()

    async def test_reject(self, deps: _Deps, db: AsyncMock) -> None:
        coi = _coi("AWAITING_ADMIN_REVIEW")
        deps.repo.get_by_id.return_value = coi
        item = await deps.service.review(
            db,
            build_user(),
            coi.id,
            ReviewCOIRequest(approved=False, deficiency_notes="GL limit too low"),
        )
        assert item.status == "DEFICIENCY_PENDING"
        assert item.deficiency_notes == "GL limit too low"
        deps.hold_harmless.generate_for_coi.assert_not_awaited()

    async def test_review_before_signature_rejected(self, deps: _Deps, db: AsyncMock) -> None:
        deps.repo.get_by_id.return_value = _coi("AWAITING_BROKER_SIGNATURE")
        with pytest.raises(InvalidCOITransitionError):
            await deps.service.review(
                db, build_user(), uuid.uuid4(), ReviewCOIRequest(approved=True)
            )

    async def test_not_found(self, deps: _Deps, db: AsyncMock) -> None:
        deps.repo.get_by_id.return_value = None
        with pytest.raises(COINotFoundError):
            await deps.service.review(
                db, build_user(), uuid.uuid4(), ReviewCOIRequest(approved=True)
            )


class TestRenewAndResubmit:
    async def test_renew_creates_new_row(self, deps: _Deps, db: AsyncMock) -> None:
        old = _coi("EXPIRED", broker_type="GLOBAL", broker_email="jane@broker.com")
        deps.repo.get_by_id.return_value = old
        item = await deps.service.renew(db, build_user(), old.id)
        assert item.id != old.id
        assert item.status == "AWAITING_BROKER_UPLOAD"
        assert item.broker_email == "jane@broker.com"
        assert old.status == "EXPIRED"

    async def test_resubmit_clears_notes(self, deps: _Deps, db: AsyncMock) -> None:
        coi = _coi("DEFICIENCY_PENDING", deficiency_notes="fix GL")
        deps.repo.get_by_id.return_value = coi
        item = await deps.service.resubmit(db, build_user("BROKER"), coi.id)
        assert item.status == "AWAITING_BROKER_UPLOAD"
        assert item.deficiency_notes is None


class TestExpire:
    async def test_expires_lapsed(self, deps: _Deps, db: AsyncMock) -> None:
        lapsed = [_coi("ACTIVE"), _coi("ACTIVE")]
        deps.repo.list_lapsed.return_value = lapsed
        assert await deps.service.expire_lapsed_cois(db, date(2026, 5, 1)) == 2
        assert all(c.status == "EXPIRED" for c in lapsed)
        db.commit.assert_awaited_once()


def test_rollback_notes_without_reviewer_notes() -> None:
    assert rollback_notes(None) == ROLLBACK_NOTE
