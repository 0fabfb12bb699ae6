"""Unit tests for HoldHarmlessService generation and signing."""

import uuid
from typing import Any
from unittest.mock import AsyncMock

import pytest

from src.cp_coi.infrastructure.db_models import GeneratedCOIModel
from src.cp_common.errors import (
    EmailDeliveryError,
    HoldHarmlessInvalidStateError,
    HoldHarmlessNotFoundError,
    HoldHarmlessTemplateMissingError,
)
from src.cp_contractors.infrastructure.db_models import ContractorModel
from src.cp_hold_harmless.application.schemas import GCSignRequest, SubcontractorSignRequest
from src.cp_hold_harmless.application.service import HoldHarmlessService
from src.cp_hold_harmless.infrastructure.db_models import HoldHarmlessModel
from src.cp_notifications.infrastructure.mailer import LoggingMailer
from src.cp_programs.infrastructure.db_models import ProgramModel
from src.cp_projects.infrastructure.db_models import ProjectModel
from tests.factories import assign_id


def _agreement(status: str, **kwargs: Any) -> HoldHarmlessModel:
    agreement = HoldHarmlessModel(
        coi_id=uuid.uuid4(),
        status=status,
        additional_insureds=[],
        notifications_sent=[],
        subcontractor_email="sub@example.com",
        gc_email="gc@example.com",
        **kwargs,
    )
    agreement.id = uuid.uuid4()
    return agreement


class _FailingMailer:
    async def send(self, to: str, subject: str, html: str) -> bool:
        return False


class _Deps:
    def __init__(self, mailer: Any) -> None:
        self.repo = AsyncMock()
        self.repo.add.side_effect = assign_id
        self.repo.get_by_coi.return_value = None
        self.cois = AsyncMock()
        self.projects = AsyncMock()
        self.programs = AsyncMock()
        self.contractors = AsyncMock()
        self.service = HoldHarmlessService(
            repo=self.repo,
            coi_repo=self.cois,
            project_repo=self.projects,
            program_repo=self.programs,
            contractor_repo=self.contractors,
            mailer=mailer,
        )

    def seed(
        self, requires: bool = True, template: str | None = "https://t.example.com/hh.pdf"
    ) -> GeneratedCOIModel:
        coi = GeneratedCOIModel(
            project_id=uuid.uuid4(), subcontractor_id=uuid.uuid4(), status="ACTIVE"
        )
        coi.id = uuid.uuid4()
        project = ProjectModel(
            name="Harbor Tower",
            address="1 Harbor Way",
            gc_name="BuildCo",
            entity="Harbor Owner LLC",
            contact_email="gc@buildco.com",
        )
        project.id = coi.project_id
        program = ProgramModel(
            name="Standard", requires_hold_harmless=requires, hold_harmless_template_url=template
        )
        program.id = uuid.uuid4()
        sub = ContractorModel(name="Sparks Electric", email="sparks@example.com")
        sub.id = coi.subcontractor_id
        self.cois.get_by_id.return_value = coi
        self.projects.get_by_id.return_value = project
        self.programs.first_program_for_project.return_value = program
        self.contractors.get_by_id.return_value = sub
        return coi


@pytest.fixture
def deps(mailer: LoggingMailer) -> _Deps:
    return _Deps(mailer)


class TestGenerate:
    async def test_generates_and_emails_subcontractor(
        self, deps: _Deps, mailer: LoggingMailer
    ) -> None:
        coi = deps.seed()
        agreement = await deps.service.generate_for_coi(AsyncMock(), coi.id)

        assert agreement is not None
        assert agreement.status == "PENDING_SUB_SIGNATURE"
        assert agreement.gc_name == "BuildCo"
        assert agreement.gc_email == "gc@buildco.com"
        assert agreement.additional_insureds == ["BuildCo", "Harbor Owner LLC"]
        assert len(agreement.sub_signature_token) == 64
        assert agreement.sub_signature_link_sent_at is not None
        assert coi.hold_harmless_status == "PENDING_SUB_SIGNATURE"
        assert mailer.outbox[0].to == "sparks@example.com"
        assert f"/subcontractor/hold-harmless/{agreement.id}" in mailer.outbox[0].html

    async def test_not_required(self, deps: _Deps, mailer: LoggingMailer) -> None:
        coi = deps.seed(requires=False)
        assert await deps.service.generate_for_coi(AsyncMock(), coi.id) is None
        deps.repo.add.assert_not_awaited()
        assert coi.hold_harmless_status is None

    async def test_missing_template_raises(self, deps: _Deps) -> None:
        coi = deps.seed(template=None)
        with pytest.raises(HoldHarmlessTemplateMissingError):
            await deps.service.generate_for_coi(AsyncMock(), coi.id)

    async def test_existing_agreement_returned(self, deps: _Deps) -> None:
        coi = deps.seed()
        existing = _agreement("PENDING_SUB_SIGNATURE")
        deps.repo.get_by_coi.return_value = existing
        assert await deps.service.generate_for_coi(AsyncMock(), coi.id) is existing
        deps.repo.add.assert_not_awaited()

    async def test_undelivered_email_raises(self) -> None:
        deps = _Deps(_FailingMailer())
        coi = deps.seed()
        with pytest.raises(EmailDeliveryError):
            await deps.service.generate_for_coi(AsyncMock(), coi.id)


class TestSigning:
    async def test_subcontractor_signs(self, deps: _Deps, mailer: LoggingMailer) -> None:
        agreement = _agreement("PENDING_SUB_SIGNATURE")
        coi = GeneratedCOIModel(status="ACTIVE")
        deps.repo.get_by_id.return_value = agreement
        deps.cois.get_by_id.return_value = coi
        db = AsyncMock()

        item = await deps.service.sign_subcontractor(
            db,
            agreement.id,
            SubcontractorSignRequest(
                signature_url="https://files.example.com/sub.png", signed_by="Sam Sub"
            ),
        )

        assert item.status == "PENDING_GC_SIGNATURE"
        assert item.sub_signed_by == "Sam Sub"
        assert len(agreement.gc_signature_token) == 64
        assert coi.hold_harmless_status == "PENDING_GC_SIGNATURE"
        assert mailer.outbox[0].to == "gc@example.com"
        db.commit.assert_awaited_once()

    async def test_gc_cannot_sign_first(self, deps: _Deps) -> None:
        deps.repo.get_by_id.return_value = _agreement("PENDING_SUB_SIGNATURE")
        with pytest.raises(HoldHarmlessInvalidStateError):
            await deps.service.sign_gc(
                AsyncMock(),
                uuid.uuid4(),
                GCSignRequest(
                    signature_url="https://files.example.com/gc.png",
                    signed_by="Gina GC",
                    final_doc_url="https://files.example.com/final.pdf",
                ),
            )

    async def test_gc_signs_and_completes(self, deps: _Deps, mailer: LoggingMailer) -> None:
        agreement = _agreement("PENDING_GC_SIGNATURE")
        coi = GeneratedCOIModel(status="ACTIVE")
        deps.repo.get_by_id.return_value = agreement
        deps.cois.get_by_id.return_value = coi

        item = await deps.service.sign_gc(
            AsyncMock(),
            agreement.id,
            GCSignRequest(
                signature_url="https://files.example.com/gc.png",
                signed_by="Gina GC",
                final_doc_url="https://files.example.com/final.pdf",
            ),
        )

        assert item.status == "COMPLETED"
        assert item.completed_at is not None
        assert coi.hold_harmless_status == "COMPLETED"
        assert coi.hold_harmless_document_url == "https://files.example.com/final.pdf"
        assert {m.to for m in mailer.outbox} == {"sub@example.com", "gc@example.com"}
        assert item.notifications_sent == ["sub@example.com", "gc@example.com"]

    async def test_subcontractor_cannot_sign_twice(self, deps: _Deps) -> None:
        deps.repo.get_by_id.return_value = _agreement("PENDING_GC_SIGNATURE")
        with pytest.raises(HoldHarmlessInvalidStateError):
            await deps.service.sign_subcontractor(
                AsyncMock(),
                uuid.uuid4(),
                SubcontractorSignRequest(
                    signature_url="https://files.example.com/sub.png", signed_by="Sam"
                ),
            )


class TestQueries:
    async def test_token_lookup_identifies_party(self, deps: _Deps) -> None:
        agreement = _agreement(
            "PENDING_GC_SIGNATURE", sub_signature_token="a" * 64, gc_signature_token="b" * 64
        )
        deps.repo.get_by_token.return_value = agreement

        sub_view = await deps.service.get_by_token(AsyncMock(), "a" * 64)
        gc_view = await deps.service.get_by_token(AsyncMock(), "b" * 64)

        assert sub_view.signing_party == "SUBCONTRACTOR"
        assert sub_view.can_sign is False
        assert gc_view.signing_party == "GC"
        assert gc_view.can_sign is True

    async def test_unknown_token(self, deps: _Deps) -> None:
        deps.repo.get_by_token.return_value = None
        with pytest.raises(HoldHarmlessNotFoundError):
            await deps.service.get_by_token(AsyncMock(), "c" * 64)

    async def test_stats(self, deps: _Deps) -> None:
        deps.repo.count_by_status.return_value = {
            "PENDING_SUB_SIGNATURE": 2,
            "PENDING_GC_SIGNATURE": 1,
            "COMPLETED": 4,
        }
        stats = await deps.service.stats(AsyncMock())
        assert stats.total == 7
        assert stats.pending_total == 3
        assert stats.rejected == 0

    async def test_pending_filter(self, deps: _Deps) -> None:
        deps.repo.list_agreements.return_value = []
        await deps.service.list_agreements(AsyncMock(), pending_signature=True)
        statuses = deps.repo.list_agreements.await_args.args[1]
        assert statuses == ["PENDING_SUB_SIGNATURE", "PENDING_GC_SIGNATURE"]
